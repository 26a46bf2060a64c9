"""Async HTTP client for the flashdeck REST API."""
import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from flashdeck.core.exceptions import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        message = body["error"]
    else:
        message = response.text or response.reason_phrase

    logger.error(f"{response.request.method} {response.request.url} failed: {response.status_code} {message}")
    if response.status_code == 400:
        raise ValidationError(message)
    if response.status_code == 404:
        raise NotFoundError(message)
    raise StorageError(message)


class FlashcardAPIClient:
    """Thin wrapper over httpx.AsyncClient, one method per REST resource.

    Pass ``transport`` to talk to an in-process app (e.g. httpx.ASGITransport).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "FlashcardAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._client.request(method, url, **kwargs)
        _raise_for_status(response)
        return response.json()

    # ---------- Decks ----------

    async def list_decks(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/decks")

    async def create_deck(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("POST", "/decks", json={"name": name, "description": description})

    async def get_deck(self, deck_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/decks/{deck_id}")

    async def delete_deck(self, deck_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/decks/{deck_id}")

    async def export_deck(self, deck_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/decks/{deck_id}/export")

    async def import_deck(self, export_document: Dict[str, Any]) -> Dict[str, Any]:
        """Import a document produced by export_deck."""
        body = {
            "deckData": export_document.get("deck"),
            "flashcardsData": export_document.get("flashcards", []),
        }
        return await self._request("POST", "/decks/import", json=body)

    # ---------- Flashcards ----------

    async def list_flashcards(
        self, deck_id: str, categories: Optional[Sequence[str]] = None
    ) -> List[Dict[str, Any]]:
        params = {"categories": list(categories)} if categories else None
        return await self._request("GET", f"/decks/{deck_id}/flashcards", params=params)

    async def list_flashcards_by_category(self, deck_id: str, category: str) -> List[Dict[str, Any]]:
        # Encode "/", "?" and "#" so the whole name stays one path segment.
        encoded = quote(category, safe="")
        return await self._request("GET", f"/decks/{deck_id}/flashcards/category/{encoded}")

    async def list_categories(self, deck_id: str, counts: bool = False) -> List[Any]:
        params = {"counts": "true"} if counts else None
        return await self._request("GET", f"/decks/{deck_id}/categories", params=params)

    async def create_flashcard(
        self,
        deck_id: str,
        question: str,
        answer: str,
        category: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"deck_id": deck_id, "question": question, "answer": answer, "category": category, "hint": hint}
        return await self._request("POST", "/flashcards", json=payload)

    async def get_flashcard(self, flashcard_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/flashcards/{flashcard_id}")

    async def update_flashcard(
        self,
        flashcard_id: str,
        question: str,
        answer: str,
        category: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"question": question, "answer": answer, "category": category, "hint": hint}
        return await self._request("PUT", f"/flashcards/{flashcard_id}", json=payload)

    async def delete_flashcard(self, flashcard_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/flashcards/{flashcard_id}")

    # ---------- Images ----------

    async def upload_image(
        self, flashcard_id: str, content: bytes, filename: str, content_type: str
    ) -> Dict[str, Any]:
        files = {"image": (filename, content, content_type)}
        return await self._request("POST", f"/flashcards/{flashcard_id}/image", files=files)

    async def remove_image(self, flashcard_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/flashcards/{flashcard_id}/image")

    @staticmethod
    def image_path(flashcard: Dict[str, Any]) -> Optional[str]:
        """Path of the card's image relative to the API base, or None."""
        return f"/uploads/{flashcard['image']}" if flashcard.get("image") else None
