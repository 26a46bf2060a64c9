from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from flashdeck.api.deps import DBSessionDep, MediaStoreDep
from flashdeck.schemas.deck import DeckCreate, DeckRead, MessageResponse
from flashdeck.schemas.flashcard import FlashcardRead
from flashdeck.schemas.transfer import DeckImportRequest
from flashdeck.services import deck_service, flashcard_service, transfer_service

router = APIRouter(prefix="/decks", tags=["decks"])

# ---------- Decks ----------

@router.get("", response_model=list[DeckRead])
async def list_decks(db: DBSessionDep):
    return await deck_service.list_decks(db)


@router.post("", response_model=DeckRead, status_code=status.HTTP_201_CREATED)
async def create_deck(data: DeckCreate, db: DBSessionDep):
    return await deck_service.create_deck(db, data.name, data.description)


@router.post("/import", response_model=DeckRead, status_code=status.HTTP_201_CREATED)
async def import_deck(data: DeckImportRequest, db: DBSessionDep):
    return await transfer_service.import_deck(db, data)


@router.get("/{deck_id}", response_model=DeckRead)
async def get_deck(deck_id: str, db: DBSessionDep):
    return await deck_service.get_deck(db, deck_id)


@router.delete("/{deck_id}", response_model=MessageResponse)
async def delete_deck(deck_id: str, db: DBSessionDep, media: MediaStoreDep):
    await deck_service.delete_deck(db, media, deck_id)
    return MessageResponse(message="Deck deleted successfully")


@router.get("/{deck_id}/export")
async def export_deck(deck_id: str, db: DBSessionDep):
    """Export a deck as a downloadable JSON document."""
    document = await transfer_service.export_deck(db, deck_id)
    filename = transfer_service.export_filename(document.deck.name)
    return Response(
        content=document.model_dump_json(indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

# ---------- Flashcards & categories of a deck ----------

@router.get("/{deck_id}/flashcards", response_model=list[FlashcardRead])
async def list_deck_flashcards(
    deck_id: str,
    db: DBSessionDep,
    categories: Optional[List[str]] = Query(None, description="Only cards in these categories"),
):
    return await flashcard_service.list_flashcards(db, deck_id, categories)


@router.get("/{deck_id}/flashcards/category/{category:path}", response_model=list[FlashcardRead])
async def list_deck_flashcards_by_category(deck_id: str, category: str, db: DBSessionDep):
    return await flashcard_service.list_flashcards_by_category(db, deck_id, category)


@router.get("/{deck_id}/categories")
async def list_deck_categories(
    deck_id: str,
    db: DBSessionDep,
    counts: bool = Query(False, description="Return {name, count} objects instead of names"),
):
    """Distinct non-empty categories, most used first."""
    facets = await deck_service.list_categories(db, deck_id)
    if counts:
        return [facet.model_dump() for facet in facets]
    return [facet.name for facet in facets]
