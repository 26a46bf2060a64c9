"""
Deck export and import.

An export is a self-contained JSON document holding the deck's name,
description and creation time plus a snapshot of every flashcard's text
fields. Images are not exported. Importing always creates a new deck.
"""

import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import ValidationError
from flashdeck.db.utils import commit_or_raise
from flashdeck.models import Deck, Flashcard
from flashdeck.schemas.transfer import (
    EXPORT_FORMAT_VERSION,
    DeckExport,
    DeckImportRequest,
    ExportedDeck,
    ExportedFlashcard,
)
from flashdeck.services import deck_service
from flashdeck.utils.validation import is_blank

logger = logging.getLogger(__name__)


async def export_deck(db: AsyncSession, deck_id: str) -> DeckExport:
    deck = await deck_service.get_deck(db, deck_id)

    result = await db.scalars(
        select(Flashcard)
        .where(Flashcard.deck_id == deck.id)
        .order_by(Flashcard.created_at.asc())
    )
    cards = [
        ExportedFlashcard(
            question=card.question,
            answer=card.answer,
            category=card.category or "",
            hint=card.hint or "",
            created_at=card.created_at,
        )
        for card in result
    ]

    logger.info(f"Exported deck {deck.id} with {len(cards)} flashcards")
    return DeckExport(
        deck=ExportedDeck(name=deck.name, description=deck.description or "", created_at=deck.created_at),
        flashcards=cards,
        export_date=datetime.now(timezone.utc),
        version=EXPORT_FORMAT_VERSION,
    )


def export_filename(deck_name: str) -> str:
    """Download name for an export: whitespace runs become underscores."""
    safe_name = re.sub(r"\s+", "_", deck_name.strip()) or "deck"
    safe_name = safe_name.replace('"', "").replace("/", "_").replace("\\", "_")
    return f"{safe_name}_{int(time.time() * 1000)}.json"


def parse_import_payload(payload: Union[DeckImportRequest, Mapping[str, Any]]) -> DeckImportRequest:
    if isinstance(payload, DeckImportRequest):
        return payload
    try:
        return DeckImportRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid deck data: {e.error_count()} invalid field(s)") from e


async def import_deck(db: AsyncSession, payload: Union[DeckImportRequest, Mapping[str, Any]]) -> Deck:
    """Create a fresh deck from an import payload and bulk-insert its cards.

    The deck is committed before the flashcards. If the flashcard insert
    fails the deck stays behind and StorageError is raised.
    """
    request = parse_import_payload(payload)

    if request.deck_data is None or is_blank(request.deck_data.name):
        raise ValidationError("Invalid deck data")

    cards_data = request.flashcards_data or []
    for position, card in enumerate(cards_data):
        if is_blank(card.question) or is_blank(card.answer):
            raise ValidationError(f"Flashcard {position + 1} is missing a question or answer")

    deck = await deck_service.create_deck(db, request.deck_data.name, request.deck_data.description)

    if cards_data:
        db.add_all(
            [
                Flashcard(
                    deck_id=deck.id,
                    question=card.question,
                    answer=card.answer,
                    category=card.category or "",
                    hint=card.hint or "",
                )
                for card in cards_data
            ]
        )
        await commit_or_raise(db, "import flashcards")

    deck.card_count = await deck_service.count_cards(db, deck.id)
    logger.info(f"Imported deck {deck.id} ({deck.name!r}) with {deck.card_count} flashcards")
    return deck
