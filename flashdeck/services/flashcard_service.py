import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.config import get_settings
from flashdeck.core.exceptions import NotFoundError
from flashdeck.db.utils import commit_or_raise
from flashdeck.models import Deck, Flashcard
from flashdeck.services.media_service import MediaStore
from flashdeck.utils.validation import is_blank, require_text, validate_image_upload

logger = logging.getLogger(__name__)


async def list_flashcards(
    db: AsyncSession, deck_id: str, categories: Optional[Iterable[str]] = None
) -> list[Flashcard]:
    """Flashcards of a deck, newest first.

    When categories is non-empty only cards whose category is one of them are
    returned. An unknown deck simply has no flashcards.
    """
    stmt = select(Flashcard).where(Flashcard.deck_id == deck_id)
    wanted = [c for c in (categories or []) if not is_blank(c)]
    if wanted:
        stmt = stmt.where(Flashcard.category.in_(wanted))
    stmt = stmt.order_by(Flashcard.created_at.desc())

    result = await db.scalars(stmt)
    return list(result)


async def list_flashcards_by_category(db: AsyncSession, deck_id: str, category: str) -> list[Flashcard]:
    return await list_flashcards(db, deck_id, [category])


async def create_flashcard(
    db: AsyncSession,
    deck_id: Optional[str],
    question: Optional[str],
    answer: Optional[str],
    category: Optional[str] = None,
    hint: Optional[str] = None,
) -> Flashcard:
    require_text(deck_id, question, answer, message="Deck ID, question, and answer are required")

    deck = await db.get(Deck, deck_id)
    if not deck:
        raise NotFoundError("Deck not found")

    card = Flashcard(
        deck_id=deck.id,
        question=question,
        answer=answer,
        category=category or "",
        hint=hint or "",
    )
    db.add(card)
    await commit_or_raise(db, "create flashcard")
    await db.refresh(card)
    return card


async def get_flashcard(db: AsyncSession, flashcard_id: str) -> Flashcard:
    card = await db.get(Flashcard, flashcard_id)
    if not card:
        raise NotFoundError("Flashcard not found")
    return card


async def update_flashcard(
    db: AsyncSession,
    flashcard_id: str,
    question: Optional[str],
    answer: Optional[str],
    category: Optional[str] = None,
    hint: Optional[str] = None,
) -> Flashcard:
    """Overwrite the text fields of a flashcard. The image is left alone."""
    require_text(question, answer, message="Question and answer are required")

    card = await get_flashcard(db, flashcard_id)
    card.question = question
    card.answer = answer
    card.category = category or ""
    card.hint = hint or ""
    await commit_or_raise(db, "update flashcard")
    await db.refresh(card)
    return card


async def delete_flashcard(db: AsyncSession, media: MediaStore, flashcard_id: str) -> None:
    card = await get_flashcard(db, flashcard_id)
    if card.image:
        media.delete(card.image)

    await db.delete(card)
    await commit_or_raise(db, "delete flashcard")
    logger.info(f"Deleted flashcard {flashcard_id}")


# ---------- Images ----------

async def set_flashcard_image(
    db: AsyncSession,
    media: MediaStore,
    flashcard_id: str,
    content: bytes,
    content_type: Optional[str],
    filename: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> Flashcard:
    """Replace the flashcard's image with new bytes.

    The previous file is deleted before the new one is written, so a crash
    between the two can leave the row pointing at a missing file.
    """
    card = await get_flashcard(db, flashcard_id)
    if max_bytes is None:
        max_bytes = get_settings().max_image_bytes
    validate_image_upload(content_type, len(content), max_bytes)

    if card.image:
        media.delete(card.image)

    card.image = media.save(content, filename)
    await commit_or_raise(db, "update flashcard image")
    await db.refresh(card)

    logger.info(f"Attached image {card.image} to flashcard {flashcard_id}")
    return card


async def remove_flashcard_image(db: AsyncSession, media: MediaStore, flashcard_id: str) -> Flashcard:
    card = await get_flashcard(db, flashcard_id)
    if not card.image:
        return card

    media.delete(card.image)
    card.image = None
    await commit_or_raise(db, "remove flashcard image")
    await db.refresh(card)

    logger.info(f"Removed image from flashcard {flashcard_id}")
    return card
