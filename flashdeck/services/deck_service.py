import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import NotFoundError
from flashdeck.db.utils import commit_or_raise
from flashdeck.models import Deck, Flashcard
from flashdeck.schemas.deck import CategoryCount
from flashdeck.services.media_service import MediaStore
from flashdeck.utils.validation import require_text

logger = logging.getLogger(__name__)


async def count_cards(db: AsyncSession, deck_id: str) -> int:
    stmt = select(func.count(Flashcard.id)).where(Flashcard.deck_id == deck_id)
    return await db.scalar(stmt) or 0


# ---------- Decks ----------

async def list_decks(db: AsyncSession) -> list[Deck]:
    """All decks, newest first, each annotated with its live card count."""
    counts = (
        select(Flashcard.deck_id, func.count(Flashcard.id).label("card_count"))
        .group_by(Flashcard.deck_id)
        .subquery()
    )
    stmt = (
        select(Deck, func.coalesce(counts.c.card_count, 0))
        .outerjoin(counts, counts.c.deck_id == Deck.id)
        .order_by(Deck.created_at.desc())
    )
    result = await db.execute(stmt)

    decks = []
    for deck, card_count in result.all():
        deck.card_count = card_count
        decks.append(deck)
    return decks


async def create_deck(db: AsyncSession, name: Optional[str], description: Optional[str] = None) -> Deck:
    require_text(name, message="Deck name is required")

    deck = Deck(name=name, description=description or "")
    db.add(deck)
    await commit_or_raise(db, "create deck")
    await db.refresh(deck)

    deck.card_count = 0
    logger.info(f"Created deck {deck.id} ({deck.name!r})")
    return deck


async def _get_deck_or_404(db: AsyncSession, deck_id: str) -> Deck:
    deck = await db.get(Deck, deck_id)
    if not deck:
        raise NotFoundError("Deck not found")
    return deck


async def get_deck(db: AsyncSession, deck_id: str) -> Deck:
    deck = await _get_deck_or_404(db, deck_id)
    deck.card_count = await count_cards(db, deck.id)
    return deck


async def delete_deck(db: AsyncSession, media: MediaStore, deck_id: str) -> None:
    """Delete a deck, its flashcards and their image files, in that order.

    The flashcard rows and the deck row are removed in two separate commits.
    A failure between them leaves an empty deck behind, which is a valid state.
    """
    deck = await _get_deck_or_404(db, deck_id)

    result = await db.scalars(select(Flashcard).where(Flashcard.deck_id == deck.id))
    flashcards = list(result)

    removed_images = 0
    for card in flashcards:
        if card.image:
            if media.delete(card.image):
                removed_images += 1

    await db.execute(delete(Flashcard).where(Flashcard.deck_id == deck.id))
    await commit_or_raise(db, "delete flashcards")

    await db.delete(deck)
    await commit_or_raise(db, "delete deck")

    logger.info(
        f"Deleted deck {deck_id} with {len(flashcards)} flashcards and {removed_images} images"
    )


# ---------- Categories ----------

async def list_categories(db: AsyncSession, deck_id: str) -> list[CategoryCount]:
    """Distinct non-empty categories of a deck, most used first, then by name."""
    card_count = func.count(Flashcard.id).label("card_count")
    stmt = (
        select(Flashcard.category, card_count)
        .where(Flashcard.deck_id == deck_id, Flashcard.category != "", Flashcard.category.is_not(None))
        .group_by(Flashcard.category)
        .order_by(card_count.desc(), Flashcard.category.asc())
    )
    result = await db.execute(stmt)
    return [CategoryCount(name=row.category, count=row.card_count) for row in result.all()]
