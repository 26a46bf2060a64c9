"""
Study session state machine.

A session walks once through a shuffled copy of a deck's flashcards:

    LOADING -> READY(index, revealed, hint_shown) -> FINISHED
    LOADING -> ERROR

The cards are fetched once on load. Moving to another card always hides the
answer and the hint again.
"""

import enum
import logging
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from flashdeck.core.exceptions import StudySessionError

logger = logging.getLogger(__name__)

Card = Dict[str, Any]
CardFetcher = Callable[[str, Optional[Sequence[str]]], Awaitable[List[Card]]]

LOAD_FAILED_MESSAGE = "Failed to load flashcards. Please try again."
EMPTY_DECK_MESSAGE = "No flashcards available in this deck."
EMPTY_CATEGORIES_MESSAGE = "No flashcards found in the selected categories."


class SessionState(str, enum.Enum):
    LOADING = "loading"
    READY = "ready"
    FINISHED = "finished"
    ERROR = "error"


class StudySession:
    def __init__(
        self,
        deck_id: str,
        fetch_cards: CardFetcher,
        categories: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.deck_id = deck_id
        self.categories = [c for c in (categories or []) if c]
        self._fetch_cards = fetch_cards
        self._rng = rng or random.Random()

        self.state = SessionState.LOADING
        self.cards: List[Card] = []
        self.index = 0
        self.revealed = False
        self.hint_shown = False
        self.error: Optional[str] = None
        self.completed_total: Optional[int] = None

    @classmethod
    def from_client(cls, client, deck_id: str, categories: Optional[Sequence[str]] = None, **kwargs):
        """Build a session that fetches through a FlashcardAPIClient."""
        return cls(deck_id, client.list_flashcards, categories=categories, **kwargs)

    async def load(self) -> SessionState:
        self.state = SessionState.LOADING
        self.error = None
        self.completed_total = None
        self._reset_card_flags()
        self.index = 0

        try:
            cards = await self._fetch_cards(self.deck_id, self.categories or None)
        except Exception as e:
            logger.error(f"Failed to load flashcards for deck {self.deck_id}: {e}")
            self.cards = []
            self.error = LOAD_FAILED_MESSAGE
            self.state = SessionState.ERROR
            return self.state

        if not cards:
            self.cards = []
            self.error = EMPTY_CATEGORIES_MESSAGE if self.categories else EMPTY_DECK_MESSAGE
            self.state = SessionState.ERROR
            return self.state

        self.cards = list(cards)
        self._rng.shuffle(self.cards)
        self.state = SessionState.READY
        logger.info(f"Study session ready for deck {self.deck_id}: {len(self.cards)} cards")
        return self.state

    async def retry(self) -> SessionState:
        """Reload after an error, or study the deck again once finished."""
        if self.state not in (SessionState.ERROR, SessionState.FINISHED):
            raise StudySessionError(f"Cannot retry a session that is {self.state.value}")
        return await self.load()

    # ---------- Card state ----------

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def current_card(self) -> Optional[Card]:
        if self.state is not SessionState.READY:
            return None
        return self.cards[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.cards) - 1

    @property
    def progress(self) -> Tuple[int, int]:
        """1-based position of the current card and the number of cards."""
        return self.index + 1, len(self.cards)

    @property
    def can_show_hint(self) -> bool:
        card = self.current_card
        return bool(card and card.get("hint")) and not self.revealed and not self.hint_shown

    def reveal(self) -> None:
        self._require_ready("reveal")
        self.revealed = True

    def show_hint(self) -> bool:
        """Show the hint. Does nothing once the answer is revealed."""
        self._require_ready("show a hint")
        if self.revealed:
            return False
        self.hint_shown = True
        return True

    # ---------- Navigation ----------

    def next(self) -> SessionState:
        self._require_ready("move to the next card")
        self._reset_card_flags()
        if not self.is_last:
            self.index += 1
        else:
            self.completed_total = len(self.cards)
            self.state = SessionState.FINISHED
            logger.info(f"Study session complete for deck {self.deck_id}: {self.completed_total} cards")
        return self.state

    def previous(self) -> SessionState:
        self._require_ready("move to the previous card")
        if self.index > 0:
            self.index -= 1
            self._reset_card_flags()
        return self.state

    def _reset_card_flags(self) -> None:
        self.revealed = False
        self.hint_shown = False

    def _require_ready(self, action: str) -> None:
        if self.state is not SessionState.READY:
            raise StudySessionError(f"Cannot {action} while the session is {self.state.value}")
