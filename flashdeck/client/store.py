"""Reducer-style application state shared by the client views."""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

SET_LOADING = "SET_LOADING"
SET_DECKS = "SET_DECKS"
SET_CURRENT_DECK = "SET_CURRENT_DECK"
SET_FLASHCARDS = "SET_FLASHCARDS"
ADD_DECK = "ADD_DECK"
ADD_FLASHCARD = "ADD_FLASHCARD"
DELETE_DECK = "DELETE_DECK"
DELETE_FLASHCARD = "DELETE_FLASHCARD"

ACTION_TYPES = frozenset(
    {
        SET_LOADING,
        SET_DECKS,
        SET_CURRENT_DECK,
        SET_FLASHCARDS,
        ADD_DECK,
        ADD_FLASHCARD,
        DELETE_DECK,
        DELETE_FLASHCARD,
    }
)


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


@dataclass(frozen=True)
class AppState:
    decks: List[Record] = field(default_factory=list)
    current_deck: Optional[Record] = None
    flashcards: List[Record] = field(default_factory=list)
    loading: bool = False


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state after applying action; state itself is never mutated."""
    if action.type == SET_LOADING:
        return replace(state, loading=bool(action.payload))
    if action.type == SET_DECKS:
        return replace(state, decks=list(action.payload))
    if action.type == SET_CURRENT_DECK:
        return replace(state, current_deck=action.payload)
    if action.type == SET_FLASHCARDS:
        return replace(state, flashcards=list(action.payload))
    if action.type == ADD_DECK:
        return replace(state, decks=[*state.decks, action.payload])
    if action.type == ADD_FLASHCARD:
        return replace(state, flashcards=[*state.flashcards, action.payload])
    if action.type == DELETE_DECK:
        return replace(state, decks=[d for d in state.decks if d.get("id") != action.payload])
    if action.type == DELETE_FLASHCARD:
        return replace(state, flashcards=[c for c in state.flashcards if c.get("id") != action.payload])
    return state


class AppStore:
    """Holds the current AppState; hand one instance to every view that needs it."""

    def __init__(self, initial: Optional[AppState] = None):
        self.state = initial or AppState()
        self._listeners: List[Callable[[AppState], None]] = []

    def dispatch(self, action_type: str, payload: Any = None) -> AppState:
        if action_type not in ACTION_TYPES:
            logger.warning(f"Ignoring unknown action {action_type!r}")
        self.state = reduce(self.state, Action(action_type, payload))
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
