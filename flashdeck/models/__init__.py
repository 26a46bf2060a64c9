from flashdeck.models.deck import Deck
from flashdeck.models.flashcard import Flashcard

__all__ = ["Deck", "Flashcard"]
