from flashdeck.schemas.deck import CategoryCount, DeckCreate, DeckRead, MessageResponse
from flashdeck.schemas.flashcard import FlashcardCreate, FlashcardRead, FlashcardUpdate
from flashdeck.schemas.transfer import (
    EXPORT_FORMAT_VERSION,
    DeckExport,
    DeckImportData,
    DeckImportRequest,
    ExportedDeck,
    ExportedFlashcard,
    FlashcardImportData,
)

__all__ = [
    "CategoryCount",
    "DeckCreate",
    "DeckRead",
    "MessageResponse",
    "FlashcardCreate",
    "FlashcardRead",
    "FlashcardUpdate",
    "EXPORT_FORMAT_VERSION",
    "DeckExport",
    "DeckImportData",
    "DeckImportRequest",
    "ExportedDeck",
    "ExportedFlashcard",
    "FlashcardImportData",
]
