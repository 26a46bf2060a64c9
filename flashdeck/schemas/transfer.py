"""Schemas for the deck export document and the import payload."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

EXPORT_FORMAT_VERSION = "1.0"


# ---------- Export ----------

class ExportedDeck(BaseModel):
    name: str
    description: Optional[str] = ""
    created_at: Optional[datetime] = None


class ExportedFlashcard(BaseModel):
    """Flashcard snapshot; the image is never exported"""
    question: str
    answer: str
    category: str = ""
    hint: str = ""
    created_at: Optional[datetime] = None


class DeckExport(BaseModel):
    deck: ExportedDeck
    flashcards: List[ExportedFlashcard] = []
    export_date: datetime
    version: str = EXPORT_FORMAT_VERSION


# ---------- Import ----------

class DeckImportData(BaseModel):
    # Ids and timestamps from the source document are ignored.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = None
    description: Optional[str] = None


class FlashcardImportData(BaseModel):
    # Hand-edited documents may carry numeric answers like 4.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    hint: Optional[str] = None


class DeckImportRequest(BaseModel):
    """Body of POST /decks/import"""
    model_config = ConfigDict(populate_by_name=True)

    deck_data: Optional[DeckImportData] = Field(default=None, alias="deckData")
    flashcards_data: Optional[List[FlashcardImportData]] = Field(default=None, alias="flashcardsData")
