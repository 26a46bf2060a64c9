from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DeckCreate(BaseModel):
    # Both optional here so a missing name is answered by the service's 400.
    name: Optional[str] = None
    description: Optional[str] = None


class DeckRead(BaseModel):
    """Deck with its live flashcard count"""
    id: str
    name: str
    description: Optional[str] = ""
    created_at: datetime
    card_count: int = 0

    class Config:
        from_attributes = True


class CategoryCount(BaseModel):
    name: str
    count: int


class MessageResponse(BaseModel):
    message: str
