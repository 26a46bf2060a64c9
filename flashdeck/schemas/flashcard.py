from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class FlashcardCreate(BaseModel):
    deck_id: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    hint: Optional[str] = None


class FlashcardUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    hint: Optional[str] = None


class FlashcardRead(BaseModel):
    id: str
    deck_id: str
    question: str
    answer: str
    category: str = ""
    hint: str = ""
    image: Optional[str] = None  # Media Store filename, served under /uploads
    created_at: datetime

    class Config:
        from_attributes = True
