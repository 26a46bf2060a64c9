from fastapi import APIRouter

from flashdeck.api.v1 import decks, flashcards, uploads

api_router = APIRouter()
api_router.include_router(decks.router)
api_router.include_router(flashcards.router)
api_router.include_router(uploads.router)
