from fastapi import APIRouter, File, UploadFile, status

from flashdeck.api.deps import DBSessionDep, MediaStoreDep, SettingsDep
from flashdeck.schemas.deck import MessageResponse
from flashdeck.schemas.flashcard import FlashcardCreate, FlashcardRead, FlashcardUpdate
from flashdeck.services import flashcard_service

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.post("", response_model=FlashcardRead, status_code=status.HTTP_201_CREATED)
async def create_flashcard(data: FlashcardCreate, db: DBSessionDep):
    return await flashcard_service.create_flashcard(
        db, data.deck_id, data.question, data.answer, data.category, data.hint
    )


@router.get("/{flashcard_id}", response_model=FlashcardRead)
async def get_flashcard(flashcard_id: str, db: DBSessionDep):
    return await flashcard_service.get_flashcard(db, flashcard_id)


@router.put("/{flashcard_id}", response_model=FlashcardRead)
async def update_flashcard(flashcard_id: str, data: FlashcardUpdate, db: DBSessionDep):
    return await flashcard_service.update_flashcard(
        db, flashcard_id, data.question, data.answer, data.category, data.hint
    )


@router.delete("/{flashcard_id}", response_model=MessageResponse)
async def delete_flashcard(flashcard_id: str, db: DBSessionDep, media: MediaStoreDep):
    await flashcard_service.delete_flashcard(db, media, flashcard_id)
    return MessageResponse(message="Flashcard deleted successfully")

# ---------- Images ----------

@router.post("/{flashcard_id}/image", response_model=FlashcardRead)
async def upload_flashcard_image(
    flashcard_id: str,
    db: DBSessionDep,
    media: MediaStoreDep,
    settings: SettingsDep,
    image: UploadFile = File(...),
):
    # One byte past the limit is enough to reject an oversized upload.
    content = await image.read(settings.max_image_bytes + 1)
    return await flashcard_service.set_flashcard_image(
        db,
        media,
        flashcard_id,
        content,
        image.content_type,
        image.filename,
        max_bytes=settings.max_image_bytes,
    )


@router.delete("/{flashcard_id}/image", response_model=FlashcardRead)
async def remove_flashcard_image(flashcard_id: str, db: DBSessionDep, media: MediaStoreDep):
    return await flashcard_service.remove_flashcard_image(db, media, flashcard_id)
