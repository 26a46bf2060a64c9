from fastapi import APIRouter
from fastapi.responses import FileResponse

from flashdeck.api.deps import MediaStoreDep
from flashdeck.core.exceptions import NotFoundError

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/{filename}")
async def get_upload(filename: str, media: MediaStoreDep):
    path = media.path_for(filename)
    if not path.is_file():
        raise NotFoundError("Image not found")
    return FileResponse(path)
