from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.config import Settings, get_settings
from flashdeck.db.session import get_db
from flashdeck.services.media_service import MediaStore


@lru_cache
def get_media_store() -> MediaStore:
    return MediaStore(get_settings().upload_dir)


DBSessionDep = Annotated[AsyncSession, Depends(get_db)]
MediaStoreDep = Annotated[MediaStore, Depends(get_media_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
