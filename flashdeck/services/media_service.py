import logging
import os
import time
import uuid
from pathlib import Path
from typing import Optional

from flashdeck.core.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)


class MediaStore:
    """Filesystem directory holding uploaded flashcard images.

    Flashcard rows reference files here by bare filename. Writes and deletes
    are ordinary blocking calls made inline by the request that needs them.
    """

    def __init__(self, root: os.PathLike | str):
        self.root = Path(root)

    def ensure_root(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create upload directory {self.root}: {e}")
            raise StorageError(f"Failed to create upload directory: {e}", e) from e

    @staticmethod
    def generate_filename(original_name: Optional[str]) -> str:
        """Time-based name with a random suffix, keeping the original extension."""
        extension = Path(original_name or "").suffix.lower()
        timestamp = int(time.time() * 1000)
        unique_id = uuid.uuid4().hex[:12]
        return f"flashcard-{timestamp}-{unique_id}{extension}"

    def path_for(self, filename: str) -> Path:
        if not filename or filename in (".", "..") or "/" in filename or "\\" in filename:
            raise NotFoundError("Image not found")
        path = (self.root / filename).resolve()
        if path.parent != self.root.resolve():
            raise NotFoundError("Image not found")
        return path

    def exists(self, filename: str) -> bool:
        try:
            return self.path_for(filename).is_file()
        except NotFoundError:
            return False

    def save(self, content: bytes, original_name: Optional[str] = None) -> str:
        """Write bytes under a fresh filename and return that filename."""
        self.ensure_root()
        filename = self.generate_filename(original_name)
        path = self.root / filename
        try:
            with open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Image write failed for {path}: {e}")
            raise StorageError(f"Failed to store image: {e}", e) from e

        logger.info(f"Stored image {filename} ({len(content)} bytes)")
        return filename

    def delete(self, filename: str) -> bool:
        """Remove a stored file. A file that is already gone is not an error."""
        try:
            path = self.path_for(filename)
        except NotFoundError:
            logger.warning(f"Refusing to delete invalid image name: {filename!r}")
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"Image already missing from media store: {filename}")
            return False
        except OSError as e:
            logger.error(f"Image deletion failed for {path}: {e}")
            raise StorageError(f"Failed to delete image: {e}", e) from e

        logger.info(f"Deleted image {filename}")
        return True
