import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import StorageError

logger = logging.getLogger(__name__)


async def commit_or_raise(db: AsyncSession, action: str) -> None:
    """Commit the session, turning driver failures into StorageError."""
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database commit failed while trying to {action}: {e}")
        raise StorageError(f"Failed to {action}", e) from e
