"""Shared plumbing for repositories."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Holds the session and turns driver failures into ``StorageError``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database query failed: {e}")
            raise StorageError("Failed to read from storage") from e

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database flush failed: {e}")
            raise StorageError("Failed to write to storage") from e

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database commit failed: {e}")
            raise StorageError("Failed to write to storage") from e
