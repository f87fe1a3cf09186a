"""
SQLAlchemy implementation of the submission key-value store.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from scoping.shared.database import DatabaseManager
from scoping.shared.exceptions import StoreError
from scoping.storage.models import KeyValueEntry

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore:
    """Stores JSON values in the ``kv_store`` table."""

    def __init__(self, db_manager: DatabaseManager):
        """
        Initialize store.

        Args:
            db_manager: Database manager providing transactional sessions.
        """
        self._db = db_manager

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Insert or replace the value stored under ``key``."""
        try:
            async with self._db.session() as session:
                await session.merge(KeyValueEntry(key=key, value=value))
        except SQLAlchemyError as e:
            logger.error("Failed to store key", extra={"key": key, "error": str(e)})
            raise StoreError(f"Failed to store {key}: {e}") from e

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        """Return the value stored under ``key`` or None."""
        try:
            async with self._db.session() as session:
                entry = await session.get(KeyValueEntry, key)
                return dict(entry.value) if entry is not None else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {key}: {e}") from e
