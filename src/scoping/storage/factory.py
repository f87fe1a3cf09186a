"""
Factory for the configured submission store.
"""

from typing import Optional

from scoping.config import Settings
from scoping.shared.database import DatabaseManager, get_database_manager
from scoping.storage.interfaces import SubmissionStore
from scoping.storage.memory import InMemoryStore
from scoping.storage.repository import SQLAlchemyKeyValueStore

_memory_store: Optional[InMemoryStore] = None


def create_store(
    settings: Settings,
    db_manager: Optional[DatabaseManager] = None,
) -> SubmissionStore:
    """
    Create the store selected by ``settings.store_backend``.

    The memory backend is a process-wide singleton so records survive
    between requests of the same process.
    """
    global _memory_store
    if settings.store_backend == "memory":
        if _memory_store is None:
            _memory_store = InMemoryStore()
        return _memory_store
    return SQLAlchemyKeyValueStore(db_manager or get_database_manager())
