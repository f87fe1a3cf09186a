"""
Submission persistence.
"""

from scoping.storage.factory import create_store
from scoping.storage.interfaces import SubmissionStore
from scoping.storage.memory import InMemoryStore
from scoping.storage.repository import SQLAlchemyKeyValueStore

__all__ = [
    "InMemoryStore",
    "SQLAlchemyKeyValueStore",
    "SubmissionStore",
    "create_store",
]
