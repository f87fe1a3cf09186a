"""
Key-value store interface for submission records.
"""

from typing import Any, Optional, Protocol


class SubmissionStore(Protocol):
    """Durable key-value persistence for submission records.

    ``put`` must be atomic per key. Implementations raise ``StoreError`` on
    failure; callers treat that as fatal to the submission.
    """

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        """Return the value stored under ``key`` or None."""
        ...
