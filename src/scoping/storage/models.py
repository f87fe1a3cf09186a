"""
ORM model for the key-value table.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from scoping.shared.database import Base


class KeyValueEntry(Base):
    """One stored value addressed by a unique text key."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueEntry key={self.key!r}>"
