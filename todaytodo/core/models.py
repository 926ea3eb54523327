"""
FILE: todaytodo/core/models.py
PURPOSE: Domain model for a daily task
EXPORTS:
  - Task (frozen dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - json (stdlib)
  - uuid (stdlib)
  - typing (stdlib)
NOTES:
  - Task is immutable; changes produce a new Task via dataclasses.replace()
  - from_dict()/to_dict() define the persisted record shape
  - Timestamps stored as ISO-8601 strings; expires_at is always present
    in a record (null when unset)
  - Instants are timezone-aware; naive timestamps read from disk are
    interpreted in the system's local zone
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
import json
import uuid


def _parse_instant(raw: str) -> datetime:
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.astimezone()
    return value


@dataclass(frozen=True)
class Task:
    """A short-lived task that belongs to the day it was created on."""

    id: uuid.UUID
    title: str
    created_at: datetime
    is_completed: bool = False
    expires_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        title: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None,
    ) -> "Task":
        """Build a new, incomplete task with a fresh identifier."""
        return cls(
            id=uuid.uuid4(),
            title=title,
            created_at=created_at,
            is_completed=False,
            expires_at=expires_at,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Convert a persisted record to a Task object."""
        expires_raw = data["expires_at"]
        return cls(
            id=uuid.UUID(str(data["id"])),
            title=data["title"],
            is_completed=bool(data["is_completed"]),
            created_at=_parse_instant(data["created_at"]),
            expires_at=_parse_instant(expires_raw) if expires_raw is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to its persisted record (JSON-serializable dict)."""
        return {
            "id": str(self.id),
            "title": self.title,
            "is_completed": self.is_completed,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @property
    def short_id(self) -> str:
        """First eight hex characters of the id, for display."""
        return self.id.hex[:8]
