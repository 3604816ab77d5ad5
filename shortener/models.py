"""Data models for URL shortener."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ShortURLRecord:
    """A stored short URL.

    Only ``hit_count`` changes after creation, and only upward.
    """

    code: str
    original_url: str
    hit_count: int = 0
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_code": self.code,
            "original_url": self.original_url,
            "hit_count": self.hit_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ShortURLRecord":
        """Create from dictionary (as produced by ``to_dict`` or a DB row)."""
        created_at = data["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            code=data.get("short_code") or data["code"],
            original_url=data["original_url"],
            hit_count=int(data.get("hit_count", 0)),
            created_at=created_at,
        )
