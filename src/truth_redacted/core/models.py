"""
Data models for truth-redacted.

Entries are plain in-memory records; they serialize to the
``{id?, source, changes: [{from, to}]}`` shape the frontend and the
bundled sample file use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Change:
    """An original text paired with its redacted counterpart."""

    original: str
    redacted: str

    def is_valid(self) -> bool:
        """Both sides must carry non-blank text."""
        return bool(self.original and self.original.strip() and self.redacted and self.redacted.strip())

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.original, "to": self.redacted}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Change":
        return cls(original=str(data.get("from") or ""), redacted=str(data.get("to") or ""))


@dataclass
class Entry:
    """One unit of content from a feed."""

    source: str
    changes: List[Change] = field(default_factory=list)
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data["source"] = self.source
        data["changes"] = [change.to_dict() for change in self.changes]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        raw_changes = data.get("changes") or []
        changes = [Change.from_dict(ch) for ch in raw_changes if isinstance(ch, dict)]
        entry_id = data.get("id")
        return cls(
            source=str(data.get("source") or "Government Document"),
            changes=changes,
            id=str(entry_id) if entry_id is not None else None,
        )


@dataclass
class FeedResult:
    """Outcome of a feed load: live entries, or the sample set after a failure."""

    entries: List[Entry]
    origin: str = "live"
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_sample(self) -> bool:
        return self.origin == "sample"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": self.origin,
            "url": self.url,
            "error": self.error,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass
class Stats:
    documents: int = 0
    changes: int = 0
    words_redacted: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "documents": self.documents,
            "changes": self.changes,
            "words_redacted": self.words_redacted,
        }


@dataclass
class DiffToken:
    word: str
    kind: str  # info | deleted | inserted
    highlight: bool = False


__all__ = ["Change", "Entry", "FeedResult", "Stats", "DiffToken"]
