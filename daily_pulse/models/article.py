from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple


@dataclass(slots=True, frozen=True)
class Source:
    """A corroborating document for a story."""

    title: str
    uri: str

    def to_dict(self) -> dict:
        return {"title": self.title, "uri": self.uri}


@dataclass(slots=True, frozen=True)
class Article:
    id: str
    title: str
    summary: str
    score: int
    date: str
    sources: Tuple[Source, ...] = field(default_factory=tuple)
    tags: Tuple[str, ...] = field(default_factory=tuple)
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "score": self.score,
            "date": self.date,
            "sources": [s.to_dict() for s in self.sources],
            "tags": list(self.tags),
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Article":
        """Rebuild an article previously stored with ``to_dict``."""
        sources = tuple(
            Source(title=str(s.get("title") or ""), uri=str(s.get("uri") or ""))
            for s in (d.get("sources") or [])
            if isinstance(s, Mapping)
        )
        return cls(
            id=str(d["id"]),
            title=d.get("title") or "",
            summary=d.get("summary") or "",
            score=int(d.get("score") or 0),
            date=d.get("date") or "",
            sources=sources,
            tags=tuple(str(t) for t in (d.get("tags") or [])),
            reason=d.get("reason") or "",
        )
