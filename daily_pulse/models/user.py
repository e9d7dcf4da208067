from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping


@dataclass(slots=True, frozen=True)
class User:
    id: str
    username: str
    password_hash: str
    created_at: str

    def to_dict(self) -> dict:
        # camelCase keys keep the stored user directory format stable
        return {
            "id": self.id,
            "username": self.username,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "User":
        return cls(
            id=str(d["id"]),
            username=str(d["username"]),
            password_hash=str(d.get("passwordHash") or ""),
            created_at=str(d.get("createdAt") or ""),
        )


@dataclass(slots=True, frozen=True)
class Session:
    """An authenticated user, returned by login and passed to logout."""

    user: User

    @property
    def user_id(self) -> str:
        return self.user.id


@dataclass(slots=True)
class FilterSettings:
    """Per-user topics and preferred sources used to build the fetch prompt."""

    active_topics: List[str] = field(default_factory=list)
    custom_sources: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "activeTopics": list(self.active_topics),
            "customSources": list(self.custom_sources),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "FilterSettings":
        return cls(
            active_topics=[str(t) for t in (d.get("activeTopics") or [])],
            custom_sources=[str(s) for s in (d.get("customSources") or [])],
        )
