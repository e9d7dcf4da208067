from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Abstract store of JSON-serialisable values addressed by string keys.

    Last write wins; there is no locking between writers.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default`` when absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is a no-op."""
