from __future__ import annotations

import json
from typing import Any, Dict

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """In-process store. Values are JSON round-tripped like the file store."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
