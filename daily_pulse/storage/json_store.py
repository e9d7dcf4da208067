from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from .base import KeyValueStore
from ..utils.logging import get_logger

logger = get_logger("pulse.storage.json")

_unsafe_key_chars_re = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStore(KeyValueStore):
    """JSON file-backed key-value store.

    Each key is kept in its own file under ``base_dir/<key>.json``. A file that
    cannot be decoded is treated as absent and logged.
    """

    def __init__(self, base_dir: str | Path = ".daily-pulse") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _file_for_key(self, key: str) -> Path:
        if not key:
            raise ValueError("Store key must be a non-empty string")
        return self.base_dir / f"{_unsafe_key_chars_re.sub('_', key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        file_path = self._file_for_key(key)
        if not file_path.exists():
            return default
        try:
            return json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read %s; using default: %s", file_path, exc)
            return default

    def set(self, key: str, value: Any) -> None:
        file_path = self._file_for_key(key)
        payload = json.dumps(value, ensure_ascii=False, indent=2)
        # Atomic swap: readers see the old file or the new one, never a partial write
        fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=f".{file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote key %s to %s", key, file_path)

    def delete(self, key: str) -> None:
        self._file_for_key(key).unlink(missing_ok=True)
