from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass(slots=True)
class AppConfig:
    data_dir: str = field(default_factory=lambda: os.getenv("PULSE_DATA_DIR", ".daily-pulse"))
    exclude_limit: int = field(default_factory=lambda: _env_int("PULSE_EXCLUDE_LIMIT", 50))
    output_language: str = field(default_factory=lambda: os.getenv("PULSE_OUTPUT_LANGUAGE", "English"))
