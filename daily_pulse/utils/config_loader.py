from __future__ import annotations

import os
from pathlib import Path
from typing import List

import yaml

from ..errors import PulseError
from ..models import FilterSettings


class ConfigError(PulseError):
    """Raised when the configuration file is invalid or missing required fields."""


DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "defaults.yaml"


def _validate_string_list(data: dict, key: str) -> List[str]:
    values = data.get(key)
    if values is None:
        return []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ConfigError(f"'{key}' must be a list of strings if provided")
    cleaned = [v.strip() for v in values]
    if any(not v for v in cleaned):
        raise ConfigError(f"'{key}' must not contain blank entries")
    return cleaned


def load_default_settings(path: Path | str | None = None) -> FilterSettings:
    """Load the default topics and sources for users without saved settings.

    YAML structure:
      - Top-level mapping
      - Key ``topics``: list of strings (optional)
      - Key ``sources``: list of strings (optional)

    The path defaults to ``PULSE_DEFAULTS_PATH`` or the bundled
    ``defaults.yaml``. Unknown top-level keys are ignored.
    """
    config_path = Path(path or os.environ.get("PULSE_DEFAULTS_PATH") or DEFAULTS_PATH)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError("Defaults file must contain a top-level mapping")

    return FilterSettings(
        active_topics=_validate_string_list(data, "topics"),
        custom_sources=_validate_string_list(data, "sources"),
    )
