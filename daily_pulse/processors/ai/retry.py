from __future__ import annotations

import os
import time
from typing import Callable, TypeVar

import requests

from .base import BackendHTTPError
from ...utils.logging import get_logger

T = TypeVar("T")
logger = get_logger("pulse.ai.retry")

DEFAULT_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


def is_network_error(exc: BaseException) -> bool:
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


def is_server_error(exc: BaseException) -> bool:
    if isinstance(exc, BackendHTTPError) and exc.status_code >= 500:
        return True
    return "overloaded" in str(exc).lower()


def is_retryable(exc: BaseException) -> bool:
    """Only transient failures are retried; client errors surface at once."""
    return is_network_error(exc) or is_server_error(exc)


def _resolve(name: str, value, default, cast):
    if value is not None:
        return value
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default


def with_retries(
    fn: Callable[[], T],
    *,
    attempts: int | None = None,
    base_delay: float | None = None,
    retryable: Callable[[BaseException], bool] = is_retryable,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` up to ``attempts`` times with exponential backoff.

    Waits ``base_delay * 2**i`` after the i-th failed attempt (i from 0).
    Environment overrides when arguments are omitted: AI_ATTEMPTS, AI_BACKOFF.
    """
    attempts = max(1, _resolve("AI_ATTEMPTS", attempts, DEFAULT_ATTEMPTS, int))
    base_delay = _resolve("AI_BACKOFF", base_delay, DEFAULT_BASE_DELAY, float)

    last_exc: BaseException | None = None
    for attempt in range(attempts):
        try:
            return fn()
        except Exception as exc:  # noqa: BLE001 - classified below
            if not retryable(exc):
                raise
            last_exc = exc
            if attempt + 1 >= attempts:
                break
            sleep_s = base_delay * (2 ** attempt)
            logger.warning("AI call failed (attempt %s/%s): %s; retrying in %.1fs", attempt + 1, attempts, exc, sleep_s)
            sleep(sleep_s)
    assert last_exc is not None
    raise last_exc
