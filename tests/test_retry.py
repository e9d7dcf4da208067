"""Tests for the bounded retry wrapper around backend calls."""

import pytest
import requests

from daily_pulse.processors.ai import BackendHTTPError
from daily_pulse.processors.ai.retry import is_retryable, with_retries


class Flaky:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def test_two_server_errors_then_success_waits_twice():
    waits = []
    fn = Flaky(BackendHTTPError(503, "unavailable"), BackendHTTPError(503, "unavailable"), "ok")

    assert with_retries(fn, attempts=3, base_delay=1.0, sleep=waits.append) == "ok"
    assert fn.calls == 3
    assert waits == [1.0, 2.0]


def test_client_error_fails_immediately_without_waiting():
    waits = []
    fn = Flaky(BackendHTTPError(400, "bad request"), "never")

    with pytest.raises(BackendHTTPError) as excinfo:
        with_retries(fn, attempts=3, base_delay=1.0, sleep=waits.append)
    assert excinfo.value.status_code == 400
    assert fn.calls == 1
    assert waits == []


def test_last_error_raised_after_exhausting_attempts():
    waits = []
    errors = [requests.ConnectionError(f"refused {i}") for i in range(3)]
    fn = Flaky(*errors)

    with pytest.raises(requests.ConnectionError, match="refused 2"):
        with_retries(fn, attempts=3, base_delay=0.5, sleep=waits.append)
    assert fn.calls == 3
    assert waits == [0.5, 1.0]


def test_env_overrides_apply_when_arguments_omitted(monkeypatch):
    monkeypatch.setenv("AI_ATTEMPTS", "2")
    monkeypatch.setenv("AI_BACKOFF", "0.25")
    waits = []
    fn = Flaky(BackendHTTPError(500, "boom"), BackendHTTPError(502, "bad gateway"))

    with pytest.raises(BackendHTTPError):
        with_retries(fn, sleep=waits.append)
    assert fn.calls == 2
    assert waits == [0.25]


def test_invalid_env_override_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("AI_ATTEMPTS", "lots")
    monkeypatch.setenv("AI_BACKOFF", "0")
    fn = Flaky(BackendHTTPError(503, "x"), BackendHTTPError(503, "x"), "ok")
    assert with_retries(fn, sleep=lambda _: None) == "ok"


@pytest.mark.parametrize(
    "exc, expected",
    [
        (requests.ConnectionError("Failed to establish a new connection"), True),
        (requests.Timeout("read timed out"), True),
        (BackendHTTPError(500, "internal"), True),
        (BackendHTTPError(503, "The model is overloaded.", status="UNAVAILABLE"), True),
        (BackendHTTPError(429, "The model is overloaded. Please try again later."), True),
        (BackendHTTPError(400, "API key not valid", reasons=("API_KEY_INVALID",)), False),
        (BackendHTTPError(403, "denied", status="PERMISSION_DENIED"), False),
        (ValueError("nope"), False),
    ],
)
def test_is_retryable(exc, expected):
    assert is_retryable(exc) is expected
