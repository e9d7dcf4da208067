from __future__ import annotations

import os

import requests

from .base import AIClient, BackendHTTPError
from ...errors import ConfigurationError
from ...utils.logging import get_logger

logger = get_logger("pulse.ai.gemini")


def _error_from_response(resp: requests.Response) -> BackendHTTPError:
    # Google APIs wrap failures as {"error": {"code", "message", "status", "details"}}
    try:
        body = resp.json()
    except ValueError:
        body = {}
    err = body.get("error") if isinstance(body, dict) else None
    if not isinstance(err, dict):
        return BackendHTTPError(resp.status_code, resp.text.strip() or resp.reason or "HTTP error")
    reasons = tuple(
        str(d["reason"]) for d in (err.get("details") or []) if isinstance(d, dict) and d.get("reason")
    )
    return BackendHTTPError(
        resp.status_code,
        str(err.get("message") or resp.reason or "HTTP error"),
        status=str(err.get("status") or ""),
        reasons=reasons,
    )


class GeminiClient(AIClient):
    """HTTP client for Gemini via Google AI Studio API.

    Environment:
      - GOOGLE_API_KEY (required)
      - GEMINI_MODEL (default: gemini-2.5-flash)
    """

    def __init__(self, *, api_key: str | None = None, model: str | None = None) -> None:
        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        if not self.api_key:
            raise ConfigurationError("API Key is missing. Set GOOGLE_API_KEY in the environment or .env file.")
        self.model = model or os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

    def generate(self, prompt: str, *, temperature: float = 0.2, search: bool = True, timeout: int = 120) -> str:
        url = (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            f"{self.model}:generateContent?key={self.api_key}"
        )
        payload = {
            "contents": [
                {
                    "parts": [{"text": prompt}],
                }
            ],
            "generationConfig": {"temperature": temperature},
        }
        if search:
            payload["tools"] = [{"google_search": {}}]
        logger.debug("Calling %s (search=%s)", self.model, search)
        resp = requests.post(url, json=payload, timeout=timeout)
        if resp.status_code >= 400:
            raise _error_from_response(resp)
        data = resp.json()
        # Extract text from the first candidate
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts)
        return text.strip()
