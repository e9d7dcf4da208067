"""AI backend client (Gemini), retry policy and reply parsing."""

from .base import AIClient, BackendHTTPError
from .gemini import GeminiClient

__all__ = ["AIClient", "BackendHTTPError", "GeminiClient"]
