from __future__ import annotations

from abc import ABC, abstractmethod


class AIClient(ABC):
    """Abstract AI client interface for grounded text generation."""

    @abstractmethod
    def generate(self, prompt: str, *, temperature: float = 0.2, search: bool = True) -> str:
        """Return the model's free-form text reply to ``prompt``."""


class BackendHTTPError(Exception):
    """Non-2xx reply from the AI backend.

    ``status`` is the backend's symbolic status (e.g. ``PERMISSION_DENIED``)
    and ``reasons`` lists any error detail reasons (e.g. ``API_KEY_INVALID``).
    """

    def __init__(self, status_code: int, message: str, *, status: str = "", reasons: tuple[str, ...] = ()) -> None:
        self.status_code = status_code
        self.message = message
        self.status = status
        self.reasons = reasons
        parts = [str(status_code)]
        if status:
            parts.append(status)
        text = " ".join(parts) + f": {message}"
        if reasons:
            text += f" ({', '.join(reasons)})"
        super().__init__(text)
