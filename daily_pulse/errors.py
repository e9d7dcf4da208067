"""Error taxonomy shared by the fetch pipeline, services and CLI.

Every error raised to callers derives from ``PulseError`` so the entrypoint
can report it with a single handler. Messages are meant to be shown to the
user verbatim and carry a remediation hint where one exists.
"""

from __future__ import annotations


class PulseError(Exception):
    """Base class for all user-facing errors."""


class ConfigurationError(PulseError):
    """Raised when required configuration (e.g. the API key) is missing."""


class NetworkError(PulseError):
    """Raised when the AI backend cannot be reached."""


class AuthorizationError(PulseError):
    """Raised when the API key is valid but lacks permission or billing."""


class CredentialError(PulseError):
    """Raised when the backend rejects the API key itself."""


class MalformedResponse(PulseError):
    """Raised when the backend reply is not JSON or not an array of objects."""


class UnknownBackendError(PulseError):
    """Wraps any backend failure that has no dedicated classification."""


class DuplicateUsername(PulseError):
    """Raised by registration when the username is already taken."""


class InvalidCredentials(PulseError):
    """Raised by login when the username or password does not match."""
