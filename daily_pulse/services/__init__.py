"""User-scoped services backed by the key-value store."""

from .identity import IdentityService, hash_password, verify_password
from .repository import ArticleRepository
from .settings import SettingsStore

__all__ = [
    "IdentityService",
    "hash_password",
    "verify_password",
    "ArticleRepository",
    "SettingsStore",
]
