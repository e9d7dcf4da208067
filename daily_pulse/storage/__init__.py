"""Key-value persistence for users, sessions, settings and repositories."""

from .base import KeyValueStore
from .json_store import JsonFileStore
from .memory import MemoryStore

USERS_KEY = "users"
CURRENT_USER_ID_KEY = "current_user_id"


def repo_key(user_id: str) -> str:
    return f"user_{user_id}_repo"


def settings_key(user_id: str) -> str:
    return f"user_{user_id}_settings"


__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "USERS_KEY",
    "CURRENT_USER_ID_KEY",
    "repo_key",
    "settings_key",
]
