"""User registration, login and the persisted current-session pointer.

Passwords are stored as salted PBKDF2-HMAC-SHA256 digests in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..errors import DuplicateUsername, InvalidCredentials
from ..models import Session, User
from ..storage import CURRENT_USER_ID_KEY, USERS_KEY, KeyValueStore
from ..utils.logging import get_logger

logger = get_logger("pulse.services.identity")

HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 390_000


def hash_password(password: str, *, iterations: int = HASH_ITERATIONS, salt: bytes | None = None) -> str:
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        if algorithm != HASH_ALGORITHM:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(actual, expected)


class IdentityService:
    def __init__(self, store: KeyValueStore, *, iterations: int = HASH_ITERATIONS) -> None:
        self.store = store
        self.iterations = iterations

    def _load_users(self) -> List[User]:
        rows = self.store.get(USERS_KEY, []) or []
        users: List[User] = []
        for row in rows:
            try:
                users.append(User.from_dict(row))
            except (KeyError, TypeError) as exc:
                logger.warning("Skipping malformed user record: %s", exc)
        return users

    def _find(self, username: str) -> Optional[User]:
        return next((u for u in self._load_users() if u.username == username), None)

    def register(self, username: str, password: str) -> User:
        username = username.strip()
        if not username or not password:
            raise ValueError("Username and password are required")

        users = self._load_users()
        if any(u.username == username for u in users):
            raise DuplicateUsername("Username already exists")

        user = User(
            id=uuid.uuid4().hex[:9],
            username=username,
            password_hash=hash_password(password, iterations=self.iterations),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        users.append(user)
        self.store.set(USERS_KEY, [u.to_dict() for u in users])
        logger.info("Registered user %s", username)
        return user

    def login(self, username: str, password: str) -> Session:
        user = self._find(username.strip())
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials("Invalid username or password")

        self.store.set(CURRENT_USER_ID_KEY, user.id)
        logger.info("User %s logged in", user.username)
        return Session(user=user)

    def logout(self, session: Optional[Session] = None) -> None:
        self.store.delete(CURRENT_USER_ID_KEY)
        if session is not None:
            logger.info("User %s logged out", session.user.username)

    def current_session(self) -> Optional[Session]:
        user_id = self.store.get(CURRENT_USER_ID_KEY)
        if not user_id:
            return None
        user = next((u for u in self._load_users() if u.id == user_id), None)
        return Session(user=user) if user else None
