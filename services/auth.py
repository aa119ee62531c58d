"""Mock account and session management.

Accounts live in a CredentialStore, the logged-in user in a SessionStore;
both write through to the same durable key-value store. Secrets are kept as
salted pbkdf2 hashes and verified with passlib's constant-time check.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from passlib.context import CryptContext

from services.models import (
    CredentialEntry,
    EmailInUseError,
    InvalidCredentialsError,
    User,
    generate_id,
)
from store.credentials import CredentialStore
from store.session import SessionStore


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed: Optional[str]) -> bool:
    """Check a password, spending the same hashing work when there is no stored hash."""
    if hashed is None:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain_password, hashed)


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionStore,
        latency_ms: int = 0,
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.latency_ms = latency_ms
        self._user: Optional[User] = None
        self._loading = True
        self._signup_lock = threading.Lock()

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def loading(self) -> bool:
        """True until the persisted session has been looked up once."""
        return self._loading

    def restore_session(self) -> Optional[User]:
        if not self._loading:
            return self._user
        self._user = self.sessions.load()
        self._loading = False
        if self._user:
            logger.info("Restored session for %s", self._user.email)
        else:
            logger.info("No persisted session to restore")
        return self._user

    def _simulate_latency(self) -> None:
        if self.latency_ms > 0:
            time.sleep(self.latency_ms / 1000)

    def _start_session(self, user: User) -> None:
        self.sessions.save(user)
        self._user = user
        self._loading = False

    def login(self, email: str, password: str) -> User:
        self._simulate_latency()
        entry = self.credentials.get(email)
        # Unknown email and wrong password must be indistinguishable, in timing too.
        if not verify_password(password, entry.password_hash if entry else None):
            logger.info("Rejected login for %s", email)
            raise InvalidCredentialsError()

        user = User.from_email(entry.uid, email)
        self._start_session(user)
        logger.info("Logged in %s (uid=%s)", email, user.uid)
        return user

    def signup(self, email: str, password: str) -> User:
        self._simulate_latency()
        with self._signup_lock:
            if self.credentials.exists(email):
                logger.info("Rejected signup for %s: email already in use", email)
                raise EmailInUseError()
            user = User.from_email(generate_id("uid"), email)
            self.credentials.add(email, CredentialEntry(password_hash=hash_password(password), uid=user.uid))

        self._start_session(user)
        logger.info("Signed up %s (uid=%s)", email, user.uid)
        return user

    def logout(self) -> None:
        self.sessions.clear()
        if self._user:
            logger.info("Logged out %s", self._user.email)
        self._user = None
