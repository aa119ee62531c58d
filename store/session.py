from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from services.models import User
from store.kv import KeyValueStore, StorageError


SESSION_KEY = "auth_user"


class SessionStore:
    """Persists the one user record of the active session."""

    def __init__(self, kv: KeyValueStore, key: str = SESSION_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> Optional[User]:
        raw = self.kv.get(self.key)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageError(f"Corrupt session record under {self.key!r}") from exc

    def save(self, user: User) -> None:
        self.kv.put(self.key, user.model_dump_json(by_alias=True))

    def clear(self) -> None:
        self.kv.delete(self.key)
