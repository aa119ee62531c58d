from __future__ import annotations

import json
from typing import Dict, Optional

from services.models import CredentialEntry
from store.kv import KeyValueStore, StorageError


USERS_KEY = "auth_users"


class CredentialStore:
    """email -> CredentialEntry mapping kept under a single storage key.

    The mapping is decoded from the key-value store on every lookup and
    written back whole on every add; nothing is cached here.
    """

    def __init__(self, kv: KeyValueStore, key: str = USERS_KEY):
        self.kv = kv
        self.key = key

    def _read_all(self) -> Dict[str, CredentialEntry]:
        raw = self.kv.get(self.key)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
            return {email: CredentialEntry.model_validate(entry) for email, entry in data.items()}
        except (ValueError, AttributeError) as exc:
            raise StorageError(f"Corrupt credential mapping under {self.key!r}: {exc}") from exc

    def get(self, email: str) -> Optional[CredentialEntry]:
        return self._read_all().get(email)

    def exists(self, email: str) -> bool:
        return email in self._read_all()

    def add(self, email: str, entry: CredentialEntry) -> None:
        users = self._read_all()
        if email in users:
            raise KeyError(email)
        users[email] = entry
        self.kv.put(self.key, json.dumps({k: v.model_dump() for k, v in users.items()}))
