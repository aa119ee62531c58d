from __future__ import annotations

import threading
from typing import Dict, List

from services.models import Message


class ChatHistoryStore:
    """In-process, append-only message lists keyed by user id.

    Nothing here survives a restart. Readers always get a copy of the list,
    so stored history cannot be reordered from outside.
    """

    def __init__(self):
        self._histories: Dict[str, List[Message]] = {}
        self._lock = threading.Lock()

    def ensure(self, user_id: str) -> None:
        with self._lock:
            self._histories.setdefault(user_id, [])

    def append(self, user_id: str, message: Message) -> None:
        with self._lock:
            history = self._histories.setdefault(user_id, [])
            if any(m.id == message.id for m in history):
                raise ValueError(f"Duplicate message id {message.id!r} for user {user_id!r}")
            history.append(message)

    def list(self, user_id: str) -> List[Message]:
        with self._lock:
            return list(self._histories.get(user_id, ()))

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._histories
