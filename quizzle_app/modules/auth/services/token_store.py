# File: quizzle_app/modules/auth/services/token_store.py
"""
Opaque session tokens -> user id.

The rest of the app only talks to ``TokenStore``; the in-memory store is the
default backend and is shared per app through ``app.extensions``.
"""

from __future__ import annotations

import threading
import time
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

from flask import current_app

EXTENSION_KEY = 'quizzle_token_store'


class TokenStore(ABC):
    @abstractmethod
    def issue(self, user_id: str) -> str:
        ...

    @abstractmethod
    def resolve(self, token: str) -> Optional[str]:
        ...

    @abstractmethod
    def revoke(self, token: str) -> bool:
        ...

    @abstractmethod
    def revoke_user(self, user_id: str) -> int:
        ...

    @abstractmethod
    def purge_expired(self) -> int:
        ...


class InMemoryTokenStore(TokenStore):
    """Thread-safe dict of ``token -> (user_id, expires_at)``."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._tokens: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._tokens)

    def issue(self, user_id: str) -> str:
        token = uuid.uuid4().hex
        with self._lock:
            self._tokens[token] = (user_id, self._clock() + self.ttl_seconds)
        return token

    def resolve(self, token: str) -> Optional[str]:
        if not token:
            return None
        with self._lock:
            entry = self._tokens.get(token)
            if entry is None:
                return None
            user_id, expires_at = entry
            if expires_at <= self._clock():
                del self._tokens[token]
                return None
            return user_id

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._tokens.pop(token, None) is not None

    def revoke_user(self, user_id: str) -> int:
        with self._lock:
            stale = [t for t, (uid, _) in self._tokens.items() if uid == user_id]
            for token in stale:
                del self._tokens[token]
        return len(stale)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, (_, expires_at) in self._tokens.items() if expires_at <= now]
            for token in expired:
                del self._tokens[token]
        return len(expired)


def init_token_store(app) -> TokenStore:
    store = app.extensions.get(EXTENSION_KEY)
    if store is None:
        store = InMemoryTokenStore(app.config.get('SESSION_TOKEN_TTL_SECONDS', 7 * 24 * 3600))
        app.extensions[EXTENSION_KEY] = store
    return store


def get_token_store() -> TokenStore:
    return current_app.extensions[EXTENSION_KEY]
