from __future__ import annotations

import secrets
import threading
from typing import Dict, Optional

from ..core.constants import SESSION_TOKEN_BYTES


class SessionStore:
    """Process-wide map of opaque session token -> user id.

    Sessions live until logout (or process restart); there is no expiry.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, int] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(SESSION_TOKEN_BYTES)
        with self._lock:
            self._sessions[token] = int(user_id)
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def destroy_user(self, user_id: int) -> int:
        """Drop every session of ``user_id``; returns how many were open."""
        with self._lock:
            tokens = [t for t, uid in self._sessions.items() if uid == int(user_id)]
            for t in tokens:
                del self._sessions[t]
            return len(tokens)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
