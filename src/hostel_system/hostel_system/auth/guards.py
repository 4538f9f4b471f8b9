from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, session

from ..common.repository import EntityRepository
from ..core.actor import Actor
from ..core.constants import SESSION_TOKEN_KEY
from ..core.enums import is_admin_role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.model import User
from .session_store import SessionStore


class Guard:
    """Per-request access checks backed by the session store.

    ``login_required`` only resolves the token; ``admin_required`` also reads
    the user row on every call (no caching of roles).
    """

    def __init__(self, sessions: SessionStore, users: EntityRepository[User]):
        self._sessions = sessions
        self._users = users

    def current_user_id(self) -> Optional[int]:
        return self._sessions.resolve(session.get(SESSION_TOKEN_KEY))

    def _authenticate(self) -> int:
        user_id = self.current_user_id()
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        g.user_id = user_id
        return user_id

    def current_user(self) -> User:
        cached = g.get("current_user")
        if cached is not None:
            return cached
        user = self._users.get(self._authenticate())
        if user is None:
            raise AuthenticationError("User not found")
        g.current_user = user
        return user

    def current_actor(self) -> Actor:
        user = self.current_user()
        return Actor(user_id=user.id, role=user.role)

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self._authenticate()
            return view(*args, **kwargs)

        return wrapper

    def admin_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = self._users.get(self._authenticate())
            if user is None or not is_admin_role(user.role):
                raise AuthorizationError("Forbidden")
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper
