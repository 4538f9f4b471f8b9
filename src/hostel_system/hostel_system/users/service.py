from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.repository import EntityRepository
from ..common.validators import require_email, require_min_length, require_object, validate_fields
from ..core.actor import Actor
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    FieldIssue,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .model import PRIVILEGED_USER_FIELDS, USER_PROFILE_FIELDS, User

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: EntityRepository[User]):
        self._users = users

    def authenticate(self, payload: Mapping[str, Any]) -> User:
        require_object(payload)

        issues: List[FieldIssue] = []
        try:
            email = require_email(payload.get("email"))
        except ValidationError as e:
            issues.extend(e.errors)
            email = ""
        password = payload.get("password")
        if not isinstance(password, str) or not password:
            issues.append(FieldIssue("password", "Password is required"))
        if issues:
            raise ValidationError("Invalid input", issues)

        matches = self._users.list(email=email)
        user = matches[0] if matches else None
        try:
            ok = user is not None and check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("login failed for %s", email)
            raise InvalidCredentialsError("Invalid email or password")
        if not user.is_active:
            logger.info("login refused for disabled account %s", email)
            raise InvalidCredentialsError("Account is disabled")
        return user


class UserService:
    """Use case: manage user accounts."""

    label = "User"

    def __init__(self, users: EntityRepository[User]):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list(self, *, role: Optional[Role] = None) -> List[User]:
        if role is None:
            return self._users.list()
        return self._users.list(role=role)

    def list_students(self) -> List[User]:
        return self.list(role=Role.STUDENT)

    def list_employees(self) -> List[User]:
        return self.list(role=Role.EMPLOYEE)

    def _email_taken(self, email: str, *, except_id: Optional[int] = None) -> bool:
        return any(u.id != except_id for u in self._users.list(email=email))

    def _password_hash(self, password: Any) -> str:
        if not isinstance(password, str):
            raise ValidationError("Invalid input", [FieldIssue("password", "Required")])
        try:
            require_min_length(password, "password", MIN_PASSWORD_LENGTH)
        except ValidationError as e:
            raise ValidationError("Invalid input", e.errors)
        return generate_password_hash(password)

    def _guard_super_admin(self, actor: Optional[Actor], *, target: Optional[User], role: Optional[Role]) -> None:
        """Only a super admin may touch a super admin account or grant the role."""
        if actor is None or actor.role == Role.SUPER_ADMIN:
            return
        if target is not None and target.role == Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can modify a super admin")
        if role == Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can grant the super admin role")

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> User:
        """Create an account. ``actor`` is None for seeding and scripts."""
        require_object(payload)
        issues: List[FieldIssue] = []
        values: Dict[str, Any] = {}
        try:
            values.update(validate_fields(USER_PROFILE_FIELDS, payload))
        except ValidationError as e:
            issues.extend(e.errors)
        try:
            values["email"] = require_email(payload.get("email"))
        except ValidationError as e:
            issues.extend(e.errors)
        try:
            values["password_hash"] = self._password_hash(payload.get("password"))
        except ValidationError as e:
            issues.extend(e.errors)
        if issues:
            raise ValidationError("Invalid input", issues)

        self._guard_super_admin(actor, target=None, role=values.get("role"))
        if self._email_taken(values["email"]):
            raise ConflictError("Email already exists")

        user = self._users.create(values)
        logger.info("user #%s created (%s)", user.id, user.role.value)
        return user

    def update(self, user_id: int, payload: Mapping[str, Any], *, actor: Actor) -> User:
        """Self-service profile edit, or any edit by an admin."""

        if not actor.is_admin and actor.user_id != int(user_id):
            raise AuthorizationError("You can only edit your own profile")

        require_object(payload)
        changes = validate_fields(USER_PROFILE_FIELDS, payload, partial=True)
        if not actor.is_admin and PRIVILEGED_USER_FIELDS & set(changes):
            raise AuthorizationError("Only admins may change role or account status")

        if "email" in payload:
            changes["email"] = require_email(payload.get("email"))
        if "password" in payload:
            changes["password_hash"] = self._password_hash(payload.get("password"))

        existing = self.get(user_id)
        self._guard_super_admin(actor, target=existing, role=changes.get("role"))
        if "email" in changes and self._email_taken(changes["email"], except_id=existing.id):
            raise ConflictError("Email already exists")

        updated = self._users.update(existing.id, changes)
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    def delete(self, user_id: int, *, actor: Actor) -> None:
        user = self.get(user_id)
        self._guard_super_admin(actor, target=user, role=None)
        if not self._users.delete(user.id):
            raise NotFoundError("User not found")
        logger.info("user #%s deleted by #%s", user.id, actor.user_id)
