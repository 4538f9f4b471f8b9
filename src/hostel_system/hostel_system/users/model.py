from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.validators import Field
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a hostel account (student, staff or admin).

    Note: plain data object; no DB access here. ``password_hash`` never leaves
    the service layer.
    """

    id: int
    name: str
    email: str
    password_hash: str
    role: Role = Role.STUDENT
    is_active: bool = True
    phone: Optional[str] = None
    image: Optional[str] = None
    address: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    joining_date: Optional[date] = None


# "email" and "password" are checked separately by UserService.
USER_PROFILE_FIELDS = (
    Field("name", str, required=True),
    Field("role", Role, default=Role.STUDENT, nullable=False),
    Field("is_active", bool, default=True, nullable=False),
    Field("phone"),
    Field("image"),
    Field("address"),
    Field("guardian_name"),
    Field("guardian_phone"),
    Field("date_of_birth", date),
    Field("joining_date", date),
)

# Fields a non-admin may not change, even on their own account.
PRIVILEGED_USER_FIELDS = frozenset({"role", "is_active"})
