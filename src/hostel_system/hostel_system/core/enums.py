from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Access level of a user account."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    STUDENT = "STUDENT"


# Every Role must appear here; a missing role fails loudly in is_admin_role.
ROLE_IS_ADMIN = {
    Role.SUPER_ADMIN: True,
    Role.ADMIN: True,
    Role.EMPLOYEE: False,
    Role.STUDENT: False,
}


def is_admin_role(role: Role) -> bool:
    return ROLE_IS_ADMIN[Role(role)]


class RoomType(str, Enum):
    AC = "AC"
    NON_AC = "NON_AC"


class PaymentStatus(str, Enum):
    """PENDING -> APPROVED | REJECTED; decided payments are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ComplaintStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LEAVE = "LEAVE"


class MealType(str, Enum):
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"


class NoticeVisibility(str, Enum):
    ALL = "ALL"
    STUDENTS = "STUDENTS"
    STAFF = "STAFF"
