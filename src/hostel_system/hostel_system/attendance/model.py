from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.validators import Field
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Attendance:
    """Domain entity: one user's attendance for one day.

    Check-in/out times are kept as entered ("08:30"); one row per user and day.
    """

    id: int
    user_id: int
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    remarks: Optional[str] = None


ATTENDANCE_FIELDS = (
    Field("user_id", int, required=True),
    Field("date", date, required=True),
    Field("status", AttendanceStatus, default=AttendanceStatus.PRESENT, nullable=False),
    Field("check_in_time"),
    Field("check_out_time"),
    Field("remarks"),
)
