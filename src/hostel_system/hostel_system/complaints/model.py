from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import Field
from ..core.constants import DEFAULT_PRIORITY
from ..core.enums import ComplaintStatus


@dataclass(frozen=True)
class Complaint:
    id: int
    student_id: int
    subject: str
    description: str
    created_at: datetime
    status: ComplaintStatus = ComplaintStatus.OPEN
    priority: Optional[str] = DEFAULT_PRIORITY
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[int] = None
    resolution: Optional[str] = None


COMPLAINT_FIELDS = (
    Field("student_id", int, required=True),
    Field("subject", str, required=True),
    Field("description", str, required=True),
    Field("status", ComplaintStatus, default=ComplaintStatus.OPEN, nullable=False),
    Field("priority", default=DEFAULT_PRIORITY),
    Field("resolution"),
)

CLOSING_STATUSES = frozenset({ComplaintStatus.RESOLVED, ComplaintStatus.CLOSED})
