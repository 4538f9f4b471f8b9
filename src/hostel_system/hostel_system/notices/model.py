from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import Field
from ..core.constants import DEFAULT_PRIORITY
from ..core.enums import NoticeVisibility


@dataclass(frozen=True)
class Notice:
    id: int
    title: str
    content: str
    created_by: int
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_active: bool = True
    visibility: NoticeVisibility = NoticeVisibility.ALL
    priority: Optional[str] = DEFAULT_PRIORITY


# created_by / created_at are set from the caller and the clock.
NOTICE_FIELDS = (
    Field("title", str, required=True),
    Field("content", str, required=True),
    Field("expires_at", datetime),
    Field("is_active", bool, default=True, nullable=False),
    Field("visibility", NoticeVisibility, default=NoticeVisibility.ALL, nullable=False),
    Field("priority", default=DEFAULT_PRIORITY),
)
