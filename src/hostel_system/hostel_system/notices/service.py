from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional

from ..common.crud import CrudService
from ..common.datetime_utils import now_local
from ..core.actor import Actor
from ..core.enums import NoticeVisibility, Role
from ..core.exceptions import AuthenticationError
from .model import NOTICE_FIELDS, Notice

# Audiences a non-admin role reads; admins read everything.
VISIBLE_TO: Dict[Role, FrozenSet[NoticeVisibility]] = {
    Role.STUDENT: frozenset({NoticeVisibility.ALL, NoticeVisibility.STUDENTS}),
    Role.EMPLOYEE: frozenset({NoticeVisibility.ALL, NoticeVisibility.STAFF}),
}


def can_read(actor: Optional[Actor], notice: Notice) -> bool:
    if actor is None or actor.is_admin:
        return True
    return notice.visibility in VISIBLE_TO.get(actor.role, frozenset({NoticeVisibility.ALL}))


class NoticeService(CrudService[Notice]):
    label = "Notice"
    fields = NOTICE_FIELDS

    def get(self, entity_id: int, *, actor: Optional[Actor] = None) -> Notice:
        notice = super().get(entity_id, actor=actor)
        if not can_read(actor, notice):
            raise self.not_found()
        return notice

    def list(self, *, actor: Optional[Actor] = None, **filters: Any) -> List[Notice]:
        return [n for n in super().list(actor=actor, **filters) if can_read(actor, n)]

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if actor is None:
            raise AuthenticationError("Unauthorized")
        values["created_by"] = actor.user_id
        values["created_at"] = now_local()
        return values
