from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..common.bulk import DailyRecordUpserter
from ..common.crud import CrudService, Transaction
from ..common.entities import merge_updates
from ..common.repository import EntityRepository
from ..core.actor import Actor
from ..core.exceptions import ConflictError
from ..users.model import User
from .model import ATTENDANCE_FIELDS, Attendance


class AttendanceService(CrudService[Attendance]):
    label = "Attendance"
    fields = ATTENDANCE_FIELDS
    owner_field = "user_id"

    def __init__(
        self,
        repo: EntityRepository[Attendance],
        users: EntityRepository[User],
        *,
        transaction: Optional[Transaction] = None,
    ):
        super().__init__(repo, transaction=transaction)
        self._bulk = DailyRecordUpserter(
            repo,
            fields=ATTENDANCE_FIELDS,
            subject_field="user_id",
            transaction=transaction,
            subject_exists=lambda user_id: users.get(user_id) is not None,
        )

    def _ensure_unique(self, user_id: int, day, *, except_id: Optional[int] = None) -> None:
        if any(r.id != except_id for r in self._repo.list(user_id=user_id, date=day)):
            raise ConflictError("Attendance for this user and date already exists")

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        self._ensure_unique(values["user_id"], values["date"])
        return values

    def _before_update(self, existing: Attendance, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if {"user_id", "date"} & set(changes):
            merged = merge_updates(existing, changes)
            self._ensure_unique(merged.user_id, merged.date, except_id=existing.id)
        return changes

    def bulk_save(self, payload: Mapping[str, Any]) -> List[Attendance]:
        return self._bulk.upsert(payload.get("date"), payload.get("records"), entries_key="records")
