from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..common.crud import CrudService
from ..common.datetime_utils import now_local
from ..core.actor import Actor
from .model import CLOSING_STATUSES, COMPLAINT_FIELDS, Complaint

logger = logging.getLogger(__name__)


class ComplaintService(CrudService[Complaint]):
    """Students file complaints; admins move them between any two statuses.

    Entering RESOLVED or CLOSED stamps who resolved it and when; going back to
    OPEN or IN_PROGRESS clears the resolution.
    """

    label = "Complaint"
    fields = COMPLAINT_FIELDS
    owner_field = "student_id"
    admin_fields = frozenset({"status", "resolution"})

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        values["created_at"] = now_local()
        if values["status"] in CLOSING_STATUSES:
            values["resolved_at"] = values["created_at"]
            values["resolved_by"] = actor.user_id if actor else None
        return values

    def _before_update(self, existing: Complaint, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        status = changes.get("status")
        if status is None or status == existing.status:
            return changes

        if status in CLOSING_STATUSES:
            if existing.status not in CLOSING_STATUSES:
                changes["resolved_at"] = now_local()
                changes["resolved_by"] = actor.user_id if actor else None
        else:
            changes["resolved_at"] = None
            changes["resolved_by"] = None
            changes["resolution"] = None

        logger.info("complaint #%s %s -> %s", existing.id, existing.status.value, status.value)
        return changes
