from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..common.crud import CrudService
from ..common.datetime_utils import now_local
from ..common.repository import EntityRepository
from ..core.actor import Actor
from ..core.enums import PaymentStatus
from ..core.exceptions import ConflictError, FieldIssue, ValidationError
from ..users.model import User
from .model import (
    EXPENSE_FIELDS,
    SALARY_FIELDS,
    STUDENT_PAYMENT_FIELDS,
    VENDOR_PAYMENT_FIELDS,
    Expense,
    Salary,
    StudentPayment,
    VendorPayment,
)

logger = logging.getLogger(__name__)


class StudentPaymentService(CrudService[StudentPayment]):
    """Payments a student reports; an admin approves or rejects them.

    Once APPROVED or REJECTED a payment no longer changes status, and a
    student can no longer edit it.
    """

    label = "Payment"
    fields = STUDENT_PAYMENT_FIELDS
    owner_field = "student_id"
    admin_fields = frozenset({"status"})

    def _stamp(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if values.get("status") == PaymentStatus.APPROVED:
            values["approved_by"] = actor.user_id if actor else None
            values["approved_date"] = now_local()
        return values

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        return self._stamp(values, actor)

    def _before_update(
        self, existing: StudentPayment, changes: Dict[str, Any], actor: Optional[Actor]
    ) -> Dict[str, Any]:
        decided = existing.status != PaymentStatus.PENDING
        if decided and actor is not None and not actor.is_admin:
            raise ConflictError("Payment has already been decided")

        status = changes.get("status")
        if status is None or status == existing.status:
            changes.pop("status", None)
            return changes
        if decided:
            raise ConflictError(f"Payment is already {existing.status.value}")
        if status == PaymentStatus.PENDING:
            return changes

        logger.info("payment #%s %s by #%s", existing.id, status.value, actor.user_id if actor else "-")
        return self._stamp(changes, actor)


class VendorPaymentService(CrudService[VendorPayment]):
    label = "Vendor payment"
    fields = VENDOR_PAYMENT_FIELDS


class ExpenseService(CrudService[Expense]):
    label = "Expense"
    fields = EXPENSE_FIELDS


class SalaryService(CrudService[Salary]):
    label = "Salary"
    fields = SALARY_FIELDS

    def __init__(self, repo: EntityRepository[Salary], users: EntityRepository[User]):
        super().__init__(repo)
        self._users = users

    def _require_employee(self, employee_id: int) -> None:
        if self._users.get(employee_id) is None:
            raise ValidationError("Invalid input", [FieldIssue("employeeId", "Employee not found")])

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        self._require_employee(values["employee_id"])
        return values

    def _before_update(self, existing: Salary, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if "employee_id" in changes:
            self._require_employee(changes["employee_id"])
        return changes
