from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..common.bulk import DailyRecordUpserter
from ..common.crud import CrudService, Transaction
from ..common.datetime_utils import month_bounds
from ..common.entities import merge_updates
from ..common.repository import EntityRepository
from ..core.actor import Actor
from ..core.enums import MealType, Role
from ..core.exceptions import AuthorizationError, ConflictError, FieldIssue, ValidationError
from ..users.model import User
from .model import MEAL_RATE_FIELDS, MEAL_RECORD_FIELDS, MealRate, MealRecord, MonthlyMealCost

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class MealRateService(CrudService[MealRate]):
    label = "Meal rate"
    fields = MEAL_RATE_FIELDS

    def active_rates(self) -> Dict[MealType, Decimal]:
        """Rate per meal type from the active rows; the latest effective_from wins."""
        current: Dict[MealType, MealRate] = {}
        for rate in self._repo.list(is_active=True):
            held = current.get(rate.meal_type)
            if held is None or rate.effective_from >= held.effective_from:
                current[rate.meal_type] = rate
        return {meal: (current[meal].rate if meal in current else ZERO) for meal in MealType}


class MealRecordService(CrudService[MealRecord]):
    label = "Meal record"
    fields = MEAL_RECORD_FIELDS
    owner_field = "student_id"

    def __init__(
        self,
        repo: EntityRepository[MealRecord],
        users: EntityRepository[User],
        rates: MealRateService,
        *,
        transaction: Optional[Transaction] = None,
    ):
        super().__init__(repo, transaction=transaction)
        self._users = users
        self._rates = rates
        self._bulk = DailyRecordUpserter(
            repo,
            fields=MEAL_RECORD_FIELDS,
            subject_field="student_id",
            transaction=transaction,
            subject_exists=self._is_student,
        )

    def _is_student(self, user_id: int) -> bool:
        user = self._users.get(user_id)
        return user is not None and user.role == Role.STUDENT

    def _ensure_unique(self, student_id: int, day, *, except_id: Optional[int] = None) -> None:
        if any(r.id != except_id for r in self._repo.list(student_id=student_id, date=day)):
            raise ConflictError("Meal record for this student and date already exists")

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if not self._is_student(values["student_id"]):
            raise ValidationError("Invalid input", [FieldIssue("studentId", "Student not found")])
        self._ensure_unique(values["student_id"], values["date"])
        return values

    def _before_update(self, existing: MealRecord, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if {"student_id", "date"} & set(changes):
            merged = merge_updates(existing, changes)
            self._ensure_unique(merged.student_id, merged.date, except_id=existing.id)
        return changes

    def bulk_save(self, payload: Dict[str, Any]) -> List[MealRecord]:
        return self._bulk.upsert(payload.get("date"), payload.get("meals"), entries_key="meals")

    def monthly_cost(self, student_id: Any, year: Any, month: Any, *, actor: Actor) -> MonthlyMealCost:
        issues: List[FieldIssue] = []
        bounds = (("studentId", student_id, 1, None), ("year", year, 1900, 9999), ("month", month, 1, 12))
        for name, value, low, high in bounds:
            if value is None:
                issues.append(FieldIssue(name, "Required"))
            elif value < low or (high is not None and value > high):
                issues.append(FieldIssue(name, "Out of range"))
        if issues:
            raise ValidationError("Invalid input", issues)
        if not actor.is_admin and student_id != actor.user_id:
            raise AuthorizationError("You can only view your own meal cost")

        start, end = month_bounds(year, month)
        counts = {meal: 0 for meal in MealType}
        for record in self._repo.list(student_id=student_id):
            if start <= record.date < end:
                counts[MealType.BREAKFAST] += int(record.breakfast)
                counts[MealType.LUNCH] += int(record.lunch)
                counts[MealType.DINNER] += int(record.dinner)

        rates = self._rates.active_rates()
        total = sum((rates[meal] * counts[meal] for meal in MealType), ZERO)
        return MonthlyMealCost(
            student_id=student_id,
            year=year,
            month=month,
            breakfast=counts[MealType.BREAKFAST],
            lunch=counts[MealType.LUNCH],
            dinner=counts[MealType.DINNER],
            breakfast_rate=rates[MealType.BREAKFAST],
            lunch_rate=rates[MealType.LUNCH],
            dinner_rate=rates[MealType.DINNER],
            total_cost=total,
        )
