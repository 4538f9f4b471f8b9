from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..common.validators import Field
from ..core.enums import MealType


@dataclass(frozen=True)
class MealRate:
    id: int
    meal_type: MealType
    rate: Decimal
    effective_from: date
    is_active: bool = True


@dataclass(frozen=True)
class MealRecord:
    """Which meals one student took on one day (one row per student and day)."""

    id: int
    student_id: int
    date: date
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False


@dataclass(frozen=True)
class MonthlyMealCost:
    student_id: int
    year: int
    month: int
    breakfast: int
    lunch: int
    dinner: int
    breakfast_rate: Decimal
    lunch_rate: Decimal
    dinner_rate: Decimal
    total_cost: Decimal


MEAL_RATE_FIELDS = (
    Field("meal_type", MealType, required=True),
    Field("rate", Decimal, required=True, minimum=0),
    Field("effective_from", date, required=True),
    Field("is_active", bool, default=True, nullable=False),
)

MEAL_RECORD_FIELDS = (
    Field("student_id", int, required=True),
    Field("date", date, required=True),
    Field("breakfast", bool, default=False, nullable=False),
    Field("lunch", bool, default=False, nullable=False),
    Field("dinner", bool, default=False, nullable=False),
)
