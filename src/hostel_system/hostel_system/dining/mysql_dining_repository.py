from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import MealRate, MealRecord


class MySQLMealRateRepository(MySQLTableRepository[MealRate]):
    table = "meal_rates"
    entity = MealRate


class MySQLMealRecordRepository(MySQLTableRepository[MealRecord]):
    table = "meal_records"
    entity = MealRecord
