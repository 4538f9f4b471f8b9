from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import Attendance


class MySQLAttendanceRepository(MySQLTableRepository[Attendance]):
    table = "attendance"
    entity = Attendance
