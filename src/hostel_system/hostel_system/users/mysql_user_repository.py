from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import User


class MySQLUserRepository(MySQLTableRepository[User]):
    table = "users"
    entity = User
