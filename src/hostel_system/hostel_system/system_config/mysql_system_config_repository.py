from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import SystemConfig


class MySQLSystemConfigRepository(MySQLTableRepository[SystemConfig]):
    table = "system_config"
    entity = SystemConfig
