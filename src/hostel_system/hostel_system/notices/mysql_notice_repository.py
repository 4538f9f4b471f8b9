from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import Notice


class MySQLNoticeRepository(MySQLTableRepository[Notice]):
    table = "notices"
    entity = Notice
