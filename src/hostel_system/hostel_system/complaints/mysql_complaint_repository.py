from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import Complaint


class MySQLComplaintRepository(MySQLTableRepository[Complaint]):
    table = "complaints"
    entity = Complaint
