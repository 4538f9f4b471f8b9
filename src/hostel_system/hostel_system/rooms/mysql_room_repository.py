from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import Block, Room, SeatAllocation


class MySQLBlockRepository(MySQLTableRepository[Block]):
    table = "blocks"
    entity = Block


class MySQLRoomRepository(MySQLTableRepository[Room]):
    table = "rooms"
    entity = Room


class MySQLSeatAllocationRepository(MySQLTableRepository[SeatAllocation]):
    table = "seat_allocations"
    entity = SeatAllocation
