from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.validators import Field
from ..core.enums import RoomType


@dataclass(frozen=True)
class Block:
    id: int
    name: str
    description: Optional[str] = None
    floor_count: int = 1


@dataclass(frozen=True)
class Room:
    id: int
    block_id: int
    room_number: str
    capacity: int = 4
    type: RoomType = RoomType.NON_AC
    floor: int = 1
    monthly_rent: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class SeatAllocation:
    """One bed in one room held by one student.

    At most one allocation per student is active; released allocations stay
    as history with ``is_active`` false.
    """

    id: int
    student_id: int
    room_id: int
    bed_number: int
    allocated_date: date
    is_active: bool = True


BLOCK_FIELDS = (
    Field("name", str, required=True),
    Field("description"),
    Field("floor_count", int, default=1, nullable=False, minimum=1),
)

ROOM_FIELDS = (
    Field("block_id", int, required=True),
    Field("room_number", str, required=True),
    Field("capacity", int, default=4, nullable=False, minimum=1),
    Field("type", RoomType, default=RoomType.NON_AC, nullable=False),
    Field("floor", int, default=1, nullable=False, minimum=0),
    Field("monthly_rent", Decimal, default=Decimal("0.00"), nullable=False, minimum=0),
)

ALLOCATION_FIELDS = (
    Field("student_id", int, required=True),
    Field("room_id", int, required=True),
    Field("bed_number", int, required=True, minimum=1),
    Field("allocated_date", date, required=True),
    Field("is_active", bool, default=True, nullable=False),
)
