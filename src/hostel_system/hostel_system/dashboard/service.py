from __future__ import annotations

import math
from dataclasses import dataclass

from ..common.repository import EntityRepository
from ..complaints.model import Complaint
from ..core.enums import ComplaintStatus, Role
from ..notices.model import Notice
from ..rooms.model import Block, Room, SeatAllocation
from ..users.model import User


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_employees: int
    total_blocks: int
    total_rooms: int
    total_capacity: int
    occupied_seats: int
    available_seats: int
    occupancy_rate: int
    open_complaints: int
    active_notices: int


class DashboardService:
    """Read-only counters over the current repository state."""

    def __init__(
        self,
        users: EntityRepository[User],
        blocks: EntityRepository[Block],
        rooms: EntityRepository[Room],
        allocations: EntityRepository[SeatAllocation],
        complaints: EntityRepository[Complaint],
        notices: EntityRepository[Notice],
    ):
        self._users = users
        self._blocks = blocks
        self._rooms = rooms
        self._allocations = allocations
        self._complaints = complaints
        self._notices = notices

    def stats(self) -> DashboardStats:
        rooms = self._rooms.list()
        capacity = sum(r.capacity or 0 for r in rooms)
        occupied = len(self._allocations.list(is_active=True))
        pending = {ComplaintStatus.OPEN, ComplaintStatus.IN_PROGRESS}

        return DashboardStats(
            total_students=len(self._users.list(role=Role.STUDENT)),
            total_employees=len(self._users.list(role=Role.EMPLOYEE)),
            total_blocks=len(self._blocks.list()),
            total_rooms=len(rooms),
            total_capacity=capacity,
            occupied_seats=occupied,
            available_seats=capacity - occupied,
            # rounds half up
            occupancy_rate=math.floor(occupied * 100 / capacity + 0.5) if capacity > 0 else 0,
            open_complaints=sum(1 for c in self._complaints.list() if c.status in pending),
            active_notices=len(self._notices.list(is_active=True)),
        )
