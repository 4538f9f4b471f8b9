from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..common.crud import CrudService, Transaction
from ..common.entities import merge_updates
from ..common.repository import EntityRepository
from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import ConflictError, FieldIssue, NotFoundError, ValidationError
from ..users.model import User
from .model import ALLOCATION_FIELDS, BLOCK_FIELDS, ROOM_FIELDS, Block, Room, SeatAllocation

logger = logging.getLogger(__name__)


class BlockService(CrudService[Block]):
    label = "Block"
    fields = BLOCK_FIELDS

    def __init__(self, repo: EntityRepository[Block], rooms: EntityRepository[Room]):
        super().__init__(repo)
        self._rooms = rooms

    def _name_taken(self, name: str, *, except_id: Optional[int] = None) -> bool:
        return any(b.id != except_id for b in self._repo.list(name=name))

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if self._name_taken(values["name"]):
            raise ConflictError("Block name already exists")
        return values

    def _before_update(self, existing: Block, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if "name" in changes and self._name_taken(changes["name"], except_id=existing.id):
            raise ConflictError("Block name already exists")
        return changes

    def delete(self, entity_id: int, *, actor: Optional[Actor] = None) -> None:
        block = self.get(entity_id)
        if self._rooms.list(block_id=block.id):
            raise ConflictError("Block still has rooms")
        super().delete(block.id, actor=actor)


class RoomService(CrudService[Room]):
    label = "Room"
    fields = ROOM_FIELDS

    def __init__(self, repo: EntityRepository[Room], blocks: EntityRepository[Block]):
        super().__init__(repo)
        self._blocks = blocks

    def _require_block(self, block_id: int) -> None:
        if self._blocks.get(block_id) is None:
            raise ValidationError("Invalid input", [FieldIssue("blockId", "Block not found")])

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        self._require_block(values["block_id"])
        return values

    def _before_update(self, existing: Room, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if "block_id" in changes:
            self._require_block(changes["block_id"])
        return changes


class AllocationService(CrudService[SeatAllocation]):
    """Seat allocations with the one-active-seat-per-student rule.

    Check and write share one transaction; the candidate rows are read with
    ``for_update`` so a concurrent allocation for the same student waits.
    """

    label = "Allocation"
    fields = ALLOCATION_FIELDS

    _SEAT_FIELDS = frozenset({"student_id", "room_id", "bed_number", "is_active"})

    def __init__(
        self,
        repo: EntityRepository[SeatAllocation],
        users: EntityRepository[User],
        rooms: EntityRepository[Room],
        *,
        transaction: Optional[Transaction] = None,
    ):
        super().__init__(repo, transaction=transaction)
        self._users = users
        self._rooms = rooms

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> SeatAllocation:
        with self._transaction():
            created = super().create(payload, actor=actor)
        logger.info("student #%s allocated room #%s bed %s", created.student_id, created.room_id, created.bed_number)
        return created

    def update(self, entity_id: int, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> SeatAllocation:
        with self._transaction():
            return super().update(entity_id, payload, actor=actor)

    def release(self, entity_id: int) -> SeatAllocation:
        with self._transaction():
            allocation = self.get(entity_id)
            if not allocation.is_active:
                return allocation
            released = self._repo.update(allocation.id, {"is_active": False})
        if released is None:
            raise self.not_found()
        logger.info("allocation #%s released", released.id)
        return released

    def get_for_student(self, student_id: int) -> SeatAllocation:
        active = self._repo.list(student_id=int(student_id), is_active=True)
        if not active:
            raise NotFoundError("Allocation not found")
        return active[0]

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        self._check_seat(values["student_id"], values["room_id"], values["bed_number"], values["is_active"])
        return values

    def _before_update(
        self, existing: SeatAllocation, changes: Dict[str, Any], actor: Optional[Actor]
    ) -> Dict[str, Any]:
        if self._SEAT_FIELDS & set(changes):
            merged = merge_updates(existing, changes)
            self._check_seat(
                merged.student_id, merged.room_id, merged.bed_number, merged.is_active, except_id=existing.id
            )
        return changes

    def _check_seat(
        self,
        student_id: int,
        room_id: int,
        bed_number: int,
        is_active: bool,
        *,
        except_id: Optional[int] = None,
    ) -> None:
        issues: List[FieldIssue] = []
        student = self._users.get(student_id)
        if student is None or student.role != Role.STUDENT:
            issues.append(FieldIssue("studentId", "Student not found"))
        room = self._rooms.get(room_id)
        if room is None:
            issues.append(FieldIssue("roomId", "Room not found"))
        elif bed_number > room.capacity:
            issues.append(FieldIssue("bedNumber", f"Room has only {room.capacity} beds"))
        if issues:
            raise ValidationError("Invalid input", issues)

        if not is_active:
            return

        held = [a for a in self._repo.list(student_id=student_id, is_active=True, for_update=True) if a.id != except_id]
        if held:
            logger.info("student #%s already holds allocation #%s", student_id, held[0].id)
            raise ConflictError("Student already has an active seat allocation")

        taken = [
            a
            for a in self._repo.list(room_id=room_id, bed_number=bed_number, is_active=True, for_update=True)
            if a.id != except_id
        ]
        if taken:
            raise ConflictError("Bed is already occupied")
