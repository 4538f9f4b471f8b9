from __future__ import annotations

import threading

import pytest

from src.hostel_system.hostel_system.core.actor import Actor
from src.hostel_system.hostel_system.core.exceptions import ConflictError, ValidationError


@pytest.fixture
def room(container):
    block = container.block_service.create({"name": "Block A", "floorCount": 3})
    return container.room_service.create(
        {"blockId": block.id, "roomNumber": "101", "capacity": 4, "type": "AC", "floor": 1, "monthlyRent": 5000}
    )


def _allocate(container, student, room, bed=1):
    return container.allocation_service.create(
        {"studentId": student.id, "roomId": room.id, "bedNumber": bed, "allocatedDate": "2024-06-01"}
    )


def test_block_a_room_101_scenario(admin_client, student):
    block = admin_client.post("/api/blocks", json={"name": "Block A", "floorCount": 3}).get_json()
    room = admin_client.post(
        "/api/rooms",
        json={"blockId": block["id"], "roomNumber": "101", "capacity": 4, "type": "AC", "monthlyRent": "5000"},
    ).get_json()

    first = admin_client.post(
        "/api/seat-allocations",
        json={"studentId": student.id, "roomId": room["id"], "bedNumber": 1, "allocatedDate": "2024-06-01"},
    )
    second = admin_client.post(
        "/api/seat-allocations",
        json={"studentId": student.id, "roomId": room["id"], "bedNumber": 2, "allocatedDate": "2024-06-02"},
    )

    assert first.status_code == 201
    assert second.status_code == 409

    active = admin_client.get(f"/api/seat-allocations/student/{student.id}")
    assert active.status_code == 200
    assert active.get_json()["bedNumber"] == 1

    stats = admin_client.get("/api/stats/dashboard").get_json()
    assert stats["occupiedSeats"] == 1
    assert stats["availableSeats"] == 3
    assert stats["occupancyRate"] == 25


def test_release_frees_the_student_and_keeps_history(container, student, room):
    allocation = _allocate(container, student, room)

    released = container.allocation_service.release(allocation.id)
    again = _allocate(container, student, room, bed=2)

    assert released.is_active is False
    assert again.is_active is True
    assert len(container.allocation_service.list(student_id=student.id)) == 2
    assert container.allocation_service.get_for_student(student.id).id == again.id


def test_reactivating_a_released_allocation_is_checked(container, admin, student, room):
    old = _allocate(container, student, room)
    container.allocation_service.release(old.id)
    _allocate(container, student, room, bed=2)

    with pytest.raises(ConflictError):
        container.allocation_service.update(old.id, {"isActive": True}, actor=Actor(admin.id, admin.role))


def test_occupied_bed_is_rejected(container, student, other_student, room):
    _allocate(container, student, room, bed=3)

    with pytest.raises(ConflictError):
        _allocate(container, other_student, room, bed=3)


def test_allocation_references_are_validated(container, admin, student, room):
    with pytest.raises(ValidationError) as exc:
        container.allocation_service.create(
            {"studentId": admin.id, "roomId": room.id, "bedNumber": 9, "allocatedDate": "2024-06-01"}
        )

    assert {i.field for i in exc.value.errors} == {"studentId", "bedNumber"}


def test_concurrent_allocations_for_one_student(container, student, room, transaction):
    results = []

    def worker(bed):
        try:
            results.append(_allocate(container, student, room, bed=bed))
        except ConflictError as e:
            results.append(e)

    threads = [threading.Thread(target=worker, args=(bed,)) for bed in (1, 2, 3, 4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    created = [r for r in results if not isinstance(r, ConflictError)]
    assert len(created) == 1
    assert len(container.allocation_service.list(student_id=student.id, is_active=True)) == 1
    assert transaction.opened >= 4


def test_block_with_rooms_cannot_be_deleted(admin_client, container, room):
    resp = admin_client.delete(f"/api/blocks/{room.block_id}")

    assert resp.status_code == 409
    assert container.block_service.get(room.block_id)


def test_block_names_are_unique(admin_client):
    assert admin_client.post("/api/blocks", json={"name": "Block A"}).status_code == 201
    assert admin_client.post("/api/blocks", json={"name": "Block A"}).status_code == 409


def test_rooms_filter_by_block(admin_client, room):
    other = admin_client.post("/api/blocks", json={"name": "Block B"}).get_json()
    admin_client.post("/api/rooms", json={"blockId": other["id"], "roomNumber": "201"})

    rooms = admin_client.get(f"/api/rooms?blockId={room.block_id}").get_json()

    assert [r["roomNumber"] for r in rooms] == ["101"]
