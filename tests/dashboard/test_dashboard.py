from __future__ import annotations

from src.hostel_system.hostel_system.core.actor import Actor


def test_empty_dashboard(student_client):
    stats = student_client.get("/api/stats/dashboard").get_json()

    assert stats == {
        "totalStudents": 1,
        "totalEmployees": 0,
        "totalBlocks": 0,
        "totalRooms": 0,
        "totalCapacity": 0,
        "occupiedSeats": 0,
        "availableSeats": 0,
        "occupancyRate": 0,
        "openComplaints": 0,
        "activeNotices": 0,
    }


def test_occupancy_rate_rounds_half_up(container, admin, student):
    block = container.block_service.create({"name": "Block A"})
    room = container.room_service.create({"blockId": block.id, "roomNumber": "1", "capacity": 8})
    container.allocation_service.create(
        {"studentId": student.id, "roomId": room.id, "bedNumber": 1, "allocatedDate": "2024-06-01"}
    )
    container.notice_service.create({"title": "Hi", "content": "..."}, actor=Actor(admin.id, admin.role))
    container.notice_service.create(
        {"title": "Old", "content": "...", "isActive": False}, actor=Actor(admin.id, admin.role)
    )

    stats = container.dashboard_service.stats()

    assert stats.total_capacity == 8
    assert stats.available_seats == 7
    # 12.5% -> 13
    assert stats.occupancy_rate == 13
    assert stats.active_notices == 1
    assert stats.total_blocks == 1
