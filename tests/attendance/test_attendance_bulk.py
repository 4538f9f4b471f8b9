from __future__ import annotations


def test_bulk_attendance_creates_then_updates(admin_client, container, student, other_student):
    first = admin_client.post(
        "/api/attendance/bulk",
        json={
            "date": "2024-06-10",
            "records": [
                {"userId": student.id, "status": "PRESENT", "checkInTime": "08:30"},
                {"userId": other_student.id, "status": "ABSENT"},
            ],
        },
    )
    again = admin_client.post(
        "/api/attendance/bulk",
        json={"date": "2024-06-10", "records": [{"userId": student.id, "checkOutTime": "17:00"}]},
    )

    assert first.status_code == 200
    assert [r["status"] for r in first.get_json()] == ["PRESENT", "ABSENT"]
    updated = again.get_json()[0]
    assert updated["checkInTime"] == "08:30"
    assert updated["checkOutTime"] == "17:00"
    assert updated["status"] == "PRESENT"
    assert len(container.attendance_service.list()) == 2


def test_bulk_attendance_skips_unknown_status(admin_client, student):
    resp = admin_client.post(
        "/api/attendance/bulk",
        json={"date": "2024-06-10", "records": [{"userId": student.id, "status": "LATE"}]},
    )

    assert resp.status_code == 200
    assert resp.get_json() == []


def test_attendance_defaults_to_present_and_is_unique_per_day(student_client, student):
    created = student_client.post("/api/attendance", json={"date": "2024-06-10"})
    duplicate = student_client.post("/api/attendance", json={"date": "2024-06-10", "status": "LEAVE"})

    assert created.status_code == 201
    assert created.get_json()["status"] == "PRESENT"
    assert created.get_json()["userId"] == student.id
    assert duplicate.status_code == 409


def test_students_only_see_their_own_attendance(admin_client, student_client, student, other_student):
    admin_client.post(
        "/api/attendance/bulk",
        json={"date": "2024-06-10", "records": [{"userId": student.id}, {"userId": other_student.id}]},
    )

    own = student_client.get("/api/attendance").get_json()
    foreign = student_client.get(f"/api/attendance?userId={other_student.id}")

    assert [r["userId"] for r in own] == [student.id]
    assert foreign.status_code == 403


def test_bulk_attendance_runs_in_one_transaction(admin_client, transaction, student, other_student):
    before = transaction.opened

    resp = admin_client.post(
        "/api/attendance/bulk",
        json={"date": "2024-06-10", "records": [{"userId": student.id}, {"userId": other_student.id}]},
    )

    assert resp.status_code == 200
    assert transaction.opened - before == 1


def test_bulk_attendance_failure_leaves_the_day_untouched(
    admin_client, container, repos, transaction, monkeypatch, student, other_student
):
    admin_client.post(
        "/api/attendance/bulk",
        json={"date": "2024-06-10", "records": [{"userId": student.id, "status": "PRESENT"}]},
    )
    update = repos.attendance.update

    def update_then_fail(entity_id, changes):
        update(entity_id, changes)
        raise RuntimeError("connection lost")

    monkeypatch.setattr(repos.attendance, "update", update_then_fail)
    resp = admin_client.post(
        "/api/attendance/bulk",
        json={
            "date": "2024-06-10",
            "records": [{"userId": other_student.id, "status": "ABSENT"}, {"userId": student.id, "status": "LEAVE"}],
        },
    )

    assert resp.status_code == 500
    assert transaction.rolled_back == 1
    rows = container.attendance_service.list()
    assert [(r.user_id, r.status.value) for r in rows] == [(student.id, "PRESENT")]
