from __future__ import annotations


def test_complaint_round_trip(student_client, admin_client, student, admin):
    filed = student_client.post("/api/complaints", json={"subject": "Fan broken", "description": "Room 101 fan"})
    assert filed.status_code == 201
    complaint = filed.get_json()
    assert complaint["studentId"] == student.id
    assert complaint["status"] == "OPEN"
    assert complaint["createdAt"]

    working = admin_client.patch(f"/api/complaints/{complaint['id']}", json={"status": "IN_PROGRESS"})
    assert working.get_json()["resolvedAt"] is None

    resolved = admin_client.patch(
        f"/api/complaints/{complaint['id']}", json={"status": "RESOLVED", "resolution": "Replaced the fan"}
    ).get_json()
    assert resolved["resolvedBy"] == admin.id
    assert resolved["resolvedAt"] is not None
    assert resolved["resolution"] == "Replaced the fan"

    reopened = admin_client.patch(f"/api/complaints/{complaint['id']}", json={"status": "OPEN"}).get_json()
    assert reopened["resolvedBy"] is None
    assert reopened["resolvedAt"] is None
    assert reopened["resolution"] is None


def test_students_cannot_resolve_their_own_complaint(student_client):
    complaint = student_client.post("/api/complaints", json={"subject": "Noise", "description": "Late music"}).get_json()

    status = student_client.patch(f"/api/complaints/{complaint['id']}", json={"status": "CLOSED"})
    resolution = student_client.patch(f"/api/complaints/{complaint['id']}", json={"resolution": "fixed"})
    wording = student_client.patch(f"/api/complaints/{complaint['id']}", json={"description": "Very late music"})

    assert status.status_code == 403
    assert resolution.status_code == 403
    assert wording.status_code == 200


def test_complaint_validation_lists_missing_fields(student_client):
    resp = student_client.post("/api/complaints", json={"priority": "HIGH"})

    assert resp.status_code == 400
    assert {e["field"] for e in resp.get_json()["errors"]} == {"subject", "description"}


def test_dashboard_counts_open_and_in_progress_complaints(student_client, admin_client):
    ids = [
        student_client.post("/api/complaints", json={"subject": f"Issue {n}", "description": "x"}).get_json()["id"]
        for n in range(3)
    ]
    admin_client.patch(f"/api/complaints/{ids[0]}", json={"status": "IN_PROGRESS"})
    admin_client.patch(f"/api/complaints/{ids[1]}", json={"status": "CLOSED"})

    assert admin_client.get("/api/stats/dashboard").get_json()["openComplaints"] == 2
