from __future__ import annotations


def test_admin_creates_users_with_unique_email(admin_client):
    body = {"name": "Cook", "email": "cook@hms.com", "password": "cook1234", "role": "EMPLOYEE"}

    created = admin_client.post("/api/users", json=body)
    duplicate = admin_client.post("/api/users", json=body)

    assert created.status_code == 201
    assert created.get_json()["isActive"] is True
    assert "passwordHash" not in created.get_json()
    assert duplicate.status_code == 409


def test_user_creation_reports_all_problems(admin_client):
    resp = admin_client.post("/api/users", json={"email": "nope", "password": "123", "role": "JANITOR"})

    assert resp.status_code == 400
    assert {e["field"] for e in resp.get_json()["errors"]} == {"name", "email", "password", "role"}


def test_students_edit_only_their_own_profile(student_client, student, other_student):
    own = student_client.patch(f"/api/users/{student.id}", json={"phone": "555-0101"})
    other = student_client.patch(f"/api/users/{other_student.id}", json={"phone": "555-0102"})
    promote = student_client.patch(f"/api/users/{student.id}", json={"role": "ADMIN"})

    assert own.status_code == 200
    assert own.get_json()["phone"] == "555-0101"
    assert other.status_code == 403
    assert promote.status_code == 403


def test_password_change_takes_effect(app, student_client, student):
    student_client.patch(f"/api/users/{student.id}", json={"password": "new-secret"})

    old = app.test_client().post("/api/auth/login", json={"email": "student@hms.com", "password": "student123"})
    new = app.test_client().post("/api/auth/login", json={"email": "student@hms.com", "password": "new-secret"})

    assert old.status_code == 401
    assert new.status_code == 200


def test_deleting_a_user_ends_their_sessions(admin_client, student_client, student):
    assert admin_client.delete(f"/api/users/{student.id}").status_code == 200

    assert student_client.get("/api/auth/me").status_code == 401
    assert admin_client.get(f"/api/users/{student.id}").status_code == 404


def test_students_and_employees_views(admin_client, student_client, container, student):
    container.user_service.create({"name": "Cook", "email": "cook@hms.com", "password": "cook1234", "role": "EMPLOYEE"})

    students = student_client.get("/api/students").get_json()
    employees = admin_client.get("/api/employees").get_json()

    assert [s["email"] for s in students] == ["student@hms.com"]
    assert [e["email"] for e in employees] == ["cook@hms.com"]
    assert student_client.get("/api/employees").status_code == 403
    assert student_client.get("/api/users").status_code == 403


def test_only_a_super_admin_manages_super_admins(admin_client, container, login):
    root = container.user_service.create(
        {"name": "Root", "email": "root@hms.com", "password": "root1234", "role": "SUPER_ADMIN"}
    )
    body = {"name": "Boss", "email": "boss@hms.com", "password": "boss1234", "role": "SUPER_ADMIN"}

    assert admin_client.patch(f"/api/users/{root.id}", json={"password": "taken-over"}).status_code == 403
    assert admin_client.patch(f"/api/users/{root.id}", json={"isActive": False}).status_code == 403
    assert admin_client.patch(f"/api/users/{root.id}", json={"role": "STUDENT"}).status_code == 403
    assert admin_client.delete(f"/api/users/{root.id}").status_code == 403
    assert admin_client.post("/api/users", json=body).status_code == 403
    assert container.user_service.get(root.id).is_active is True

    root_client = login("root@hms.com", "root1234")
    assert root_client.post("/api/users", json=body).status_code == 201
    assert root_client.patch(f"/api/users/{root.id}", json={"phone": "555-0100"}).status_code == 200


def test_admins_cannot_promote_to_super_admin(admin_client, student):
    resp = admin_client.patch(f"/api/users/{student.id}", json={"role": "SUPER_ADMIN"})

    assert resp.status_code == 403
