from __future__ import annotations

import pytest

from src.hostel_system.hostel_system.core.actor import Actor
from src.hostel_system.hostel_system.core.enums import PaymentStatus
from src.hostel_system.hostel_system.core.exceptions import ConflictError

PAYMENT = {"amount": "5000", "paymentType": "RENT", "month": "June", "year": 2024}


def test_student_reports_own_payment(student_client, student):
    resp = student_client.post("/api/student-payments", json=PAYMENT)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["studentId"] == student.id
    assert body["status"] == "PENDING"
    assert body["paymentMethod"] == "CASH"
    assert body["amount"] == "5000.00"


def test_student_cannot_pay_for_others_or_set_status(student_client, other_student):
    foreign = student_client.post("/api/student-payments", json={**PAYMENT, "studentId": other_student.id})
    approved = student_client.post("/api/student-payments", json={**PAYMENT, "status": "APPROVED"})

    assert foreign.status_code == 403
    assert approved.status_code == 403


def test_admin_approval_is_stamped_and_final(admin_client, student_client, admin):
    payment = student_client.post("/api/student-payments", json=PAYMENT).get_json()

    approved = admin_client.patch(f"/api/student-payments/{payment['id']}", json={"status": "APPROVED"})
    rejected = admin_client.patch(f"/api/student-payments/{payment['id']}", json={"status": "REJECTED"})
    edited = student_client.patch(f"/api/student-payments/{payment['id']}", json={"remarks": "paid twice"})

    assert approved.status_code == 200
    assert approved.get_json()["approvedBy"] == admin.id
    assert approved.get_json()["approvedDate"] is not None
    assert rejected.status_code == 409
    assert edited.status_code == 409


def test_student_status_change_is_forbidden(student_client):
    payment = student_client.post("/api/student-payments", json=PAYMENT).get_json()

    resp = student_client.patch(f"/api/student-payments/{payment['id']}", json={"status": "APPROVED"})

    assert resp.status_code == 403


def test_rejected_payment_has_no_approver(container, admin, student):
    actor = Actor(admin.id, admin.role)
    payment = container.student_payment_service.create({**PAYMENT, "studentId": student.id}, actor=actor)

    rejected = container.student_payment_service.update(payment.id, {"status": "REJECTED"}, actor=actor)

    assert rejected.status == PaymentStatus.REJECTED
    assert rejected.approved_by is None
    with pytest.raises(ConflictError):
        container.student_payment_service.update(payment.id, {"status": "PENDING"}, actor=actor)


def test_payment_listing_is_scoped_for_students(admin_client, student_client, container, admin, other_student):
    container.student_payment_service.create(
        {**PAYMENT, "studentId": other_student.id}, actor=Actor(admin.id, admin.role)
    )
    student_client.post("/api/student-payments", json=PAYMENT)

    assert len(student_client.get("/api/student-payments").get_json()) == 1
    assert len(admin_client.get("/api/student-payments").get_json()) == 2
    assert len(admin_client.get(f"/api/student-payments?studentId={other_student.id}").get_json()) == 1
    assert student_client.get("/api/student-payments/1").status_code == 403


def test_finance_ledgers_are_admin_only(admin_client, student_client, container):
    employee = container.user_service.create(
        {"name": "Cook", "email": "cook@hms.com", "password": "cook1234", "role": "EMPLOYEE"}
    )
    salary = {"employeeId": employee.id, "amount": 12000, "month": "June", "year": 2024, "paymentDate": "2024-06-30"}
    expense = {"category": "Utilities", "description": "Power bill", "amount": 900, "expenseDate": "2024-06-05"}

    created = admin_client.post("/api/salaries", json=salary)
    assert created.status_code == 201
    assert created.get_json()["bonus"] == "0.00"
    assert admin_client.post("/api/expenses", json=expense).status_code == 201
    assert admin_client.post("/api/salaries", json={**salary, "employeeId": 999}).status_code == 400
    assert len(admin_client.get(f"/api/salaries?employeeId={employee.id}").get_json()) == 1

    assert student_client.get("/api/salaries").status_code == 403
    assert student_client.get("/api/expenses").status_code == 403
    assert student_client.get("/api/vendor-payments").status_code == 403


def test_amount_outside_the_money_range_is_a_validation_error(student_client):
    huge = student_client.post("/api/student-payments", json={**PAYMENT, "amount": "1e30"})
    too_large = student_client.post("/api/student-payments", json={**PAYMENT, "amount": 1e9})

    assert huge.status_code == too_large.status_code == 400
    assert huge.get_json()["errors"][0]["field"] == "amount"
