from __future__ import annotations

from flask import Flask

from ..common.http import register_crud_routes
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    register_crud_routes(
        app,
        path="/api/student-payments",
        endpoint="student_payments",
        service=container.student_payment_service,
        read_guard=guard.login_required,
        write_guard=guard.login_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        filters={"studentId": "student_id"},
        label="Payment",
    )

    admin_only = {
        "read_guard": guard.admin_required,
        "write_guard": guard.admin_required,
        "delete_guard": guard.admin_required,
        "actor": guard.current_actor,
    }
    register_crud_routes(
        app,
        path="/api/vendor-payments",
        endpoint="vendor_payments",
        service=container.vendor_payment_service,
        label="Vendor payment",
        **admin_only,
    )
    register_crud_routes(
        app,
        path="/api/expenses",
        endpoint="expenses",
        service=container.expense_service,
        label="Expense",
        **admin_only,
    )
    register_crud_routes(
        app,
        path="/api/salaries",
        endpoint="salaries",
        service=container.salary_service,
        filters={"employeeId": "employee_id"},
        label="Salary",
        **admin_only,
    )
