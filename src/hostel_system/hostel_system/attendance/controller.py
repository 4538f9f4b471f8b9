from __future__ import annotations

from flask import Flask

from ..common.http import json_body, register_crud_routes, render_many
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    attendance = container.attendance_service

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="attendance_bulk")
    @guard.admin_required
    def attendance_bulk():
        return render_many(attendance.bulk_save(json_body()))

    register_crud_routes(
        app,
        path="/api/attendance",
        endpoint="attendance",
        service=attendance,
        read_guard=guard.login_required,
        write_guard=guard.login_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        filters={"userId": "user_id"},
        label="Attendance",
    )
