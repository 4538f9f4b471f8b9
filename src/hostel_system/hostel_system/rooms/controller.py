from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import register_crud_routes, render
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    register_crud_routes(
        app,
        path="/api/blocks",
        endpoint="blocks",
        service=container.block_service,
        read_guard=guard.login_required,
        write_guard=guard.admin_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        label="Block",
    )
    register_crud_routes(
        app,
        path="/api/rooms",
        endpoint="rooms",
        service=container.room_service,
        read_guard=guard.login_required,
        write_guard=guard.admin_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        filters={"blockId": "block_id"},
        label="Room",
    )
    register_crud_routes(
        app,
        path="/api/seat-allocations",
        endpoint="allocations",
        service=container.allocation_service,
        read_guard=guard.login_required,
        write_guard=guard.admin_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        filters={"studentId": "student_id", "roomId": "room_id"},
        label="Allocation",
    )

    @app.route(
        "/api/seat-allocations/student/<int:student_id>",
        methods=["GET"],
        endpoint="allocations_for_student",
    )
    @guard.login_required
    def allocations_for_student(student_id: int):
        return jsonify(render(container.allocation_service.get_for_student(student_id)))

    @app.route(
        "/api/seat-allocations/<int:entity_id>/release",
        methods=["POST"],
        endpoint="allocations_release",
    )
    @guard.admin_required
    def allocations_release(entity_id: int):
        return jsonify(render(container.allocation_service.release(entity_id)))
