from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, query_int, register_crud_routes, render, render_many
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    records = container.meal_record_service

    @app.route("/api/meal-records/bulk", methods=["POST"], endpoint="meal_records_bulk")
    @guard.admin_required
    def meal_records_bulk():
        return render_many(records.bulk_save(json_body()))

    @app.route("/api/meal-records/cost", methods=["GET"], endpoint="meal_records_cost")
    @guard.login_required
    def meal_records_cost():
        actor = guard.current_actor()
        student_id = query_int("studentId")
        summary = records.monthly_cost(
            actor.user_id if student_id is None else student_id,
            query_int("year"),
            query_int("month"),
            actor=actor,
        )
        return jsonify(render(summary))

    register_crud_routes(
        app,
        path="/api/meal-rates",
        endpoint="meal_rates",
        service=container.meal_rate_service,
        read_guard=guard.login_required,
        write_guard=guard.admin_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        label="Meal rate",
    )
    register_crud_routes(
        app,
        path="/api/meal-records",
        endpoint="meal_records",
        service=records,
        read_guard=guard.login_required,
        write_guard=guard.login_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        filters={"studentId": "student_id"},
        label="Meal record",
    )
