from __future__ import annotations

from flask import Flask, jsonify

from ..auth.controller import USER_PRIVATE_FIELDS
from ..common.http import json_body, render, render_many
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    users = container.user_service

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @guard.admin_required
    def users_list():
        return render_many(users.list(), exclude=USER_PRIVATE_FIELDS)

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    @guard.login_required
    def users_get(user_id: int):
        return jsonify(render(users.get(user_id), exclude=USER_PRIVATE_FIELDS))

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @guard.admin_required
    def users_create():
        user = users.create(json_body(), actor=guard.current_actor())
        return jsonify(render(user, exclude=USER_PRIVATE_FIELDS)), 201

    @app.route("/api/users/<int:user_id>", methods=["PATCH"], endpoint="users_update")
    @guard.login_required
    def users_update(user_id: int):
        user = users.update(user_id, json_body(), actor=guard.current_actor())
        if not user.is_active:
            container.sessions.destroy_user(user.id)
        return jsonify(render(user, exclude=USER_PRIVATE_FIELDS))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @guard.admin_required
    def users_delete(user_id: int):
        users.delete(user_id, actor=guard.current_actor())
        container.sessions.destroy_user(user_id)
        return jsonify({"message": "User deleted"})

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @guard.login_required
    def students_list():
        return render_many(users.list_students(), exclude=USER_PRIVATE_FIELDS)

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @guard.admin_required
    def employees_list():
        return render_many(users.list_employees(), exclude=USER_PRIVATE_FIELDS)
