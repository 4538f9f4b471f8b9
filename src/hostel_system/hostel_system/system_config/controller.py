from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, render, render_many
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    configs = container.system_config_service

    @app.route("/api/system-config", methods=["GET"], endpoint="system_config_list")
    @guard.login_required
    def system_config_list():
        return render_many(configs.list())

    @app.route("/api/system-config/<key>", methods=["GET"], endpoint="system_config_get")
    @guard.login_required
    def system_config_get(key: str):
        return jsonify(render(configs.get_by_key(key)))

    @app.route("/api/system-config", methods=["POST"], endpoint="system_config_create")
    @guard.admin_required
    def system_config_create():
        return jsonify(render(configs.create(json_body(), actor=guard.current_actor()))), 201

    @app.route("/api/system-config/<key>", methods=["PATCH"], endpoint="system_config_update")
    @guard.admin_required
    def system_config_update(key: str):
        return jsonify(render(configs.update_by_key(key, json_body())))

    @app.route("/api/system-config/<key>", methods=["DELETE"], endpoint="system_config_delete")
    @guard.admin_required
    def system_config_delete(key: str):
        configs.delete_by_key(key)
        return jsonify({"message": "Config deleted"})
