from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import render
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats/dashboard", methods=["GET"], endpoint="dashboard_stats")
    @container.guard.login_required
    def dashboard_stats():
        return jsonify(render(container.dashboard_service.stats()))
