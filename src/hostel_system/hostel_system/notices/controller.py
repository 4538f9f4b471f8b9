from __future__ import annotations

from flask import Flask

from ..common.http import register_crud_routes
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    register_crud_routes(
        app,
        path="/api/notices",
        endpoint="notices",
        service=container.notice_service,
        read_guard=guard.login_required,
        write_guard=guard.admin_required,
        delete_guard=guard.admin_required,
        actor=guard.current_actor,
        label="Notice",
    )
