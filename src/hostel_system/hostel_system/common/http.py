from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, FieldIssue, ValidationError
from .serializers import to_json

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map the domain error taxonomy onto JSON responses.

    Unexpected failures are logged with their traceback and answered with a
    generic 500; no internal detail reaches the caller.
    """

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        body: Dict[str, Any] = {"message": str(e)}
        if isinstance(e, ValidationError):
            body["errors"] = [{"field": i.field, "message": i.message} for i in e.errors]
        return jsonify(body), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal server error"}), 500


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid input", [FieldIssue("body", "Expected a JSON object")])
    return data


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Invalid input", [FieldIssue(name, "Expected integer")])


def render(entity: Any, *, exclude: Iterable[str] = ()):
    return to_json(entity, exclude=exclude)


def render_many(entities: Iterable[Any], *, exclude: Iterable[str] = ()):
    return jsonify([to_json(e, exclude=exclude) for e in entities])


def register_crud_routes(
    app: Flask,
    *,
    path: str,
    endpoint: str,
    service: Any,
    read_guard: Callable,
    write_guard: Callable,
    delete_guard: Callable,
    actor: Callable[[], Any],
    filters: Optional[Mapping[str, str]] = None,
    label: str = "Record",
) -> None:
    """Register list/get/create/patch/delete JSON routes for a CrudService.

    ``filters`` maps query parameters (``studentId``) onto repository filter
    names (``student_id``); each accepts a single integer id.
    """

    filters = dict(filters or {})

    def list_view():
        criteria = {column: query_int(param) for param, column in filters.items()}
        return render_many(service.list(actor=actor(), **criteria))

    def get_view(entity_id: int):
        return jsonify(render(service.get(entity_id, actor=actor())))

    def create_view():
        created = service.create(json_body(), actor=actor())
        return jsonify(render(created)), 201

    def update_view(entity_id: int):
        updated = service.update(entity_id, json_body(), actor=actor())
        return jsonify(render(updated))

    def delete_view(entity_id: int):
        service.delete(entity_id, actor=actor())
        return jsonify({"message": f"{label} deleted"})

    item = f"{path}/<int:entity_id>"
    app.add_url_rule(path, f"{endpoint}_list", read_guard(list_view), methods=["GET"])
    app.add_url_rule(item, f"{endpoint}_get", read_guard(get_view), methods=["GET"])
    app.add_url_rule(path, f"{endpoint}_create", write_guard(create_view), methods=["POST"])
    app.add_url_rule(item, f"{endpoint}_update", write_guard(update_view), methods=["PATCH"])
    app.add_url_rule(item, f"{endpoint}_delete", delete_guard(delete_view), methods=["DELETE"])
