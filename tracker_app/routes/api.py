"""
REST API endpoints for the task tracker.

Registration and login are public.  Every task endpoint sits behind the
``require_auth`` access gate, and all callers with a valid token share one
global task pool.

Endpoints:
    GET    /             - Welcome message (public)
    GET    /health       - Service health check (public)
    POST   /register     - Register a username/password
    POST   /login        - Exchange credentials for a bearer token
    GET    /tasks        - List all tasks
    POST   /tasks        - Create a task
    PUT    /tasks/<id>   - Partially update a task
    DELETE /tasks/<id>   - Delete a task
"""

from __future__ import annotations

import logging
import re
from typing import Any

from flask import Blueprint, Response, current_app, g, jsonify, request

from .. import CREDENTIAL_STORE_KEY, TASK_REPOSITORY_KEY
from ..auth import require_auth
from ..errors import TaskNotFoundError, TrackerError
from ..jwt import create_token
from ..models import MISSING, CredentialStore, TaskRepository

logger = logging.getLogger(__name__)

api_bp = Blueprint("tracker_api", __name__)

_RADIX_LITERAL = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}
_DECIMAL_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


# =====================================================================
# Helper Functions
# =====================================================================


def _credentials() -> CredentialStore:
    return current_app.extensions[CREDENTIAL_STORE_KEY]


def _tasks() -> TaskRepository:
    return current_app.extensions[TASK_REPOSITORY_KEY]


def _json_body() -> dict[str, Any]:
    """
    Return the parsed JSON object body, or ``{}``.

    A missing body, invalid JSON, or a non-object payload all read as an
    empty object, so required-field checks report them uniformly.
    """
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _string_field(data: dict[str, Any], field: str) -> str | None:
    value = data.get(field)
    return value if isinstance(value, str) else None


def _numeric_path_value(raw_id: str) -> float | None:
    """
    Read a path segment as a number, the way a loose ``id == "<segment>"``
    comparison coerces it.

    Surrounding whitespace is ignored; decimals and exponents (``1.0``,
    ``1e0``) and unsigned ``0x`` / ``0o`` / ``0b`` literals are accepted.
    Digit separators (``1_0``) and anything else unparseable give ``None``.
    """
    text = raw_id.strip()
    match = _RADIX_LITERAL.fullmatch(text)
    if match:
        prefix, digits = match.groups()
        try:
            return float(int(digits, _RADIX_BASES[prefix.lower()]))
        except ValueError:
            return None
    if not _DECIMAL_LITERAL.fullmatch(text):
        return None
    return float(text)


def _parse_task_id(raw_id: str) -> int:
    """
    Convert a path segment to the integer task id it compares equal to.

    ``"1"``, ``"1.0"``, ``"1e0"`` and ``"0x1"`` all address task 1.

    Raises:
        TaskNotFoundError: If the segment is not numeric or not a whole
            number, since no task id could equal it.
    """
    value = _numeric_path_value(raw_id)
    if value is None or not value.is_integer():
        raise TaskNotFoundError()
    return int(value)


# =====================================================================
# Public Endpoints
# =====================================================================


@api_bp.route("/", methods=["GET"])
def index() -> tuple[Response, int]:
    return jsonify({"message": "Welcome to the Task Manager API"}), 200


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Return service health status.

    Public endpoint intended for load-balancer and orchestrator health checks.
    """
    return (
        jsonify(
            {
                "status": "healthy",
                "service": "task-tracker",
                "environment": current_app.config["ENVIRONMENT"],
            }
        ),
        200,
    )


@api_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new identity.

    Expects ``username`` and ``password``.  Duplicate usernames are
    accepted; only the first registration can ever log in.

    Returns:
        200 with a confirmation message.
        400 if either field is missing or empty.
    """
    data = _json_body()
    _credentials().register(
        _string_field(data, "username"), _string_field(data, "password")
    )
    return jsonify({"message": "User registered successfully"}), 200


@api_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate and issue a bearer token valid for two hours.

    Returns:
        200 with ``token`` on success.
        400 if a field is missing or the credentials do not match.
    """
    data = _json_body()
    identity = _credentials().verify(
        _string_field(data, "username"), _string_field(data, "password")
    )

    token = create_token(
        username=identity.username,
        secret_key=current_app.config["JWT_SECRET_KEY"],
        expiry_hours=current_app.config["JWT_EXPIRY_HOURS"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )
    return jsonify({"token": token}), 200


# =====================================================================
# Task Endpoints
# =====================================================================


@api_bp.route("/tasks", methods=["GET"])
@require_auth
def get_tasks() -> tuple[Response, int]:
    """Return every task as a JSON array, in creation order."""
    logger.info("GET /tasks - Fetching tasks for username=%s", g.username)
    return jsonify([task.to_dict() for task in _tasks().list()]), 200


@api_bp.route("/tasks", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task from ``title`` and ``description``.

    Returns:
        200 with the new task.
        400 if either field is missing or empty.
    """
    data = _json_body()
    task = _tasks().create(data.get("title"), data.get("description"))
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<task_id>", methods=["PUT"])
@require_auth
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Partially update a task.

    Non-empty ``title`` / ``description`` values replace the stored ones;
    ``completed`` is applied whenever it is present in the body, including
    ``false``.

    Returns:
        200 with the updated task, or 404 if no task has that id.
    """
    data = _json_body()
    task = _tasks().update(
        _parse_task_id(task_id),
        title=data.get("title", MISSING),
        description=data.get("description", MISSING),
        completed=data["completed"] if "completed" in data else MISSING,
    )
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: str) -> tuple[Response, int]:
    """
    Delete a task by id.

    Returns:
        200 with a confirmation message, or 404 if no task has that id.
    """
    _tasks().delete(_parse_task_id(task_id))
    return jsonify({"message": "Task deleted"}), 200


# =====================================================================
# Error Handlers
# =====================================================================


@api_bp.errorhandler(TrackerError)
def tracker_error(error: TrackerError) -> tuple[Response, int]:
    """Render a domain error as its JSON envelope and status code."""
    return jsonify(error.to_dict()), error.status_code


@api_bp.app_errorhandler(404)
def not_found(_: Exception) -> tuple[Response, int]:
    """Return a JSON 404 Not Found error."""
    return jsonify({"error": "Resource not found"}), 404


@api_bp.app_errorhandler(405)
def method_not_allowed(_: Exception) -> tuple[Response, int]:
    """Return a JSON 405 Method Not Allowed error."""
    return jsonify({"error": "Method not allowed"}), 405


@api_bp.app_errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Log the exception and return a JSON 500 Internal Server Error."""
    logger.error("Internal server error: %s", getattr(error, "original_exception", error))
    return jsonify({"error": "Internal server error"}), 500
