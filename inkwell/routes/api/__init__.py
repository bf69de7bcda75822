"""JSON API package.

Request and response bodies use snake_case keys. Service exceptions are
turned into ``{"error": ..., "errors": {...}}`` bodies by the handlers below.
"""
import logging
from typing import Any, Dict

from flask import Blueprint, jsonify, request, current_app
from werkzeug.exceptions import HTTPException

from inkwell.extensions import db
from inkwell.forms import json_formdata
from inkwell.services.errors import BlogError, InvalidDataError, status_for

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def json_payload() -> Dict[str, Any]:
    """The request's JSON object, or an empty dict when there is no body."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidDataError("Request body must be a JSON object")
    return payload


def bind_form(form_class, payload: Dict[str, Any]):
    """Build and validate a form from a JSON payload.

    Raises:
        InvalidDataError: With the form's field errors when validation fails
    """
    form = form_class(formdata=json_formdata(payload), meta={"csrf": False})
    if not form.validate():
        raise InvalidDataError("Validation failed", form.errors)
    return form


def arg_flag(name: str) -> bool:
    """``?name=true`` style query flags."""
    return request.args.get(name, "").lower() in ("1", "true", "yes")


def page_args(default_limit: int = 10) -> tuple[int, int]:
    """``page`` and ``limit`` query parameters, rejected when out of range."""
    page = request.args.get("page", 1, type=int)
    limit = request.args.get("limit", default_limit, type=int)
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if not 1 <= limit <= current_app.config.get("MAX_PAGE_SIZE", 100):
        errors["limit"] = ["Limit must be between 1 and 100"]
    if errors:
        raise InvalidDataError("Invalid pagination parameters", errors)
    return page, limit


@api_bp.errorhandler(BlogError)
def handle_blog_error(error: BlogError):
    return jsonify(error.to_dict()), status_for(error)


@api_bp.errorhandler(PermissionError)
def handle_permission_error(error: PermissionError):
    return jsonify({"error": str(error) or "Forbidden"}), 403


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    if isinstance(error, HTTPException):
        return jsonify({"error": error.description}), error.code

    db.session.rollback()
    logger.error(f"Unhandled API error on {request.method} {request.path}: {str(error)}")
    return jsonify({"error": "Internal server error"}), 500


# Import API routes
from . import posts, taxonomy, comments, dashboard  # noqa: E402,F401
