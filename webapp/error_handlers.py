"""Centralized HTTP error handling."""
import json

from flask import current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from .logging_utils import scrub_for_logging


def _is_api_request() -> bool:
    """Return True when the current request targets the API."""
    path = request.path or ""
    return path == "/api" or path.startswith("/api/")


def _build_log_dict(code: int) -> dict:
    try:
        input_json = request.get_json(silent=True)
    except Exception:
        input_json = None

    log_dict = {
        "method": request.method,
        "path": request.path,
        "full_path": request.full_path,
        "ua": request.user_agent.string,
        "status": code,
    }
    qs = request.query_string.decode()
    if qs:
        log_dict["query_string"] = qs
    if input_json is not None:
        log_dict["json"] = scrub_for_logging(input_json)
    return log_dict


def register_error_handlers(app):
    """Register global error handlers returning JSON bodies."""

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        code = error.code or 500
        if code >= 500:
            return handle_exception(error)

        current_app.logger.warning(
            "%s %s (%s)",
            code,
            request.path,
            request.remote_addr,
            extra={"event": "api.http_4xx", "request_id": getattr(g, "request_id", None)},
        )

        # flask-smorest のバリデーションエラー詳細はそのまま返す
        payload = {
            "status": "error",
            "code": code,
            "message": error.description if _is_api_request() else error.name,
        }
        data = getattr(error, "data", None) or {}
        errors = data.get("messages")
        if errors:
            payload["errors"] = errors
        response = jsonify(payload)
        response.status_code = code
        return response

    @app.errorhandler(Exception)
    def handle_exception(error):
        code = getattr(error, "code", None) if isinstance(error, HTTPException) else None
        code = code or 500

        # ★ 5xx は stacktrace 付きで記録し、応答には詳細を含めない
        current_app.logger.exception(
            json.dumps(_build_log_dict(code), ensure_ascii=False),
            extra={"event": "api.http_5xx", "request_id": getattr(g, "request_id", None)},
        )
        g.exception_logged = True

        response = jsonify(
            {
                "status": "error",
                "code": code,
                "message": "Internal Server Error",
            }
        )
        response.status_code = code
        return response
