from flask import current_app, jsonify

from . import bp
from .schemas import ApiErrorSchema, UserSchema
from infrastructure.catalog_queries import list_active_users


@bp.get("/users")
@bp.response(200, UserSchema(many=True))
@bp.alt_response(500, schema=ApiErrorSchema)
def api_list_users():
    """List active user accounts ordered by e-mail."""
    try:
        return list_active_users()
    except Exception:
        current_app.logger.exception("Failed to list users", extra={"event": "user.list.failed"})
        response = jsonify({"error": "Error al obtener usuarios"})
        response.status_code = 500
        return response
