from flask import current_app, jsonify

from . import bp
from .schemas import ApiErrorSchema, RoleSchema
from infrastructure.catalog_queries import list_roles


@bp.get("/roles")
@bp.response(200, RoleSchema(many=True))
@bp.alt_response(500, schema=ApiErrorSchema)
def api_list_roles():
    try:
        return list_roles()
    except Exception:
        current_app.logger.exception("Failed to list roles", extra={"event": "role.list.failed"})
        response = jsonify({"error": "Error al obtener roles"})
        response.status_code = 500
        return response
