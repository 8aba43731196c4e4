"""クライアント登録・一覧 API."""
from __future__ import annotations

from flask import current_app, jsonify

from . import bp
from .schemas import ApiErrorSchema, ClientRegistrationSchema, ClientSchema, MessageSchema
from domain.registration import RegistrationError, RegistrationPayload, RollbackFailed
from infrastructure.catalog_queries import list_active_clients
from webapp.services.registration_service import get_registration_service


REGISTRATION_SUCCESS_MESSAGE = "Cliente registrado correctamente"
REGISTRATION_ERROR_MESSAGE = "Error al registrar cliente"
CLIENT_LIST_ERROR_MESSAGE = "Error al obtener clientes"


def _error_response(message: str, status: int):
    response = jsonify({"error": message})
    response.status_code = status
    return response


@bp.get("/clients")
@bp.response(200, ClientSchema(many=True), description="有効なクライアントの一覧")
@bp.alt_response(500, schema=ApiErrorSchema)
def api_list_clients():
    """有効なクライアントを名前順に返す"""
    try:
        return list_active_clients()
    except Exception:
        current_app.logger.exception(
            "Failed to list clients",
            extra={"event": "client.list.failed"},
        )
        return _error_response(CLIENT_LIST_ERROR_MESSAGE, 500)


@bp.post("/clients/register")
@bp.arguments(ClientRegistrationSchema)
@bp.response(201, MessageSchema, description="アカウントとクライアント情報を同時に登録")
@bp.alt_response(500, schema=ApiErrorSchema)
def api_register_client(data):
    """アカウントとクライアント情報を単一トランザクションで登録"""
    payload = RegistrationPayload.from_mapping(data)

    try:
        result = get_registration_service().register(payload)
    except RegistrationError as exc:
        # ロールバック失敗はストアの状態が不明なため別レベルで通知
        log = current_app.logger.critical if isinstance(exc, RollbackFailed) else current_app.logger.error
        log(
            "Client registration failed: %s",
            exc,
            exc_info=exc,
            extra={
                "event": "client.register.failed",
                "failure_kind": exc.kind.value,
                "stage": exc.stage.value,
            },
        )
        return _error_response(REGISTRATION_ERROR_MESSAGE, 500)

    current_app.logger.info(
        "Client registered",
        extra={
            "event": "client.register.succeeded",
            "usuario_id": result.identity_id,
            "cliente_id": result.profile_id,
        },
    )
    return {"message": REGISTRATION_SUCCESS_MESSAGE}
