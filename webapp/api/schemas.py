"""API request/response schemas."""

from marshmallow import EXCLUDE, Schema, fields, validate


class ClientRegistrationSchema(Schema):
    """クライアント登録リクエストスキーマ.

    値はそのまま登録処理へ渡す。必須なのはアカウント作成に必要な項目のみ。
    """

    class Meta:
        unknown = EXCLUDE

    nombre = fields.String(allow_none=True)
    apellido = fields.String(allow_none=True)
    tipo_documento = fields.String(allow_none=True)
    numero_documento = fields.String(allow_none=True)
    correo = fields.String(required=True, validate=validate.Length(min=1))
    telefono = fields.String(allow_none=True)
    direccion = fields.String(allow_none=True)
    foto_perfil = fields.String(allow_none=True)
    estado = fields.String(allow_none=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class MessageSchema(Schema):
    message = fields.String(required=True)


class ApiErrorSchema(Schema):
    error = fields.String(required=True)


class ClientSchema(Schema):
    """クライアント一覧の要素."""
    id = fields.Integer(required=True)
    name = fields.String()
    phone = fields.String()
    correo = fields.String(allow_none=True)
    tipo_documento = fields.String(allow_none=True)
    numero_documento = fields.String(allow_none=True)
    direccion = fields.String(allow_none=True)
    foto_perfil = fields.String(allow_none=True)
    estado = fields.String(allow_none=True)


class UserSchema(Schema):
    id = fields.Integer(required=True)
    correo = fields.String()
    estado = fields.String()
    rol = fields.Integer(allow_none=True)


class RoleSchema(Schema):
    PK_id_rol = fields.Integer(required=True)
    Nombre = fields.String()
    Estado = fields.String(allow_none=True)
