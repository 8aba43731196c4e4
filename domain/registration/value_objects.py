"""クライアント登録で利用する値オブジェクト。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class RegistrationPayload:
    """登録リクエストの内容をそのまま保持する値オブジェクト。

    形式や一意性の検証は呼び出し側の責務で、ここでは値を加工しない。
    """

    correo: str
    password: str = field(repr=False)
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    tipo_documento: Optional[str] = None
    numero_documento: Optional[str] = None
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    foto_perfil: Optional[str] = None
    estado: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RegistrationPayload":
        return cls(
            correo=data["correo"],
            password=data["password"],
            nombre=data.get("nombre"),
            apellido=data.get("apellido"),
            tipo_documento=data.get("tipo_documento"),
            numero_documento=data.get("numero_documento"),
            telefono=data.get("telefono"),
            direccion=data.get("direccion"),
            foto_perfil=data.get("foto_perfil"),
            estado=data.get("estado"),
        )


@dataclass(frozen=True)
class RegistrationResult:
    """登録成功時に生成されたキーを返す。"""

    identity_id: int
    profile_id: int
    correo: str
