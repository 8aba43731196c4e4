"""一覧表示用の読み取り専用クエリ。"""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select

from core.db import db
from core.models.client import Client
from core.models.user import ACTIVE_STATUS, Role, User


def list_active_clients() -> List[Dict[str, Any]]:
    stmt = (
        select(Client)
        .where(Client.status == ACTIVE_STATUS)
        .order_by(Client.first_name)
    )
    rows = db.session.execute(stmt).scalars().all()
    return [
        {
            "id": client.id,
            "name": client.full_name,
            "phone": client.phone or "",
            "correo": client.email,
            "tipo_documento": client.document_type,
            "numero_documento": client.document_number,
            "direccion": client.address,
            "foto_perfil": client.avatar,
            "estado": client.status,
        }
        for client in rows
    ]


def list_active_users() -> List[Dict[str, Any]]:
    """有効なユーザー一覧。資格情報の列は返さない。"""
    stmt = (
        select(User)
        .where(User.status == ACTIVE_STATUS)
        .order_by(User.email)
    )
    rows = db.session.execute(stmt).scalars().all()
    return [
        {
            "id": user.id,
            "correo": user.email,
            "estado": user.status,
            "rol": user.role_id,
        }
        for user in rows
    ]


def list_roles() -> List[Dict[str, Any]]:
    stmt = select(Role).order_by(Role.name)
    rows = db.session.execute(stmt).scalars().all()
    return [
        {
            "PK_id_rol": role.id,
            "Nombre": role.name,
            "Estado": role.status,
        }
        for role in rows
    ]


__all__ = ["list_active_clients", "list_active_users", "list_roles"]
