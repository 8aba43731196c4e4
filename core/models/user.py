from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import db

if TYPE_CHECKING:  # pragma: no cover
    from core.models.client import Client


# Define BIGINT type compatible with SQLite auto increment
BigInt = db.BigInteger().with_variant(db.Integer, "sqlite")

ACTIVE_STATUS = "Activo"


class Role(db.Model):
    __tablename__ = "Roles"

    id: Mapped[int] = mapped_column("PK_id_rol", BigInt, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("Nombre", db.String(80), nullable=False)  # 'Cliente' 等
    status: Mapped[str] = mapped_column("Estado", db.String(20), nullable=False, default=ACTIVE_STATUS)
    users: Mapped[list["User"]] = relationship("User", back_populates="role")


class User(db.Model):
    """ログイン用アカウント (``Usuarios`` テーブル)。"""

    __tablename__ = "Usuarios"

    id: Mapped[int] = mapped_column("PK_id_usuario", BigInt, primary_key=True, autoincrement=True)
    # 一意制約は元のスキーマに存在しない
    email: Mapped[str] = mapped_column("correo", db.String(255), index=True, nullable=False)
    password: Mapped[str] = mapped_column("contrasena", db.String(255), nullable=False)
    status: Mapped[str] = mapped_column("estado", db.String(20), nullable=False, default=ACTIVE_STATUS)
    role_id: Mapped[Optional[int]] = mapped_column(
        "FK_id_rol",
        BigInt,
        db.ForeignKey("Roles.PK_id_rol"),
        nullable=True,
    )

    role: Mapped[Optional[Role]] = relationship("Role", back_populates="users")
    client: Mapped[Optional["Client"]] = relationship("Client", back_populates="user", uselist=False)
