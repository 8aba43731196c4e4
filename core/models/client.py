"""クライアント (``Cliente`` テーブル) の ORM モデル。"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import db
from core.models.user import BigInt

if TYPE_CHECKING:  # pragma: no cover
    from core.models.user import User


class Client(db.Model):
    __tablename__ = "Cliente"

    id: Mapped[int] = mapped_column("PK_id_cliente", BigInt, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column("nombre", db.String(100), nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column("apellido", db.String(100), nullable=True)
    document_type: Mapped[Optional[str]] = mapped_column("tipo_documento", db.String(20), nullable=True)
    document_number: Mapped[Optional[str]] = mapped_column("numero_documento", db.String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column("correo", db.String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column("telefono", db.String(30), nullable=True)
    address: Mapped[Optional[str]] = mapped_column("direccion", db.String(255), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column("foto_perfil", db.Text, nullable=True)
    status: Mapped[Optional[str]] = mapped_column("estado", db.String(20), nullable=True)
    user_id: Mapped[int] = mapped_column(
        "fk_id_usuario",
        BigInt,
        db.ForeignKey("Usuarios.PK_id_usuario"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="client")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
