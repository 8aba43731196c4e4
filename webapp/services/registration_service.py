"""Flask アプリケーションに束縛したクライアント登録サービスの生成。"""

from __future__ import annotations

from flask import Flask, current_app
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from werkzeug.security import generate_password_hash

from core.db import db
from domain.registration import ClientRegistrationService
from infrastructure.base import SqlAlchemyUnitOfWork


EXTENSION_KEY = "client_registration_service"


def build_registration_service(app: Flask) -> ClientRegistrationService:
    """アプリのエンジン (接続プール) に束縛したサービスを生成する。

    アプリケーションコンテキスト内で呼び出すこと。
    単一接続を共有するプール (インメモリ SQLite の ``StaticPool``) では
    呼び出しごとのトランザクションが分離されないため起動を拒否する。
    """

    engine = db.engine
    if isinstance(engine.pool, StaticPool):
        raise RuntimeError(
            f"Client registration requires a connection per transaction; "
            f"{engine.url.render_as_string(hide_password=True)} shares a single connection"
        )

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def unit_of_work_factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    hasher = generate_password_hash if app.config.get("REGISTRATION_HASH_PASSWORDS", True) else None
    return ClientRegistrationService(
        unit_of_work_factory=unit_of_work_factory,
        default_role_id=app.config.get("REGISTRATION_DEFAULT_ROLE_ID", 2),
        initial_status=app.config.get("REGISTRATION_INITIAL_STATUS", "Activo"),
        password_hasher=hasher,
    )


def init_registration_service(app: Flask) -> None:
    with app.app_context():
        app.extensions[EXTENSION_KEY] = build_registration_service(app)


def get_registration_service() -> ClientRegistrationService:
    return current_app.extensions[EXTENSION_KEY]
