import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


EXAMPLE_PAYLOAD = {
    "nombre": "Ana",
    "apellido": "Ruiz",
    "tipo_documento": "CC",
    "numero_documento": "123",
    "correo": "ana@x.com",
    "telefono": "555",
    "direccion": "Calle 1",
    "foto_perfil": None,
    "estado": "Activo",
    "password": "secret",
}


def _make_app(tmp_path, *, seed=True):
    """一時ディレクトリのファイル SQLite を使うアプリケーションを生成する。

    登録処理はトランザクションごとに別接続を使うため、
    接続を共有するインメモリ SQLite は使わない。
    """
    from webapp import create_app, seed_roles
    from webapp.config import TestConfig
    from webapp.extensions import db

    config = type(
        "TmpDatabaseTestConfig",
        (TestConfig,),
        {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'spa.db'}"},
    )
    app = create_app(config)
    with app.app_context():
        db.create_all()
        if seed:
            seed_roles()
            db.session.commit()
    return app


def _teardown():
    from webapp.extensions import db

    db.session.remove()
    db.drop_all()
    db.engine.dispose()


@pytest.fixture
def example_payload():
    return dict(EXAMPLE_PAYLOAD)


@pytest.fixture
def app(tmp_path):
    """ロールマスタを投入済みのアプリケーション"""
    app = _make_app(tmp_path)
    with app.app_context():
        yield app
        _teardown()


@pytest.fixture
def bare_app(tmp_path):
    """ロール未投入のアプリケーション"""
    app = _make_app(tmp_path, seed=False)
    with app.app_context():
        yield app
        _teardown()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registration_service(app):
    from webapp.services.registration_service import get_registration_service

    return get_registration_service()


@pytest.fixture
def count_rows(app):
    """Usuarios / Cliente の行数を返すヘルパー"""
    from sqlalchemy import func, select

    from core.models import Client, User
    from webapp.extensions import db

    def _count():
        db.session.rollback()
        users = db.session.scalar(select(func.count()).select_from(User))
        clients = db.session.scalar(select(func.count()).select_from(Client))
        return users, clients

    return _count
