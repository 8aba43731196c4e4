"""SQLAlchemy 実装を使った登録トランザクションの結合テスト。"""

import pytest
from unittest.mock import create_autospec

from sqlalchemy import create_engine, select
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from werkzeug.security import check_password_hash

from core.models import Client, User
from domain.registration import (
    ClientRegistrationService,
    CommitOutcomeUnknown,
    RegistrationPayload,
    RegistrationStage,
    TransactionBeginFailed,
    WriteFailed,
)
from infrastructure.base import SqlAlchemyUnitOfWork
from infrastructure.registration_repository import SqlAlchemyRegistrationRepository
from webapp.extensions import db


def test_register_persists_linked_identity_and_profile(registration_service, example_payload, count_rows):
    result = registration_service.register(RegistrationPayload.from_mapping(example_payload))

    assert count_rows() == (1, 1)

    user = db.session.get(User, result.identity_id)
    client = db.session.get(Client, result.profile_id)
    assert user.email == "ana@x.com"
    assert user.status == "Activo"
    assert user.role_id == 2
    assert user.password != "secret"
    assert check_password_hash(user.password, "secret")

    assert client.first_name == "Ana"
    assert client.last_name == "Ruiz"
    assert client.email == "ana@x.com"
    assert client.avatar is None
    assert client.user_id == result.identity_id


def test_profile_constraint_violation_leaves_no_rows(registration_service, example_payload, count_rows):
    example_payload["nombre"] = None

    with pytest.raises(WriteFailed) as excinfo:
        registration_service.register(RegistrationPayload.from_mapping(example_payload))

    assert excinfo.value.stage is RegistrationStage.PROFILE
    assert count_rows() == (0, 0)


def test_identity_constraint_violation_leaves_no_rows(app, example_payload, count_rows):
    session_factory = sessionmaker(bind=db.engine, expire_on_commit=False)
    # 存在しないロールへの外部キーで Identity の INSERT を失敗させる
    service = ClientRegistrationService(
        lambda: SqlAlchemyUnitOfWork(session_factory),
        default_role_id=99,
    )

    with pytest.raises(WriteFailed) as excinfo:
        service.register(RegistrationPayload.from_mapping(example_payload))

    assert excinfo.value.stage is RegistrationStage.IDENTITY
    assert count_rows() == (0, 0)


def test_retry_after_failure_leaves_no_residue(registration_service, example_payload, count_rows):
    failing = dict(example_payload, nombre=None, correo="fallido@x.com")
    with pytest.raises(WriteFailed):
        registration_service.register(RegistrationPayload.from_mapping(failing))

    result = registration_service.register(RegistrationPayload.from_mapping(example_payload))

    assert count_rows() == (1, 1)
    emails = db.session.scalars(select(User.email)).all()
    assert emails == ["ana@x.com"]
    client = db.session.scalars(select(Client)).one()
    assert client.user_id == result.identity_id


def test_each_registration_links_to_its_own_identity(registration_service, example_payload):
    results = [
        registration_service.register(
            RegistrationPayload.from_mapping(dict(example_payload, correo=f"c{i}@x.com", nombre=f"C{i}"))
        )
        for i in range(3)
    ]

    for result in results:
        client = db.session.get(Client, result.profile_id)
        user = db.session.get(User, result.identity_id)
        assert client.user_id == user.id
        assert client.email == user.email == result.correo
    assert len({r.identity_id for r in results}) == 3


def test_begin_failure_is_reported_before_any_write(app, example_payload, count_rows):
    session = create_autospec(Session, instance=True)
    session.connection.side_effect = OperationalError("BEGIN", {}, Exception("pool exhausted"))
    service = ClientRegistrationService(lambda: SqlAlchemyUnitOfWork(lambda: session))

    with pytest.raises(TransactionBeginFailed):
        service.register(RegistrationPayload.from_mapping(example_payload))

    session.add.assert_not_called()
    session.close.assert_called_once_with()
    assert count_rows() == (0, 0)


def test_unit_of_work_flags_commit_with_lost_connection():
    session = create_autospec(Session, instance=True)
    session.commit.side_effect = DBAPIError(
        "COMMIT", {}, Exception("server closed the connection"), connection_invalidated=True
    )
    uow = SqlAlchemyUnitOfWork(lambda: session)
    uow.begin()

    with pytest.raises(CommitOutcomeUnknown):
        uow.commit()


def test_unit_of_work_reraises_other_commit_errors():
    session = create_autospec(Session, instance=True)
    error = DBAPIError("COMMIT", {}, Exception("deadlock"))
    session.commit.side_effect = error
    uow = SqlAlchemyUnitOfWork(lambda: session)
    uow.begin()

    with pytest.raises(DBAPIError) as excinfo:
        uow.commit()

    assert excinfo.value is error


def test_unit_of_work_context_manager_rolls_back_on_error(app, count_rows):
    session_factory = sessionmaker(bind=db.engine, expire_on_commit=False)

    with pytest.raises(RuntimeError):
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.session.add(User(email="tmp@x.com", password="x", status="Activo", role_id=2))
            uow.session.flush()
            raise RuntimeError("abort")

    assert count_rows() == (0, 0)


def test_unit_of_work_requires_begin():
    uow = SqlAlchemyUnitOfWork(lambda: None)

    with pytest.raises(RuntimeError):
        uow.session


def test_interleaved_registration_does_not_commit_pending_identity(app, example_payload, count_rows):
    # 別トランザクションの登録は、保留中の Identity を巻き込んで確定させない
    other_engine = create_engine(db.engine.url, connect_args={"timeout": 0.5})
    other_service = ClientRegistrationService(
        lambda: SqlAlchemyUnitOfWork(sessionmaker(bind=other_engine, expire_on_commit=False))
    )
    other_outcomes = []

    class InterleavingRepository(SqlAlchemyRegistrationRepository):
        def add_profile(self, profile):
            other_payload = RegistrationPayload.from_mapping(dict(example_payload, correo="b@x.com"))
            try:
                other_outcomes.append(other_service.register(other_payload))
            except WriteFailed as exc:
                other_outcomes.append(exc)
            raise RuntimeError("profile insert failed")

    class InterleavingUnitOfWork(SqlAlchemyUnitOfWork):
        def begin(self):
            super().begin()
            self.registrations = InterleavingRepository(self.session)

    session_factory = sessionmaker(bind=db.engine, expire_on_commit=False)
    service = ClientRegistrationService(lambda: InterleavingUnitOfWork(session_factory))

    try:
        with pytest.raises(WriteFailed):
            service.register(RegistrationPayload.from_mapping(example_payload))
    finally:
        other_engine.dispose()

    assert count_rows() == (0, 0)
    assert "ana@x.com" not in db.session.scalars(select(User.email)).all()
    # SQLite は書き込みを直列化するため、割り込んだ登録はロック待ちで失敗する
    assert len(other_outcomes) == 1
    assert isinstance(other_outcomes[0], WriteFailed)
    assert other_outcomes[0].stage is RegistrationStage.IDENTITY


def test_shared_connection_pool_is_rejected():
    from webapp import create_app
    from webapp.config import TestConfig

    config = type("SharedConnectionConfig", (TestConfig,), {"SQLALCHEMY_DATABASE_URI": "sqlite://"})

    with pytest.raises(RuntimeError, match="connection per transaction"):
        create_app(config)
