"""Infrastructure layer base classes.

トランザクション境界 (Unit of Work) を提供します。
グローバルな ``db.session`` ではなく、注入されたセッションファクトリから
呼び出しごとに独立したセッションを生成します。
"""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from domain.registration.exceptions import CommitOutcomeUnknown
from .registration_repository import SqlAlchemyRegistrationRepository


class SqlAlchemyUnitOfWork:
    """Unit of Work パターンの実装.

    1 インスタンス = 1 セッション = 1 トランザクション。
    ``begin()`` で接続をチェックアウトするため、接続枯渇などの失敗は
    書き込み前にここで表面化します。

    Attributes:
        registrations: セッションに束縛された登録リポジトリ
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._session: Optional[Session] = None
        self.registrations: Optional[SqlAlchemyRegistrationRepository] = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work has not been started")
        return self._session

    def begin(self) -> None:
        """セッションを生成してトランザクションを開始."""
        session = self._session_factory()
        self._session = session
        session.begin()
        session.connection()
        self.registrations = SqlAlchemyRegistrationRepository(session)

    def commit(self) -> None:
        """現在のトランザクションをコミット.

        コミット中に接続が無効化された場合、確定したかどうかは
        ストア側でしか判別できないため ``CommitOutcomeUnknown`` を送出します。
        """
        try:
            self.session.commit()
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise CommitOutcomeUnknown(str(exc)) from exc
            raise

    def rollback(self) -> None:
        """現在のトランザクションをロールバック."""
        if self._session is not None:
            self._session.rollback()

    def close(self) -> None:
        """セッションを閉じて接続をプールへ返却."""
        if self._session is not None:
            self._session.close()
            self._session = None
            self.registrations = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.close()


__all__ = ["SqlAlchemyUnitOfWork"]
