"""クライアント登録トランザクションを担うドメインサービス。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from .entities import Identity, Profile
from .exceptions import (
    CommitOutcomeUnknown,
    RegistrationStage,
    RollbackFailed,
    TransactionBeginFailed,
    WriteFailed,
)
from .repository import RegistrationUnitOfWork
from .value_objects import RegistrationPayload, RegistrationResult


DEFAULT_CLIENT_ROLE_ID = 2
INITIAL_IDENTITY_STATUS = "Activo"


@dataclass
class ClientRegistrationService:
    """Identity と Profile を単一トランザクションで作成する。

    呼び出しごとに ``unit_of_work_factory`` から新しいスコープを取得するため、
    インスタンスはスレッド間で共有してよい。どの段階で失敗しても
    ``RegistrationError`` のサブクラスのみを送出する。
    """

    unit_of_work_factory: Callable[[], RegistrationUnitOfWork]
    default_role_id: Optional[int] = DEFAULT_CLIENT_ROLE_ID
    initial_status: str = INITIAL_IDENTITY_STATUS
    password_hasher: Optional[Callable[[str], str]] = generate_password_hash

    def register(self, payload: RegistrationPayload) -> RegistrationResult:
        uow = self.unit_of_work_factory()
        try:
            try:
                uow.begin()
            except Exception as exc:
                raise TransactionBeginFailed(
                    "Could not open a registration transaction",
                    stage=RegistrationStage.BEGIN,
                    email=payload.correo,
                ) from exc

            stage = RegistrationStage.IDENTITY
            try:
                identity = self._build_identity(payload)
                identity_id = uow.registrations.add_identity(identity)

                stage = RegistrationStage.PROFILE
                profile = self._build_profile(payload, identity_id)
                profile_id = uow.registrations.add_profile(profile)
            except Exception as exc:
                self._rollback(uow, payload, stage, exc)
                raise WriteFailed(
                    "Client registration write failed",
                    stage=stage,
                    email=payload.correo,
                ) from exc
            except BaseException as exc:
                # 中断時も半端な書き込みを残さない。ロールバックにも失敗した場合、
                # 中断は RollbackFailed.original_error として残る
                self._rollback(uow, payload, stage, exc)
                raise

            try:
                uow.commit()
            except CommitOutcomeUnknown as exc:
                raise RollbackFailed(
                    "Commit acknowledgement lost; store state is unknown",
                    stage=RegistrationStage.COMMIT,
                    email=payload.correo,
                    original_error=exc,
                ) from exc
            except Exception as exc:
                self._rollback(uow, payload, RegistrationStage.COMMIT, exc)
                raise WriteFailed(
                    "Client registration commit was rejected",
                    stage=RegistrationStage.COMMIT,
                    email=payload.correo,
                ) from exc
            except BaseException as exc:
                # コミット途中の中断は確定したかどうか判別できない
                raise RollbackFailed(
                    "Commit interrupted; store state is unknown",
                    stage=RegistrationStage.COMMIT,
                    email=payload.correo,
                    original_error=exc,
                ) from exc

            return RegistrationResult(
                identity_id=identity_id,
                profile_id=profile_id,
                correo=payload.correo,
            )
        finally:
            uow.close()

    def _rollback(
        self,
        uow: RegistrationUnitOfWork,
        payload: RegistrationPayload,
        stage: RegistrationStage,
        cause: BaseException,
    ) -> None:
        try:
            uow.rollback()
        except Exception as exc:
            raise RollbackFailed(
                "Rollback failed; store state is unknown",
                stage=stage,
                email=payload.correo,
                original_error=cause,
            ) from exc

    def _build_identity(self, payload: RegistrationPayload) -> Identity:
        credential = payload.password
        if self.password_hasher is not None:
            credential = self.password_hasher(payload.password)
        return Identity(
            email=payload.correo,
            credential=credential,
            status=self.initial_status,
            role_id=self.default_role_id,
        )

    def _build_profile(self, payload: RegistrationPayload, identity_id: int) -> Profile:
        return Profile(
            first_name=payload.nombre,
            last_name=payload.apellido,
            document_type=payload.tipo_documento,
            document_number=payload.numero_documento,
            email=payload.correo,
            phone=payload.telefono,
            address=payload.direccion,
            avatar=payload.foto_perfil,
            status=payload.estado,
            identity_id=identity_id,
        )
