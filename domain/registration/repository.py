from __future__ import annotations

from typing import Protocol

from .entities import Identity, Profile


class RegistrationRepository(Protocol):
    def add_identity(self, identity: Identity) -> int:
        """Identity を挿入し、ストアが採番したキーを返す。"""
        ...

    def add_profile(self, profile: Profile) -> int:
        ...


class RegistrationUnitOfWork(Protocol):
    """1 回の登録呼び出しに対応するトランザクション境界。"""

    registrations: RegistrationRepository

    def begin(self) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...

    def close(self) -> None:
        ...
