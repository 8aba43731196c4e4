"""クライアント登録ドメインの公開インターフェース。"""

from .entities import Identity, Profile
from .exceptions import (
    CommitOutcomeUnknown,
    RegistrationError,
    RegistrationFailureKind,
    RegistrationStage,
    RollbackFailed,
    TransactionBeginFailed,
    WriteFailed,
)
from .services import ClientRegistrationService
from .value_objects import RegistrationPayload, RegistrationResult

__all__ = [
    "ClientRegistrationService",
    "CommitOutcomeUnknown",
    "Identity",
    "Profile",
    "RegistrationError",
    "RegistrationFailureKind",
    "RegistrationPayload",
    "RegistrationResult",
    "RegistrationStage",
    "RollbackFailed",
    "TransactionBeginFailed",
    "WriteFailed",
]
