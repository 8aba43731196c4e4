"""クライアント登録トランザクションの例外定義。"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class RegistrationFailureKind(str, Enum):
    BEGIN = "begin"
    WRITE = "write"
    ROLLBACK = "rollback"


class RegistrationStage(str, Enum):
    """失敗した処理段階 (ログ用、HTTP 応答には出さない)。"""

    BEGIN = "begin"
    IDENTITY = "identity"
    PROFILE = "profile"
    COMMIT = "commit"


class RegistrationError(Exception):
    """登録処理の失敗を表す基底例外。"""

    kind: RegistrationFailureKind

    def __init__(
        self,
        message: str,
        *,
        stage: RegistrationStage,
        email: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.email = email


class TransactionBeginFailed(RegistrationError):
    """トランザクションを開始できなかった。書き込みは行われていない。"""

    kind = RegistrationFailureKind.BEGIN


class WriteFailed(RegistrationError):
    """INSERT またはコミットが拒否され、ロールバック済み。"""

    kind = RegistrationFailureKind.WRITE


class RollbackFailed(RegistrationError):
    """ロールバック自体が失敗した、またはコミット結果が不明。

    ストアの状態は保証できないため、再試行せず上位に通知する。
    ``original_error`` には引き金となった例外 (書き込みエラーや
    ``KeyboardInterrupt`` などの中断) を保持する。
    """

    kind = RegistrationFailureKind.ROLLBACK

    def __init__(
        self,
        message: str,
        *,
        stage: RegistrationStage,
        email: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, stage=stage, email=email)
        self.original_error = original_error


class CommitOutcomeUnknown(Exception):
    """コミット中に接続が失われ、確定したかどうか判別できない。"""
