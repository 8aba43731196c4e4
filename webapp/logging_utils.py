"""Helper utilities for structured logging within the web application."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Tuple


_SENSITIVE_KEYWORDS = {
    "password",
    "passwd",
    "contrasena",
    "secret",
    "token",
    "access_token",
    "refresh_token",
    "api_key",
}


MAX_LOG_PAYLOAD_BYTES = 60_000


_MAX_STRING_LENGTH = 120


def _is_sensitive_key(key: Any) -> bool:
    return isinstance(key, str) and any(word in key.lower() for word in _SENSITIVE_KEYWORDS)


def _shorten(text: str) -> str:
    if len(text) <= _MAX_STRING_LENGTH:
        return text
    return f"{text[:_MAX_STRING_LENGTH]}… ({len(text)} chars)"


def scrub_for_logging(value: Any) -> Any:
    """ログ出力用に値を再帰的に整形する。

    機密キー (パスワード等) の値は ``***`` に置き換え、Base64 のプロフィール画像
    のような長い文字列やバイナリは長さだけ残して切り詰める。
    """

    if isinstance(value, Mapping):
        return {
            key: "***" if _is_sensitive_key(key) else scrub_for_logging(item)
            for key, item in value.items()
        }
    if isinstance(value, (bytes, bytearray)):
        return f"<binary {len(value)} bytes>"
    if isinstance(value, str):
        return _shorten(value)
    if isinstance(value, Sequence):
        return [scrub_for_logging(item) for item in value]
    return value


def serialize_for_logging(payload: Any) -> Tuple[str, int]:
    text = json.dumps(payload, ensure_ascii=False, default=str)
    return text, len(text.encode("utf-8"))


def prepare_log_payload(payload: Dict[str, Any], *, max_bytes: int = MAX_LOG_PAYLOAD_BYTES) -> str:
    """Serialize *payload* for logging, dropping the body when it is too large."""

    text, size = serialize_for_logging(payload)
    if size <= max_bytes:
        return text

    minimal = {
        "status": payload.get("status"),
        "method": payload.get("method"),
        "message": "payload omitted due to size limit",
        "_truncation": {"limitBytes": max_bytes, "originalBytes": size, "omitted": True},
    }
    minimal_text, _ = serialize_for_logging(minimal)
    return minimal_text


__all__ = [
    "MAX_LOG_PAYLOAD_BYTES",
    "prepare_log_payload",
    "scrub_for_logging",
    "serialize_for_logging",
]
