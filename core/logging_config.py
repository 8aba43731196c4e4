"""Logging configuration for the web application."""

from __future__ import annotations

import logging
import sys
from typing import Union

from flask.logging import default_handler


_CONSOLE_HANDLER_ATTR = "_is_console_log_handler"

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(event)s] %(message)s"


class _EventDefaultFilter(logging.Filter):
    """``extra={"event": ...}`` を持たないレコードにも既定値を与える。"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "event"):
            record.event = "-"
        return True


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def ensure_console_logging(logger: logging.Logger, level: Union[int, str, None] = None) -> None:
    """Attach a stdout handler to *logger* if one is not installed yet."""

    resolved_level = _resolve_level(level)
    # Flask 既定のハンドラと二重出力しない
    logger.removeHandler(default_handler)

    for handler in logger.handlers:
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            handler.setLevel(resolved_level)
            break
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        console_handler.addFilter(_EventDefaultFilter())
        setattr(console_handler, _CONSOLE_HANDLER_ATTR, True)
        logger.addHandler(console_handler)

    logger.setLevel(resolved_level)
