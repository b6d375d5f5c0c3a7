"""loguru setup for the API process.

Every record gets the id of the request it belongs to (``X-Request-ID`` or a
generated one) and is passed through the redaction filter before any sink
sees it.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_NO_REQUEST = "-"

_LINE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>req={extra[correlation_id]}</magenta> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<lvl>{message}</lvl>"
)

_request_id: ContextVar[str] = ContextVar("todoapp_request_id", default=_NO_REQUEST)


def set_correlation_id(value: str | None) -> None:
    _request_id.set(value or _NO_REQUEST)


def get_correlation_id() -> str:
    return _request_id.get()


def clear_correlation_id() -> None:
    _request_id.set(_NO_REQUEST)


def _default_log_file() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    # <repo>/instance/app.log
    return Path(__file__).resolve().parents[3] / "instance" / "app.log"


def _prepare_record(record) -> bool:
    record["extra"].setdefault("correlation_id", _request_id.get())
    return sanitize_record(record)


class _StdlibBridge(logging.Handler):
    """Routes records from libraries using :mod:`logging` into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_request_id.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Module-level logger; binds the current request id on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_request_id.get()), name)


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    if level is None:
        level = "DEBUG" if debug_mode else os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    log_file = _default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    common = {
        "level": level,
        "format": _LINE_FORMAT,
        "filter": _prepare_record,
        "backtrace": False,
        "diagnose": False,
    }
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)
    _logger.add(str(log_file), colorize=False, enqueue=True, encoding="utf-8", **common)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for noisy, floor in (("werkzeug", logging.INFO), ("sqlalchemy.engine", logging.WARNING)):
        logging.getLogger(noisy).setLevel(floor)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
