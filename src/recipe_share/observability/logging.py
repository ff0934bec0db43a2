"""Loguru setup and the per-request logging context.

Everything logs through loguru: application modules via ``get_logger``,
third-party libraries via the stdlib bridge installed by ``setup_logging``.
Values bound with ``bind_context`` (request id, user id) are attached to
every record emitted while handling the same request.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger, Message, Record


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Chatty at INFO; capped at WARNING
QUIET_LOGGERS = (
    "uvicorn.access",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "httpx",
    "httpcore",
    "asyncio",
)

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger]}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def bind_context(**kwargs: Any) -> None:
    """Attach ``kwargs`` to every later record in this context."""
    _log_context.set({**_log_context.get(), **kwargs})


def clear_context() -> None:
    _log_context.set({})


def get_context() -> dict[str, Any]:
    return dict(_log_context.get())


def get_logger(name: str) -> Logger:
    return logger.bind(logger=name)


def _attach_context(record: Record) -> None:
    extra = record["extra"]
    extra.setdefault("logger", record["name"])
    for key, value in _log_context.get().items():
        extra.setdefault(key, value)


def _to_json(record: Record) -> str:
    extra = {k: v for k, v in record["extra"].items() if not k.startswith("_")}
    fields: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": extra.pop("logger", record["name"]),
        "function": record["function"],
        "line": record["line"],
    }
    fields.update(extra)
    if record["exception"] is not None:
        exc_type, exc_value, _ = record["exception"]
        fields["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "value": str(exc_value),
        }
    return orjson.dumps(fields, default=str).decode()


def _write_json(message: Message) -> None:
    sys.stdout.write(_to_json(message.record) + "\n")


def _file_format(record: Record) -> str:
    record["extra"]["_json"] = _to_json(record)
    return "{extra[_json]}\n"


def _text_format(record: Record) -> str:
    pairs = " ".join(
        f"{k}={v}"
        for k, v in record["extra"].items()
        if k != "logger" and not k.startswith("_")
    )
    # Context values are literal text, not format fields
    context = f" | {pairs}".replace("{", "{{").replace("}", "}}") if pairs else ""
    fmt = _TEXT_FORMAT + context + "\n"
    if record["exception"] is not None:
        fmt += "{exception}\n"
    return fmt


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(logger=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Replace loguru's sinks and route stdlib logging through loguru.

    JSON lines go to stdout unless ``log_format`` is ``text`` or the service
    runs in development, which get colourised text instead. ``log_file`` adds
    a rotating JSON file alongside either.
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(patcher=_attach_context)

    if log_format == "json" and not is_development:
        logger.add(_write_json, level=level, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            format=_text_format,
            level=level,
            colorize=is_development,
            diagnose=is_development,
        )

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=_file_format,
            level=level,
            rotation="100 MB",
            retention="7 days",
            compression="gz",
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "setup_logging",
]
