"""Logging configuration for the checkout service.

Every module logs through structlog. Events are routed into the standard
library so uvicorn, Protean and our own messages share one set of handlers:
stdout plus a rotating file under ``logs/``.

Payment details pass through this service, so the processor chain scrubs
anything that looks like a full card number before rendering.
"""

import logging
import logging.handlers
import os
import re
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_STRUCTURED_ENVS = ("production", "staging")

# 13-19 digits, optionally grouped by spaces or dashes
_CARD_LIKE = re.compile(r"(?<![\w-])(?:\d[ -]?){12,18}\d(?![\w-])")

_QUIET_LOGGERS = ("urllib3", "asyncio", "smtplib", "multipart", "watchfiles")


def current_env() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """LOG_LEVEL wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO")).upper()


def redact_card_numbers(_, __, event_dict: dict) -> dict:
    """Mask card-number-shaped strings in every string value of the event."""
    for key, value in event_dict.items():
        if isinstance(value, str) and _CARD_LIKE.search(value):
            event_dict[key] = _CARD_LIKE.sub("[card redacted]", value)
    return event_dict


def _file_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = "logs", log_file_prefix: str = "checkout") -> None:
    """Attach stdout and (unless ``log_dir`` is None) rotating file handlers to the root logger."""
    level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_file_handler(log_path / f"{log_file_prefix}.log", level))
        root_logger.addHandler(_file_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_structlog() -> None:
    """Configure structlog.

    Production and staging render one JSON object per line; every other
    environment gets the colored console renderer.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_card_numbers,
    ]

    if current_env() in _STRUCTURED_ENVS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Configure all logging for the service.

    ``LOG_DIR`` overrides the log directory; an empty value logs to stdout only.
    """
    setup_stdlib_logging(log_dir=os.getenv("LOG_DIR", "logs") or None)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def order_log_context(order_number: str | None = None, **extra) -> Iterator[None]:
    """Bind the order number (and any extras) to every log line inside the block."""
    values = {"order_number": order_number, **extra} if order_number else extra
    with structlog.contextvars.bound_contextvars(**values):
        yield
