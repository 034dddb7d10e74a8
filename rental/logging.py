from __future__ import annotations

import logging
import os

import structlog

# Third-party loggers that would otherwise drown out domain events
_QUIET_LOGGERS = {
    "reportlab": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def _renderer():
    fmt = (os.getenv("LOG_FORMAT") or "").lower()
    if not fmt:
        fmt = "console" if os.getenv("APP_ENV") == "dev" else "json"
    if fmt == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Route structlog and stdlib records through one renderer.

    Every line carries a UTC timestamp, the level and the event name. The
    request middleware binds ``request_id``, ``path`` and ``method`` into
    contextvars, so services log ``reservation_created`` and friends with
    only their own fields.
    """
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer()],
        )
    )
    logging.basicConfig(level=_level(), handlers=[handler], force=True)
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
