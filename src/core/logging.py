"""Structured logging setup using structlog."""

import logging
import sys

import structlog

from core.config import settings

# Level used when log_level is not set, keyed by log_format.
_DEFAULT_LEVELS = {
    "json": logging.INFO,
    "pretty": logging.DEBUG,
    "plain": logging.WARNING,
}


def _resolve_level(log_format: str, log_level: str | None) -> int:
    if log_level:
        level = logging.getLevelName(log_level.upper())
        if isinstance(level, int):
            return level
    return _DEFAULT_LEVELS.get(log_format, logging.WARNING)


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    ``json`` emits one JSON object per line, ``pretty`` renders colored
    console output, anything else falls back to plain key=value lines.
    """
    log_format = (log_format or settings.log_format).lower()
    level = _resolve_level(log_format, log_level or settings.log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        shared_processors.append(structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.PATHNAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ))
        renderer = structlog.processors.JSONRenderer()
    elif log_format == "pretty":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_format == "json":
        formatter_processors.append(structlog.processors.format_exc_info)
    formatter_processors.append(renderer)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=formatter_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # uvicorn installs its own handlers; route them through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
