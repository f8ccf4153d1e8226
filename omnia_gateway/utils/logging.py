"""Structured logging setup"""

import logging
import sys

import structlog

from ..config import settings


def setup_logging(level: str = None, json_logs: bool = None) -> None:
    """Configure structlog and the stdlib root logger"""
    level_name = (level or settings.log_level).upper()
    json_logs = settings.log_json if json_logs is None else json_logs

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def preview(text: str, limit: int = 50) -> str:
    """Truncated preview of user text for log lines"""
    if not text:
        return ""
    return text[:limit] + ("..." if len(text) > limit else "")
