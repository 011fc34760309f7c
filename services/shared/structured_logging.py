"""
Structured Logging Utilities

Helpers for attaching record context (entity, handle, username...) to log
messages emitted by the entity services.
"""

from __future__ import annotations

import logging
from typing import Any


def _format_context(context: dict[str, Any]) -> str:
    parts = [f"{key}={value}" for key, value in context.items() if value is not None]
    return " | ".join(parts)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes every message with its context.

    Usage:
        logger = get_structured_logger(__name__, entity="company", handle="acme")
        logger.info("Updated company")  # [entity=company | handle=acme] Updated company
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, context)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context_str = _format_context(self.extra)
        if context_str:
            msg = f"[{context_str}] {msg}"
        return msg, kwargs


def get_structured_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields (e.g., entity="job", job_id=7)

    Returns:
        StructuredLoggerAdapter instance
    """
    return StructuredLoggerAdapter(logging.getLogger(name), **context)


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """
    Log a single message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, logging.ERROR, etc.)
        msg: Log message
        **context: Additional context fields
    """
    context_str = _format_context(context)
    logger.log(level, f"[{context_str}] {msg}" if context_str else msg)
