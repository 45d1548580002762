"""
Structured logging setup using structlog.

This module configures structured logging for the client with JSON output
at INFO and above and a human-readable console format when debugging.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from ..config import settings

REDACTED = "[redacted]"


def redact_token(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Replace any ``token`` value bound to a record."""
    if "token" in event_dict:
        event_dict["token"] = REDACTED
    return event_dict


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure structured logging for the client.

    Applications call this once at startup. DEBUG renders human-readable
    console lines; every other level renders one JSON object per record.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            defaults to ``settings.log_level``
    """
    level = (level or settings.log_level).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_token,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if level == "DEBUG" else structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (optional)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def log_api_call(
    method: str,
    success: bool,
    duration: Optional[float] = None,
    channel_id: Optional[str] = None,
    **kwargs
) -> None:
    """
    Log one Slack Web API round-trip with structured data.

    Args:
        method: Slack method name (e.g. conversations.archive)
        success: Whether the call returned a usable ``ok`` envelope
        duration: Call duration in seconds (optional)
        channel_id: Channel the call targeted (optional)
        **kwargs: Additional context such as ``error``
    """
    logger = get_logger("slack.api")
    log = logger.info if success else logger.warning
    log(
        f"Slack {method}",
        method=method,
        success=success,
        duration=duration,
        channel_id=channel_id,
        **kwargs
    )
