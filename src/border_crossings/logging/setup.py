"""
Structured logging configuration
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor

from border_crossings.config import Settings


def setup_logging(
    service_name: str,
    settings: Optional[Settings] = None,
) -> structlog.BoundLogger:
    """
    Configure structured logging for the tool

    Logs are written to stderr; stdout is reserved for the report.

    Args:
        service_name: Name of the service for log identification
        settings: Optional settings object (will create default if not provided)

    Returns:
        Configured logger instance
    """
    if settings is None:
        settings = Settings(service_name=service_name)

    # debug mode overrides the configured level
    log_level = "DEBUG" if settings.debug else settings.log_level

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )

    # Processors for structlog
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Add service name to all logs
    def add_service_name(logger, method_name, event_dict: EventDict) -> EventDict:
        event_dict["service"] = service_name
        event_dict["environment"] = settings.environment
        return event_dict

    processors.append(add_service_name)

    # JSON or console rendering based on settings
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(service_name)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance

    Args:
        name: Optional logger name (defaults to caller's module)

    Returns:
        Logger instance
    """
    return structlog.get_logger(name)
