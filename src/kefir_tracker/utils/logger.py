"""
Module: logger.py
Description: Structured logging configuration for the Kefir Tracker API.

Configures structlog for single-line JSON output read by CloudWatch Logs.
Request-scoped values (request id, route, caller) are held in structlog
context variables, so every line logged while serving a request carries
them without each module passing them along.

Key Components:
- configure_logging(): Apply the processor chain and minimum level
- bind_request_context() / clear_request_context() / get_request_context():
  Per-request values
- get_logger(): Module logger

Dependencies: structlog, logging
Author: Kefir Tracker Team
"""

import logging

import structlog

from kefir_tracker.utils.timeutils import now_iso


def _add_timestamp(logger, method_name, event_dict):
    event_dict["timestamp"] = now_iso()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for JSON output at the given minimum level.

    Safe to call more than once; the last call wins for loggers
    created afterwards.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    structlog.configure(
        processors=[
            # Request-scoped values first so explicit keys override them
            structlog.contextvars.merge_contextvars,
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=True,
    )


configure_logging()


def bind_request_context(**values) -> None:
    """Attach values to every log line for the rest of the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_request_context() -> dict:
    """Values bound for the current request so far."""
    return structlog.contextvars.get_contextvars()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Batch created", batch_id="0c4f...", stage="stage1_open")
        {"request_id": "...", "user_id": "...", "event": "Batch created", "batch_id": "0c4f...", "stage": "stage1_open", "timestamp": "2024-01-15T10:30:00.000Z", "level": "INFO"}
    """
    return structlog.get_logger(name)
