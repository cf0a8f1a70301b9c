"""Structured logging configuration.

This module provides structured logging using structlog with JSON and console formatters.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

import structlog
from structlog.types import EventDict, Processor

# Correlation ID shared by all log lines of one workflow run or request
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set a correlation ID in context.

    Args:
        correlation_id: Optional correlation ID. If not provided, generates a new UUID.

    Returns:
        The correlation ID that was set.
    """
    if correlation_id is None:
        correlation_id = str(uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear the correlation ID from context."""
    correlation_id_var.set(None)


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds correlation ID to log events."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds application context to log events."""
    event_dict.setdefault("app", "customer-support-agents")
    return event_dict


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use console format
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_correlation_id,
        add_app_context,
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.rich_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[handler],
        force=True,
    )

    # SDK clients log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses the caller's module name.

    Returns:
        A configured structlog BoundLogger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


class LoggerAdapter:
    """Logger with persistent context bound to every event."""

    def __init__(self, name: str | None = None, **initial_context: Any):
        self._logger = get_logger(name)
        self._context = initial_context

    @property
    def context(self) -> dict[str, Any]:
        """Return a copy of the bound context."""
        return dict(self._context)

    def bind(self, **new_context: Any) -> "LoggerAdapter":
        """Create a new adapter with additional context.

        Args:
            **new_context: Additional context to bind

        Returns:
            New LoggerAdapter with merged context
        """
        adapter = LoggerAdapter.__new__(LoggerAdapter)
        adapter._logger = self._logger
        adapter._context = {**self._context, **new_context}
        return adapter

    def _log(self, level: str, event: str, **kwargs: Any) -> None:
        merged = {**self._context, **kwargs}
        getattr(self._logger, level)(event, **merged)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._log("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._log("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._log("warning", event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._log("error", event, **kwargs)

    def exception(self, event: str, **kwargs: Any) -> None:
        """Log an exception with traceback."""
        self._log("exception", event, **kwargs)


def get_agent_logger(agent_type: str) -> LoggerAdapter:
    """Get a logger configured for a specialist or router agent.

    Args:
        agent_type: The agent type value (e.g. "order")

    Returns:
        LoggerAdapter with agent context bound
    """
    return LoggerAdapter("agent", agent_type=agent_type)


def get_workflow_logger(run_id: str, workflow_type: str | None = None) -> LoggerAdapter:
    """Get a logger configured for a workflow run.

    Args:
        run_id: The workflow run's unique identifier
        workflow_type: Optional workflow type value

    Returns:
        LoggerAdapter with run context bound
    """
    context: dict[str, Any] = {"run_id": run_id}
    if workflow_type:
        context["workflow_type"] = workflow_type
    return LoggerAdapter("workflow", **context)
