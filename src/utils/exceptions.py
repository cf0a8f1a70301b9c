"""Custom exception classes for the customer support agents.

This module provides a unified exception hierarchy for the application.
Agent-level failures (classification, specialist execution) are recovered
where they occur; workflow failures propagate to the caller.
"""

from typing import Any


class SupportAgentsError(Exception):
    """Base exception for all customer support agent errors.

    All custom exceptions in this system should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            cause: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SupportAgentsError):
    """Raised when there's a configuration error."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration is missing."""

    def __init__(self, config_key: str, message: str | None = None):
        self.config_key = config_key
        msg = message or f"Missing required configuration: {config_key}"
        super().__init__(msg, details={"config_key": config_key})


# ============================================================================
# LLM/External Service Errors
# ============================================================================


class ExternalServiceError(SupportAgentsError):
    """Base class for external service errors."""

    pass


class LLMAPIError(ExternalServiceError):
    """Raised when an LLM API call fails."""

    def __init__(
        self,
        message: str,
        provider: str = "groq",
        model: str | None = None,
        cause: Exception | None = None,
    ):
        details = {"provider": provider}
        if model:
            details["model"] = model
        super().__init__(message, details=details, cause=cause)
        self.provider = provider
        self.model = model


# ============================================================================
# Agent Errors
# ============================================================================


class ClassificationFailure(SupportAgentsError):
    """Raised when the intent classification call fails.

    The router recovers from this by dispatching to the support agent.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message, cause=cause)


class AgentNotFoundError(SupportAgentsError):
    """Raised when an agent type is unknown."""

    def __init__(self, agent_type: str):
        super().__init__(
            f"Agent type not found: {agent_type}", details={"agent_type": agent_type}
        )
        self.agent_type = agent_type


class AgentExecutionFailure(SupportAgentsError):
    """Raised when a specialist's completion call fails.

    The specialist recovers from this by returning a degraded response.
    """

    def __init__(
        self, agent_type: str, message: str, cause: Exception | None = None
    ):
        super().__init__(message, details={"agent_type": agent_type}, cause=cause)
        self.agent_type = agent_type


# ============================================================================
# Workflow Errors
# ============================================================================


class WorkflowError(SupportAgentsError):
    """Base class for workflow errors."""

    pass


class WorkflowNotFoundError(WorkflowError):
    """Raised when a workflow run checkpoint does not exist."""

    def __init__(self, run_id: str):
        super().__init__(
            f"Workflow run not found: {run_id}", details={"run_id": run_id}
        )
        self.run_id = run_id


class WorkflowStateError(WorkflowError):
    """Raised when an operation is invalid for the run's current state."""

    def __init__(self, run_id: str, current_state: str, operation: str):
        super().__init__(
            f"Cannot {operation} workflow {run_id} in state {current_state}",
            details={"run_id": run_id, "state": current_state},
        )
        self.run_id = run_id
        self.current_state = current_state
        self.operation = operation
