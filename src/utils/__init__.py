"""Utility modules for the customer support agents.

This package provides utility functions and classes for:
- Configuration management
- Structured logging
- Exception handling
"""

from .config import (
    AgentDefaults,
    AppConfig,
    AppSettings,
    ContextConfig,
    Environment,
    LLMConfig,
    LogFormat,
    LoggingConfig,
    RouterConfig,
    WorkflowConfig,
    get_config,
    init_config,
    reset_config,
)
from .exceptions import (
    AgentExecutionFailure,
    AgentNotFoundError,
    ClassificationFailure,
    ConfigurationError,
    ExternalServiceError,
    LLMAPIError,
    MissingConfigurationError,
    SupportAgentsError,
    WorkflowError,
    WorkflowNotFoundError,
    WorkflowStateError,
)
from .logging import (
    LoggerAdapter,
    clear_correlation_id,
    get_agent_logger,
    get_correlation_id,
    get_logger,
    get_workflow_logger,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    # Config
    "AppConfig",
    "AppSettings",
    "LLMConfig",
    "LoggingConfig",
    "AgentDefaults",
    "ContextConfig",
    "RouterConfig",
    "WorkflowConfig",
    "Environment",
    "LogFormat",
    "get_config",
    "init_config",
    "reset_config",
    # Logging
    "setup_logging",
    "get_logger",
    "LoggerAdapter",
    "get_agent_logger",
    "get_workflow_logger",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    # Exceptions
    "SupportAgentsError",
    "ConfigurationError",
    "MissingConfigurationError",
    "ExternalServiceError",
    "LLMAPIError",
    "ClassificationFailure",
    "AgentExecutionFailure",
    "AgentNotFoundError",
    "WorkflowError",
    "WorkflowNotFoundError",
    "WorkflowStateError",
]
