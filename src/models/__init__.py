"""Data models package.

This module defines all data models used by the customer support agents.
"""

from .agent import (
    SPECIALIST_TYPES,
    AgentCapabilities,
    AgentConfig,
    AgentResponse,
    AgentType,
    ToolCallRecord,
)
from .message import (
    AgentContext,
    Message,
    MessageRole,
)
from .workflow import (
    WorkflowRun,
    WorkflowStatus,
    WorkflowStepResult,
    WorkflowType,
)

__all__ = [
    # Agent models
    "SPECIALIST_TYPES",
    "AgentCapabilities",
    "AgentConfig",
    "AgentResponse",
    "AgentType",
    "ToolCallRecord",
    # Message models
    "AgentContext",
    "Message",
    "MessageRole",
    # Workflow models
    "WorkflowRun",
    "WorkflowStatus",
    "WorkflowStepResult",
    "WorkflowType",
]
