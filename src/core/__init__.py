"""Core components package.

This package contains the orchestration layer of the customer support
agents: intent routing, durable workflows and capability introspection.
"""

from .checkpoint import (
    CheckpointStore,
    FileCheckpointStore,
    InMemoryCheckpointStore,
)
from .registry import (
    AGENT_CAPABILITIES,
    get_agent_capabilities,
    list_agent_capabilities,
)
from .router import (
    FALLBACK_AGENT,
    INTENT_PRIORITY,
    ROUTER_CAPABILITIES,
    ROUTER_PROMPT,
    Intent,
    IntentRouter,
    resolve_intent,
)
from .workflow import (
    StepSpec,
    WorkflowEngine,
    WorkflowPlan,
    build_workflow_plans,
)

__all__ = [
    # Router
    "IntentRouter",
    "Intent",
    "INTENT_PRIORITY",
    "FALLBACK_AGENT",
    "ROUTER_PROMPT",
    "ROUTER_CAPABILITIES",
    "resolve_intent",
    # Workflow
    "WorkflowEngine",
    "WorkflowPlan",
    "StepSpec",
    "build_workflow_plans",
    # Checkpoints
    "CheckpointStore",
    "InMemoryCheckpointStore",
    "FileCheckpointStore",
    # Registry
    "AGENT_CAPABILITIES",
    "list_agent_capabilities",
    "get_agent_capabilities",
]
