"""Agent Registry - Static capability records for introspection.

Capability records are descriptive only; they never influence routing.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from src.agents.implementations import SPECIALIST_CLASSES
from src.core.router import ROUTER_CAPABILITIES
from src.models import AgentCapabilities, AgentType
from src.utils.exceptions import AgentNotFoundError

AGENT_CAPABILITIES = MappingProxyType(
    {
        AgentType.ROUTER: ROUTER_CAPABILITIES,
        **{
            agent_type: agent_class.capabilities
            for agent_type, agent_class in SPECIALIST_CLASSES.items()
        },
    }
)


def list_agent_capabilities() -> list[dict[str, Any]]:
    """List every agent with its capability record.

    Returns:
        One entry per agent, router first, each with a ``type`` key.
    """
    return [
        {"type": agent_type.value, **AGENT_CAPABILITIES[agent_type].model_dump()}
        for agent_type in AgentType
    ]


def get_agent_capabilities(agent_type: AgentType | str) -> AgentCapabilities:
    """Get the capability record of one agent.

    Raises:
        AgentNotFoundError: If the agent type is unknown.
    """
    try:
        key = AgentType(agent_type)
    except ValueError as e:
        raise AgentNotFoundError(str(agent_type)) from e
    return AGENT_CAPABILITIES[key]
