"""Agent implementations module.

This module contains the specialized support agents:
- SupportAgent: General inquiries, FAQs and troubleshooting
- OrderAgent: Order status and delivery tracking
- BillingAgent: Payments, invoices and refunds
"""

from __future__ import annotations

from src.agents.base import SpecializedAgent
from src.agents.context import ContextCompactor
from src.agents.implementations.billing import BillingAgent
from src.agents.implementations.order import OrderAgent
from src.agents.implementations.support import SupportAgent
from src.agents.tools import SupportDataStore
from src.llm import BaseLLMProvider
from src.models import AgentConfig, AgentType

SPECIALIST_CLASSES: dict[AgentType, type[SpecializedAgent]] = {
    AgentType.SUPPORT: SupportAgent,
    AgentType.ORDER: OrderAgent,
    AgentType.BILLING: BillingAgent,
}


def create_specialists(
    provider: BaseLLMProvider,
    store: SupportDataStore,
    config: AgentConfig | None = None,
    compactor: ContextCompactor | None = None,
) -> dict[AgentType, SpecializedAgent]:
    """Create one instance of every specialized agent.

    Args:
        provider: LLM provider shared by the agents.
        store: Data store the agents' tools read from.
        config: Model call parameters shared by the agents.
        compactor: Context compactor shared by the agents.

    Returns:
        Mapping from agent type to agent instance.
    """
    compactor = compactor or ContextCompactor()
    return {
        agent_type: agent_class(provider, store, config=config, compactor=compactor)
        for agent_type, agent_class in SPECIALIST_CLASSES.items()
    }


__all__ = [
    "BillingAgent",
    "OrderAgent",
    "SupportAgent",
    "SPECIALIST_CLASSES",
    "create_specialists",
]
