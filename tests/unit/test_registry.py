"""Agent capability registry unit tests."""

import pytest

from src.agents import BillingAgent, OrderAgent, SupportAgent
from src.core.registry import (
    AGENT_CAPABILITIES,
    get_agent_capabilities,
    list_agent_capabilities,
)
from src.core.router import ROUTER_CAPABILITIES
from src.models import AgentType
from src.utils.exceptions import AgentNotFoundError


class TestAgentCapabilities:
    """Test capability introspection."""

    def test_list_all_agents(self):
        """Test every agent is listed, router first."""
        agents = list_agent_capabilities()

        assert [a["type"] for a in agents] == ["router", "support", "order", "billing"]
        assert agents[0]["name"] == "Router Agent"
        assert agents[0]["tools"] == []

    def test_specialist_tools_match_agents(self):
        """Test capability records list the tools each agent registers."""
        assert AGENT_CAPABILITIES[AgentType.SUPPORT] is SupportAgent.capabilities
        assert get_agent_capabilities("order").tools == [
            "fetchOrderDetails",
            "checkDeliveryStatus",
        ]
        assert get_agent_capabilities(AgentType.BILLING) is BillingAgent.capabilities
        assert OrderAgent.capabilities.examples

    def test_router_record(self):
        """Test the router has its own record."""
        assert get_agent_capabilities(AgentType.ROUTER) is ROUTER_CAPABILITIES

    def test_unknown_agent(self):
        """Test unknown agent types raise AgentNotFoundError."""
        with pytest.raises(AgentNotFoundError) as exc_info:
            get_agent_capabilities("shipping")

        assert exc_info.value.agent_type == "shipping"
        assert exc_info.value.to_dict()["error"] == "AgentNotFoundError"

    def test_table_read_only(self):
        """Test the capability table cannot be modified."""
        with pytest.raises(TypeError):
            AGENT_CAPABILITIES[AgentType.ORDER] = ROUTER_CAPABILITIES
