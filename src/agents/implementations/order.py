"""Order Agent - Specialized agent for order status and delivery tracking."""

from __future__ import annotations

from collections.abc import Sequence

from src.agents.base import SpecializedAgent
from src.agents.tools import SupportDataStore, build_order_tools
from src.llm import ToolDefinition
from src.models import AgentCapabilities, AgentType


class OrderAgent(SpecializedAgent):
    """Agent specialized for order management.

    Tools:
    - fetchOrderDetails: Look up orders by number or customer email
    - checkDeliveryStatus: Tracking information for one order
    """

    agent_type = AgentType.ORDER

    system_prompt = """You are a specialized order management agent for customer support.

Your responsibilities:
- Check order status and details
- Provide tracking information
- Help with order modifications (where possible)
- Assist with order cancellations
- Answer questions about delivery timelines

You have access to order database tools. Always provide accurate, up-to-date information about orders.

When customers ask about orders, try to extract:
- Order number (format: ORD-YYYY-NNN)
- Customer email (as backup identifier)

Be professional, efficient, and helpful."""

    reasoning = "Handling order-related inquiry"

    error_message = (
        "I apologize, but I encountered an error processing your order request. "
        "Please try again."
    )

    capabilities = AgentCapabilities(
        name="Order Agent",
        description="Handles order status, tracking, modifications, and cancellations",
        tools=["fetchOrderDetails", "checkDeliveryStatus"],
        examples=[
            "Where is my order ORD-2024-001?",
            "What is the status of my recent order?",
            "Can I cancel my order?",
            "When will my package arrive?",
        ],
    )

    def _build_tools(self, store: SupportDataStore) -> Sequence[ToolDefinition]:
        return build_order_tools(store)
