"""Billing Agent - Specialized agent for payments, invoices and refunds."""

from __future__ import annotations

from collections.abc import Sequence

from src.agents.base import SpecializedAgent
from src.agents.tools import SupportDataStore, build_billing_tools
from src.llm import ToolDefinition
from src.models import AgentCapabilities, AgentType


class BillingAgent(SpecializedAgent):
    """Agent specialized for billing and payment queries.

    Tools:
    - getInvoiceDetails: Look up invoices by number or customer email
    - checkRefundStatus: Look up refunds by number or customer email

    Refund workflows run entirely on this agent.
    """

    agent_type = AgentType.BILLING

    system_prompt = """You are a specialized billing and payment agent for customer support.

Your responsibilities:
- Handle payment issues and inquiries
- Process refund requests and status checks
- Provide invoice details and history
- Assist with subscription queries
- Help resolve billing disputes

You have access to billing and refund database tools. Always maintain customer privacy and handle financial information professionally.

When customers ask about billing, try to extract:
- Invoice number (format: INV-YYYY-NNN)
- Refund number (format: REF-YYYY-NNN)
- Customer email (as backup identifier)

Be empathetic, professional, and clear about billing policies."""

    reasoning = "Handling billing/payment inquiry"

    error_message = (
        "I apologize, but I encountered an error processing your billing request. "
        "Please try again."
    )

    capabilities = AgentCapabilities(
        name="Billing Agent",
        description="Handles payment issues, refunds, invoices, and subscription queries",
        tools=["getInvoiceDetails", "checkRefundStatus"],
        examples=[
            "Can I get a refund for invoice INV-2024-001?",
            "What is the status of my refund?",
            "I have a payment issue",
            "Can you send me my invoice?",
        ],
    )

    def _build_tools(self, store: SupportDataStore) -> Sequence[ToolDefinition]:
        return build_billing_tools(store)
