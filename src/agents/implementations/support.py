"""Support Agent - Specialized agent for general support inquiries.

This agent answers FAQs, troubleshooting and account questions, and can
recall earlier messages of the conversation.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.agents.base import SpecializedAgent
from src.agents.tools import SupportDataStore, build_conversation_tools
from src.llm import ToolDefinition
from src.models import AgentCapabilities, AgentType


class SupportAgent(SpecializedAgent):
    """Agent specialized for general support inquiries.

    Tools:
    - queryConversationHistory: Recall previous messages of a conversation

    Also the fallback target of the router for general or unclassified
    queries.
    """

    agent_type = AgentType.SUPPORT

    system_prompt = """You are a helpful customer support agent specializing in general support inquiries, FAQs, and troubleshooting.

Your responsibilities:
- Answer common questions about products and services
- Provide troubleshooting guidance
- Help with account-related queries
- Offer helpful tips and best practices

You have access to conversation history to provide context-aware responses. Always be friendly, professional, and helpful."""

    reasoning = "Handling general support inquiry"

    error_message = (
        "I apologize, but I encountered an error processing your request. "
        "Please try again."
    )

    capabilities = AgentCapabilities(
        name="Support Agent",
        description="Handles general support inquiries, FAQs, and troubleshooting",
        tools=["queryConversationHistory"],
        examples=[
            "How do I reset my password?",
            "What are your business hours?",
            "How do I update my account information?",
            "I need help troubleshooting a technical issue",
        ],
    )

    def _build_tools(self, store: SupportDataStore) -> Sequence[ToolDefinition]:
        return build_conversation_tools(store)
