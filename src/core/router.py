"""Intent Router - Classifies a query and dispatches it to a specialist.

The router issues one short classification call, resolves the returned word
to an agent by substring match in a fixed priority order, and hands the
unchanged context to that agent. Every path ends in a specialist response.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from src.agents.base import SpecializedAgent
from src.llm import BaseLLMProvider
from src.models import (
    SPECIALIST_TYPES,
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
)
from src.utils.exceptions import ClassificationFailure, ConfigurationError
from src.utils.logging import get_agent_logger

ROUTER_PROMPT = """You are a customer support router agent. Your job is to analyze incoming customer queries and classify them into one of these categories:

1. SUPPORT - General support inquiries, FAQs, troubleshooting, account help
   Examples: "How do I reset my password?", "What are your hours?", "Help with login"

2. ORDER - Order status, tracking, modifications, cancellations, delivery
   Examples: "Where is my order?", "Track my package", "Cancel order ORD-2024-001"

3. BILLING - Payment issues, refunds, invoices, subscriptions
   Examples: "Request refund", "Invoice question", "Payment failed", "Subscription help"

4. GENERAL - Greetings, unclear queries, or queries that don't fit above categories
   Examples: "Hello", "I need help", "Thank you"

Analyze the user's message and respond with ONLY ONE WORD:
- "SUPPORT"
- "ORDER"
- "BILLING"
- "GENERAL"

Be decisive and pick the most appropriate category based on keywords and context."""

ROUTER_CAPABILITIES = AgentCapabilities(
    name="Router Agent",
    description="Analyzes queries and routes to specialized agents",
    tools=[],
    examples=[
        "Routes order queries to Order Agent",
        "Routes billing queries to Billing Agent",
        "Routes general queries to Support Agent",
    ],
)


class Intent(str, Enum):
    """Category words the classifier may answer with."""

    SUPPORT = "SUPPORT"
    ORDER = "ORDER"
    BILLING = "BILLING"
    GENERAL = "GENERAL"


# First match wins. GENERAL and unrecognized output fall through to support.
INTENT_PRIORITY: tuple[tuple[Intent, AgentType], ...] = (
    (Intent.ORDER, AgentType.ORDER),
    (Intent.BILLING, AgentType.BILLING),
    (Intent.SUPPORT, AgentType.SUPPORT),
)

FALLBACK_AGENT = AgentType.SUPPORT


def resolve_intent(classification: str) -> AgentType:
    """Map raw classifier output to the agent that should handle the query.

    Args:
        classification: Text returned by the classification call.

    Returns:
        The first agent in priority order whose category word is contained
        in the normalized output, or the support agent.
    """
    normalized = classification.strip().upper()
    for intent, agent_type in INTENT_PRIORITY:
        if intent.value in normalized:
            return agent_type
    return FALLBACK_AGENT


class IntentRouter:
    """Routes a conversation to one of the specialized agents.

    The specialist mapping is fixed at construction and read-only afterwards.
    """

    capabilities = ROUTER_CAPABILITIES

    def __init__(
        self,
        provider: BaseLLMProvider,
        specialists: Mapping[AgentType, SpecializedAgent],
        classification_max_tokens: int = 10,
        model: str | None = None,
    ) -> None:
        """Initialize the router.

        Args:
            provider: LLM provider used for classification.
            specialists: One agent per specialist type.
            classification_max_tokens: Output token cap of the classification call.
            model: Model override for classification.

        Raises:
            ConfigurationError: If a specialist type has no agent.
        """
        missing = [t.value for t in SPECIALIST_TYPES if t not in specialists]
        if missing:
            raise ConfigurationError(
                f"Router is missing specialists: {', '.join(missing)}",
                details={"missing": missing},
            )

        self._provider = provider
        self._specialists: Mapping[AgentType, SpecializedAgent] = MappingProxyType(
            {t: specialists[t] for t in SPECIALIST_TYPES}
        )
        self._classification_max_tokens = classification_max_tokens
        self._model = model
        self._logger = get_agent_logger(AgentType.ROUTER.value)

    @property
    def specialists(self) -> Mapping[AgentType, SpecializedAgent]:
        """Get the read-only specialist mapping."""
        return self._specialists

    async def classify(self, context: AgentContext) -> AgentType:
        """Classify the latest message of the conversation.

        Args:
            context: Conversation whose last message is classified.

        Returns:
            The agent type that should handle the conversation.

        Raises:
            ClassificationFailure: If there is no message or the call fails.
        """
        last_message = context.last_message()
        if last_message is None:
            raise ClassificationFailure("No message to classify")

        try:
            result = await self._provider.complete(
                system_prompt=ROUTER_PROMPT,
                prompt=last_message.text(),
                max_tokens=self._classification_max_tokens,
                model=self._model,
            )
        except Exception as e:
            raise ClassificationFailure(f"Intent classification failed: {e}", cause=e) from e

        agent_type = resolve_intent(result.text)
        self._logger.info(
            "Router classified query",
            conversation_id=context.conversation_id,
            intent=result.text.strip().upper(),
            agent_type=agent_type.value,
        )
        return agent_type

    async def route(self, context: AgentContext) -> AgentResponse:
        """Classify the conversation and invoke the matching specialist.

        Classification failures fall back to the support agent without retry.
        """
        try:
            agent_type = await self.classify(context)
        except ClassificationFailure as e:
            self._logger.warning(
                "Classification failed, falling back to support agent",
                conversation_id=context.conversation_id,
                error=str(e),
            )
            agent_type = FALLBACK_AGENT

        return await self._specialists[agent_type].invoke(context)
