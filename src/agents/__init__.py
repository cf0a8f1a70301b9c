"""Agent module - Specialized support agents and their building blocks.

This module provides:
- SpecializedAgent: Invocation contract shared by all specialists
- ContextCompactor: Token-budget bounding of conversation history
- Specialized agent implementations (Support, Order, Billing)
- Domain tools and the data store they read from
"""

from src.agents.base import ERROR_REASONING, SpecializedAgent
from src.agents.context import (
    TRUNCATION_MARKER,
    ContextCompactor,
    estimate_message_tokens,
    estimate_tokens,
    is_truncation_marker,
)
from src.agents.implementations import (
    SPECIALIST_CLASSES,
    BillingAgent,
    OrderAgent,
    SupportAgent,
    create_specialists,
)

__all__ = [
    # Base
    "ERROR_REASONING",
    "SpecializedAgent",
    # Context
    "TRUNCATION_MARKER",
    "ContextCompactor",
    "estimate_message_tokens",
    "estimate_tokens",
    "is_truncation_marker",
    # Implementations
    "SPECIALIST_CLASSES",
    "BillingAgent",
    "OrderAgent",
    "SupportAgent",
    "create_specialists",
]
