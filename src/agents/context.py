"""Context compaction - Bounds conversation history to a token budget.

Every message sequence handed to a specialized agent passes through
ContextCompactor first. Compaction is a greedy truncation of the oldest
messages, not a summary.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from src.models import Message, MessageRole

TRUNCATION_MARKER = "[Earlier messages truncated for context management]"

DEFAULT_TOTAL_BUDGET = 6000
DEFAULT_RESPONSE_RESERVE = 1000
DEFAULT_NEAR_LIMIT_RATIO = 0.8


def estimate_tokens(text: str) -> int:
    """Estimate the token count of a text (1 token per 4 characters)."""
    return math.ceil(len(text) / 4)


def estimate_message_tokens(message: Message) -> int:
    """Estimate the token count of a message, serializing non-text content."""
    return estimate_tokens(message.text())


class ContextCompactor:
    """Drops the oldest messages until a sequence fits the token budget.

    The budget covers the messages, the system prompt and a fixed reserve for
    the model's response.
    """

    def __init__(
        self,
        total_budget: int = DEFAULT_TOTAL_BUDGET,
        response_reserve: int = DEFAULT_RESPONSE_RESERVE,
        near_limit_ratio: float = DEFAULT_NEAR_LIMIT_RATIO,
    ) -> None:
        self._total_budget = total_budget
        self._response_reserve = response_reserve
        self._near_limit_ratio = near_limit_ratio

    @property
    def total_budget(self) -> int:
        """Get the total token budget."""
        return self._total_budget

    @property
    def response_reserve(self) -> int:
        """Get the tokens reserved for the response."""
        return self._response_reserve

    def available_budget(self, system_prompt: str | None = None) -> int:
        """Tokens left for messages once the system prompt and reserve are paid."""
        system_tokens = estimate_tokens(system_prompt) if system_prompt else 0
        return self._total_budget - system_tokens - self._response_reserve

    def compact(
        self, messages: Sequence[Message], system_prompt: str | None = None
    ) -> Sequence[Message]:
        """Compact a message sequence to fit the budget.

        Args:
            messages: Messages in creation order.
            system_prompt: System prompt sent alongside the messages.

        Returns:
            ``messages`` itself when it already fits. Otherwise the longest
            fitting suffix preceded by a single truncation marker. The newest
            message is always kept, even when it alone exceeds the budget.
        """
        if not messages:
            return messages

        available = self.available_budget(system_prompt)
        costs = [estimate_message_tokens(m) for m in messages]

        if sum(costs) <= available:
            return messages

        kept: list[Message] = []
        token_count = 0
        for message, cost in zip(reversed(messages), reversed(costs)):
            if kept and token_count + cost > available:
                break
            kept.append(message)
            token_count += cost

        kept.reverse()
        return [Message.system(TRUNCATION_MARKER), *kept]

    def get_context_info(self, messages: Sequence[Message]) -> dict[str, Any]:
        """Describe a message sequence for diagnostics."""
        estimated = sum(estimate_message_tokens(m) for m in messages)
        return {
            "message_count": len(messages),
            "estimated_tokens": estimated,
            "is_near_limit": estimated > self._total_budget * self._near_limit_ratio,
        }


def is_truncation_marker(message: Message) -> bool:
    """Check whether a message is the synthetic truncation marker."""
    return message.role == MessageRole.SYSTEM and message.content == TRUNCATION_MARKER
