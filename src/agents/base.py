"""Base Agent - Abstract base class for the specialized support agents.

This module defines the invocation contract shared by the support, order and
billing agents: compact the context, call the LLM with a fixed system prompt
and tool set, and convert any failure into a degraded response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from src.agents.context import ContextCompactor
from src.agents.tools.store import SupportDataStore
from src.llm import BaseLLMProvider, CompletionResult, ToolDefinition
from src.models import (
    AgentCapabilities,
    AgentConfig,
    AgentContext,
    AgentResponse,
    AgentType,
    Message,
    ToolCallRecord,
)
from src.utils.exceptions import AgentExecutionFailure
from src.utils.logging import get_agent_logger

ERROR_REASONING = "Error occurred during processing"


class SpecializedAgent(ABC):
    """Abstract base class for the specialized agents.

    Subclasses declare their static configuration as class attributes and
    build their tools from a data store. ``invoke`` never raises.

    Attributes:
        agent_type: Agent variant.
        system_prompt: Fixed system prompt.
        reasoning: Fixed description of the task category.
        error_message: Apologetic text returned on failure.
        capabilities: Static capability record.
    """

    agent_type: ClassVar[AgentType]
    system_prompt: ClassVar[str]
    reasoning: ClassVar[str]
    error_message: ClassVar[str]
    capabilities: ClassVar[AgentCapabilities]

    def __init__(
        self,
        provider: BaseLLMProvider,
        store: SupportDataStore,
        config: AgentConfig | None = None,
        compactor: ContextCompactor | None = None,
    ) -> None:
        """Initialize the agent.

        Args:
            provider: LLM provider used for completions.
            store: Data store the agent's tools read from.
            config: Model call parameters.
            compactor: Context compactor. Defaults to the standard budget.
        """
        self._provider = provider
        self._config = config or AgentConfig()
        self._compactor = compactor or ContextCompactor()
        self._tools = tuple(self._build_tools(store))
        self._logger = get_agent_logger(self.agent_type.value)

    @property
    def config(self) -> AgentConfig:
        """Get the agent configuration."""
        return self._config

    @property
    def tools(self) -> tuple[ToolDefinition, ...]:
        """Get the agent's tools."""
        return self._tools

    @property
    def tool_names(self) -> list[str]:
        """Get the names of the agent's tools."""
        return [tool.name for tool in self._tools]

    @abstractmethod
    def _build_tools(self, store: SupportDataStore) -> Sequence[ToolDefinition]:
        """Create this variant's tools bound to the store."""
        pass

    async def invoke(self, context: AgentContext) -> AgentResponse:
        """Answer the conversation in ``context``.

        Args:
            context: Conversation to answer. Only its messages are sent.

        Returns:
            The agent's response. On failure a degraded response carrying
            ``error_message`` is returned instead of raising.
        """
        log = self._logger.bind(conversation_id=context.conversation_id)
        try:
            messages = self._compactor.compact(context.messages, self.system_prompt)
            result = await self._call_llm(messages)
        except Exception as e:
            log.exception("Agent invocation failed", error=str(e))
            return AgentResponse(
                agent_type=self.agent_type,
                content=self.error_message,
                reasoning=ERROR_REASONING,
            )

        log.info(
            "Agent invocation completed",
            steps=result.steps,
            tool_calls=len(result.tool_calls),
        )
        return AgentResponse(
            agent_type=self.agent_type,
            content=result.text,
            reasoning=self.reasoning,
            tool_calls=self._tool_call_records(result),
        )

    async def _call_llm(self, messages: Sequence[Message]) -> CompletionResult:
        """Call the LLM with this agent's prompt and tools.

        Raises:
            AgentExecutionFailure: If the completion call fails.
        """
        try:
            return await self._provider.complete(
                system_prompt=self.system_prompt,
                messages=messages,
                tools=self._tools,
                max_steps=self._config.max_steps,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
                model=self._config.model,
            )
        except Exception as e:
            raise AgentExecutionFailure(
                self.agent_type.value,
                f"{self.agent_type.value} agent completion failed: {e}",
                cause=e,
            ) from e

    @staticmethod
    def _tool_call_records(result: CompletionResult) -> list[ToolCallRecord]:
        records = []
        for index, call in enumerate(result.tool_calls):
            tool_result = (
                result.tool_results[index] if index < len(result.tool_results) else None
            )
            records.append(
                ToolCallRecord(tool_name=call.tool_name, args=call.args, result=tool_result)
            )
        return records
