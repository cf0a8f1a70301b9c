"""Base LLM Provider - Abstract interface for generative-text providers.

This module defines the abstract base class that all LLM providers must implement,
together with the tool definitions the providers can execute autonomously.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from src.models import Message
from src.utils.exceptions import LLMAPIError
from src.utils.logging import get_logger

logger = get_logger(__name__)

# Async callable receiving the validated argument model
ToolExecutor = Callable[[Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolDefinition:
    """A domain tool the model may call during a completion.

    Tools never raise for domain failures; they return
    ``{"success": False, "error": ...}`` instead.
    """

    name: str
    description: str
    parameters: type[BaseModel]
    execute: ToolExecutor

    def json_schema(self) -> dict[str, Any]:
        """Return the JSON schema of the tool arguments."""
        return self.parameters.model_json_schema()

    async def run(self, args: dict[str, Any]) -> dict[str, Any]:
        """Validate raw model arguments and execute the tool."""
        try:
            parsed = self.parameters.model_validate(args)
        except ValidationError as e:
            return {
                "success": False,
                "error": f"Invalid arguments for {self.name}: {e.error_count()} error(s)",
            }
        return await self.execute(parsed)


@dataclass
class ToolCall:
    """A tool call requested by the model."""

    id: str
    tool_name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class ModelTurn:
    """One raw model response inside the tool loop."""

    text: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    usage: dict[str, int] = field(default_factory=dict)
    raw_response: Any = None


@dataclass
class CompletionResult:
    """Final result of a completion, after all tool round-trips.

    ``tool_results[i]`` is the result of ``tool_calls[i]``.
    """

    text: str
    model: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_results: list[Any] = field(default_factory=list)
    usage: dict[str, int] = field(default_factory=dict)
    steps: int = 0


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    All LLM providers (Groq, Anthropic, etc.) must implement
    this interface to be used interchangeably by the agents.
    """

    def __init__(self, api_key: str, **kwargs: Any) -> None:
        """Initialize the LLM provider.

        Args:
            api_key: API key for authentication.
            **kwargs: Additional provider-specific configuration.
        """
        self._api_key = api_key
        self._config = kwargs

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'groq', 'anthropic')."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Return the default model for this provider."""
        pass

    @abstractmethod
    async def _generate_turn(
        self,
        transcript: list[dict[str, Any]],
        system_prompt: str | None,
        tools: Sequence[ToolDefinition],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ModelTurn:
        """Send one request to the provider and parse the reply.

        Args:
            transcript: Provider-native message dicts.
            system_prompt: Optional system prompt.
            tools: Tools offered to the model (may be empty).
            model: Model to use.
            max_tokens: Maximum tokens in the response.
            temperature: Sampling temperature.

        Returns:
            The parsed model turn.
        """
        pass

    @abstractmethod
    def _tool_round_messages(
        self, turn: ModelTurn, results: list[Any]
    ) -> list[dict[str, Any]]:
        """Build the provider-native messages recording one tool round-trip."""
        pass

    def _format_message(self, message: Message) -> dict[str, Any]:
        """Convert a conversation message to the provider's format."""
        return message.to_llm_dict()

    def get_available_models(self) -> list[str]:
        """Return list of available models for this provider."""
        return [self.default_model]

    async def complete(
        self,
        *,
        system_prompt: str | None = None,
        messages: Sequence[Message] | None = None,
        prompt: str | None = None,
        tools: Sequence[ToolDefinition] | None = None,
        max_steps: int = 1,
        max_tokens: int = 1024,
        temperature: float = 0.7,
        model: str | None = None,
    ) -> CompletionResult:
        """Generate text, executing requested tools for up to ``max_steps`` rounds.

        Args:
            system_prompt: Optional system prompt.
            messages: Prior conversation messages.
            prompt: Optional single user prompt appended after ``messages``.
            tools: Tools the model may call.
            max_steps: Maximum number of model requests (tool round-trips).
            max_tokens: Output token cap per request.
            temperature: Sampling temperature.
            model: Model to use. If None, uses default_model.

        Returns:
            CompletionResult with the final text and aligned tool calls/results.

        Raises:
            ValueError: If neither messages nor prompt is given.
            LLMAPIError: If the provider request fails.
        """
        used_model = model or self.default_model
        transcript = [self._format_message(m) for m in messages or []]
        if prompt is not None:
            transcript.append({"role": "user", "content": prompt})
        if not transcript:
            raise ValueError("Either messages or prompt must be provided")

        tool_list = list(tools or [])
        tool_map = {tool.name: tool for tool in tool_list}

        calls: list[ToolCall] = []
        results: list[Any] = []
        usage: dict[str, int] = {}
        turn = ModelTurn(text="")
        steps = 0

        for _ in range(max(1, max_steps)):
            try:
                turn = await self._generate_turn(
                    transcript,
                    system_prompt,
                    tool_list,
                    used_model,
                    max_tokens,
                    temperature,
                )
            except Exception as e:
                raise LLMAPIError(
                    f"{self.provider_name} request failed: {e}",
                    provider=self.provider_name,
                    model=used_model,
                    cause=e,
                ) from e
            steps += 1
            for key, value in turn.usage.items():
                usage[key] = usage.get(key, 0) + value

            if not turn.tool_calls or not tool_map:
                break

            round_results = []
            for call in turn.tool_calls:
                result = await self._execute_tool(tool_map, call)
                calls.append(call)
                results.append(result)
                round_results.append(result)
            transcript.extend(self._tool_round_messages(turn, round_results))

        return CompletionResult(
            text=turn.text,
            model=used_model,
            tool_calls=calls,
            tool_results=results,
            usage=usage,
            steps=steps,
        )

    async def _execute_tool(
        self, tool_map: dict[str, ToolDefinition], call: ToolCall
    ) -> dict[str, Any]:
        tool = tool_map.get(call.tool_name)
        if tool is None:
            logger.warning("Model requested unknown tool", tool_name=call.tool_name)
            return {"success": False, "error": f"Unknown tool: {call.tool_name}"}

        logger.debug("Executing tool", tool_name=call.tool_name, args=call.args)
        return await tool.run(call.args)


def serialize_tool_result(result: Any) -> str:
    """Serialize a tool result for the provider transcript."""
    return json.dumps(result, ensure_ascii=False, default=str)
