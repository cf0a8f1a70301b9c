"""Anthropic LLM Provider implementation.

This module provides the Anthropic Claude API integration with tool use.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

import anthropic

from src.llm.base import (
    BaseLLMProvider,
    ModelTurn,
    ToolCall,
    ToolDefinition,
    serialize_tool_result,
)
from src.models import Message, MessageRole


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude API provider.

    Provides access to Claude models through the Anthropic API.
    """

    AVAILABLE_MODELS = [
        "claude-sonnet-4-20250514",
        "claude-haiku-4-5-20251001",
        "claude-3-5-haiku-20241022",
    ]

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the Anthropic provider.

        Args:
            api_key: Anthropic API key. If None, reads from ANTHROPIC_API_KEY env var.
            base_url: Optional custom base URL for the API.
            **kwargs: Additional configuration.
        """
        resolved_api_key = api_key or os.getenv("ANTHROPIC_API_KEY", "")
        super().__init__(api_key=resolved_api_key, **kwargs)

        self._async_client = anthropic.AsyncAnthropic(
            api_key=resolved_api_key,
            base_url=base_url,
        )

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "anthropic"

    @property
    def default_model(self) -> str:
        """Return the default model."""
        return "claude-haiku-4-5-20251001"

    def get_available_models(self) -> list[str]:
        """Return list of available Anthropic models."""
        return self.AVAILABLE_MODELS.copy()

    def _format_message(self, message: Message) -> dict[str, Any]:
        # The Messages API has no system role inside the conversation
        if message.role == MessageRole.SYSTEM:
            return {"role": "user", "content": message.text()}
        return message.to_llm_dict()

    async def _generate_turn(
        self,
        transcript: list[dict[str, Any]],
        system_prompt: str | None,
        tools: Sequence[ToolDefinition],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ModelTurn:
        request_params: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": transcript,
        }
        if system_prompt:
            request_params["system"] = system_prompt
        if tools:
            request_params["tools"] = [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.json_schema(),
                }
                for tool in tools
            ]

        response = await self._async_client.messages.create(**request_params)

        text_parts: list[str] = []
        calls: list[ToolCall] = []
        for block in response.content or []:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                calls.append(
                    ToolCall(id=block.id, tool_name=block.name, args=dict(block.input))
                )

        return ModelTurn(
            text="".join(text_parts),
            tool_calls=calls,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            raw_response=response,
        )

    def _tool_round_messages(
        self, turn: ModelTurn, results: list[Any]
    ) -> list[dict[str, Any]]:
        assistant_content: list[dict[str, Any]] = []
        if turn.text:
            assistant_content.append({"type": "text", "text": turn.text})
        for call in turn.tool_calls:
            assistant_content.append(
                {
                    "type": "tool_use",
                    "id": call.id,
                    "name": call.tool_name,
                    "input": call.args,
                }
            )

        tool_results = [
            {
                "type": "tool_result",
                "tool_use_id": call.id,
                "content": serialize_tool_result(result),
            }
            for call, result in zip(turn.tool_calls, results)
        ]
        return [
            {"role": "assistant", "content": assistant_content},
            {"role": "user", "content": tool_results},
        ]
