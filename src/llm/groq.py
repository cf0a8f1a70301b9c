"""Groq LLM Provider implementation.

This module provides Groq chat completions with function calling through
the OpenAI-compatible API.
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI

from src.llm.base import (
    BaseLLMProvider,
    ModelTurn,
    ToolCall,
    ToolDefinition,
    serialize_tool_result,
)
from src.utils.logging import get_logger

logger = get_logger(__name__)


class GroqProvider(BaseLLMProvider):
    """Groq API provider.

    Provides access to Llama models through the Groq API using
    OpenAI-compatible interface.
    """

    BASE_URL = "https://api.groq.com/openai/v1"

    AVAILABLE_MODELS = [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "openai/gpt-oss-120b",
    ]

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the Groq provider.

        Args:
            api_key: Groq API key. If None, reads from GROQ_API_KEY env var.
            base_url: Optional custom base URL. Defaults to the Groq API.
            **kwargs: Additional configuration.
        """
        resolved_api_key = api_key or os.getenv("GROQ_API_KEY", "")
        super().__init__(api_key=resolved_api_key, **kwargs)

        self._base_url = base_url or self.BASE_URL
        self._async_client = AsyncOpenAI(
            api_key=resolved_api_key,
            base_url=self._base_url,
        )

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "groq"

    @property
    def default_model(self) -> str:
        """Return the default model."""
        return "llama-3.3-70b-versatile"

    def get_available_models(self) -> list[str]:
        """Return list of available Groq models."""
        return self.AVAILABLE_MODELS.copy()

    async def _generate_turn(
        self,
        transcript: list[dict[str, Any]],
        system_prompt: str | None,
        tools: Sequence[ToolDefinition],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ModelTurn:
        full_messages: list[dict[str, Any]] = []
        if system_prompt:
            full_messages.append({"role": "system", "content": system_prompt})
        full_messages.extend(transcript)

        request_params: dict[str, Any] = {
            "model": model,
            "messages": full_messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": False,
        }
        if tools:
            request_params["tools"] = [
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": tool.json_schema(),
                    },
                }
                for tool in tools
            ]

        response = await self._async_client.chat.completions.create(**request_params)

        text = ""
        calls: list[ToolCall] = []
        if response.choices:
            message = response.choices[0].message
            text = message.content or ""
            for tc in message.tool_calls or []:
                calls.append(
                    ToolCall(
                        id=tc.id,
                        tool_name=tc.function.name,
                        args=self._parse_arguments(tc.function.arguments),
                    )
                )

        usage = {}
        if response.usage:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
            }

        return ModelTurn(text=text, tool_calls=calls, usage=usage, raw_response=response)

    def _tool_round_messages(
        self, turn: ModelTurn, results: list[Any]
    ) -> list[dict[str, Any]]:
        assistant_message = {
            "role": "assistant",
            "content": turn.text,
            "tool_calls": [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {
                        "name": call.tool_name,
                        "arguments": json.dumps(call.args, ensure_ascii=False),
                    },
                }
                for call in turn.tool_calls
            ],
        }
        tool_messages = [
            {
                "role": "tool",
                "tool_call_id": call.id,
                "content": serialize_tool_result(result),
            }
            for call, result in zip(turn.tool_calls, results)
        ]
        return [assistant_message, *tool_messages]

    @staticmethod
    def _parse_arguments(raw: str | None) -> dict[str, Any]:
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Model returned malformed tool arguments", raw=raw[:200])
            return {}
        return parsed if isinstance(parsed, dict) else {}
