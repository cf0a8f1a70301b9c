"""테스트 공용 헬퍼: 스크립트 기반 LLM provider와 Agent mock."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from src.llm.base import BaseLLMProvider, ModelTurn, ToolCall, ToolDefinition
from src.models import AgentResponse, AgentType

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


class ScriptedProvider(BaseLLMProvider):
    """LLM provider replaying scripted turns instead of calling an API.

    Each entry of ``turns`` is either a ModelTurn to return or an exception
    to raise. When the script runs out, ``default_text`` is returned.
    """

    def __init__(
        self,
        turns: Sequence[ModelTurn | Exception] | None = None,
        default_text: str = "OK",
    ) -> None:
        super().__init__(api_key="test-key")
        self.turns: list[ModelTurn | Exception] = list(turns or [])
        self.default_text = default_text
        self.requests: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "scripted"

    @property
    def default_model(self) -> str:
        return "scripted-model"

    async def _generate_turn(
        self,
        transcript: list[dict[str, Any]],
        system_prompt: str | None,
        tools: Sequence[ToolDefinition],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ModelTurn:
        self.requests.append(
            {
                "transcript": list(transcript),
                "system_prompt": system_prompt,
                "tools": [tool.name for tool in tools],
                "model": model,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if not self.turns:
            return ModelTurn(text=self.default_text)
        turn = self.turns.pop(0)
        if isinstance(turn, Exception):
            raise turn
        return turn

    def _tool_round_messages(
        self, turn: ModelTurn, results: list[Any]
    ) -> list[dict[str, Any]]:
        return [
            {"role": "assistant", "content": turn.text},
            *(
                {"role": "tool", "tool_call_id": call.id, "content": str(result)}
                for call, result in zip(turn.tool_calls, results)
            ),
        ]


def text_turn(text: str) -> ModelTurn:
    """Model turn with only text."""
    return ModelTurn(text=text)


def tool_turn(*calls: tuple[str, dict[str, Any]], text: str = "") -> ModelTurn:
    """Model turn requesting the given (tool_name, args) calls."""
    return ModelTurn(
        text=text,
        tool_calls=[
            ToolCall(id=f"call_{i}", tool_name=name, args=args)
            for i, (name, args) in enumerate(calls)
        ],
    )


class RecordingSleep:
    """Sleep replacement that records requested delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def mock_agent(agent_type: AgentType, content: str) -> MagicMock:
    """Specialist mock whose invoke returns a fixed response."""
    agent = MagicMock()
    agent.invoke = AsyncMock(
        return_value=AgentResponse(agent_type=agent_type, content=content)
    )
    return agent


