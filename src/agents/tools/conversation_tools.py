"""Conversation tools - Recall of earlier messages in a conversation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.agents.tools.store import SupportDataStore
from src.llm.base import ToolDefinition
from src.utils.logging import get_logger

logger = get_logger(__name__)


class QueryConversationHistoryArgs(BaseModel):
    """Arguments of queryConversationHistory."""

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(
        ..., alias="conversationId", description="The conversation ID"
    )
    limit: int = Field(
        default=10, ge=1, description="Number of recent messages to retrieve"
    )


def build_conversation_tools(store: SupportDataStore) -> list[ToolDefinition]:
    """Create the support agent's tools bound to a data store."""

    async def query_conversation_history(
        args: QueryConversationHistoryArgs,
    ) -> dict[str, Any]:
        try:
            history = await store.get_messages(args.conversation_id, limit=args.limit)
        except Exception:
            logger.exception(
                "Conversation history lookup failed",
                conversation_id=args.conversation_id,
            )
            return {"success": False, "error": "Failed to fetch conversation history"}

        return {
            "success": True,
            "messages": [
                {
                    "role": msg.role,
                    "content": msg.content,
                    "timestamp": msg.created_at,
                    "agent": msg.agent_type,
                }
                for msg in history
            ],
        }

    return [
        ToolDefinition(
            name="queryConversationHistory",
            description=(
                "Query the conversation history to recall previous messages "
                "and provide context-aware responses"
            ),
            parameters=QueryConversationHistoryArgs,
            execute=query_conversation_history,
        ),
    ]
