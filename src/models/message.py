"""대화 메시지 관련 데이터 모델 정의.

이 모듈은 Agent에 전달되는 대화 메시지와 컨텍스트 모델을 정의합니다.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """메시지 발화자 역할."""

    USER = "user"  # 사용자 발화
    ASSISTANT = "assistant"  # Agent 응답
    SYSTEM = "system"  # 시스템 메시지 (예: 잘림 표시)


class Message(BaseModel):
    """대화 메시지.

    생성 이후 변경할 수 없으며, 대화 내 순서가 곧 모델의 대화 이력입니다.
    """

    role: MessageRole = Field(..., description="발화자 역할")
    content: str | list[Any] | dict[str, Any] = Field(
        ..., description="메시지 내용 (텍스트 또는 구조화된 파트)"
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def user(cls, content: str) -> "Message":
        """사용자 메시지 생성 헬퍼."""
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Agent 응답 메시지 생성 헬퍼."""
        return cls(role=MessageRole.ASSISTANT, content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        """시스템 메시지 생성 헬퍼."""
        return cls(role=MessageRole.SYSTEM, content=content)

    def text(self) -> str:
        """내용을 텍스트로 반환. 텍스트가 아니면 JSON 직렬화."""
        if isinstance(self.content, str):
            return self.content
        return json.dumps(
            self.content, ensure_ascii=False, separators=(",", ":"), default=str
        )

    def to_llm_dict(self) -> dict[str, Any]:
        """LLM API 요청 형식(role/content dict)으로 변환."""
        return {"role": self.role.value, "content": self.text()}


class AgentContext(BaseModel):
    """Agent 호출 컨텍스트.

    호출자가 일시적으로 소유하며, 코어는 이를 저장하지 않습니다.
    """

    conversation_id: str = Field(..., description="대화 ID")
    messages: list[Message] = Field(
        default_factory=list, description="생성 순서대로 정렬된 메시지 목록"
    )
    user_id: str | None = Field(default=None, description="사용자 ID")

    model_config = {"extra": "forbid"}

    def last_message(self) -> Message | None:
        """가장 최근 메시지 반환."""
        if not self.messages:
            return None
        return self.messages[-1]
