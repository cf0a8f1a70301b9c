"""Agent 관련 데이터 모델 정의.

이 모듈은 Agent 유형, 설정, 응답, 능력(Capabilities) 기록을 정의합니다.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AgentType(str, Enum):
    """Agent 유형."""

    ROUTER = "router"  # 의도 분류 및 라우팅
    SUPPORT = "support"  # 일반 문의, FAQ, 문제 해결
    ORDER = "order"  # 주문 상태, 배송 조회
    BILLING = "billing"  # 결제, 환불, 인보이스


SPECIALIST_TYPES: tuple[AgentType, ...] = (
    AgentType.SUPPORT,
    AgentType.ORDER,
    AgentType.BILLING,
)


class ToolCallRecord(BaseModel):
    """Agent 실행 중 호출된 도구 기록."""

    tool_name: str = Field(..., description="도구 이름")
    args: dict[str, Any] = Field(default_factory=dict, description="호출 인자")
    result: Any = Field(default=None, description="도구 실행 결과")

    model_config = {"extra": "forbid", "frozen": True}


class AgentResponse(BaseModel):
    """Agent 호출 결과.

    Agent 호출 1회당 정확히 하나가 생성되며 변경할 수 없습니다.
    """

    agent_type: AgentType = Field(..., description="응답한 Agent 유형")
    content: str = Field(..., description="응답 텍스트")
    reasoning: str | None = Field(default=None, description="처리 근거 요약")
    tool_calls: list[ToolCallRecord] = Field(
        default_factory=list, description="호출 순서대로 정렬된 도구 호출 기록"
    )

    model_config = {"extra": "forbid", "frozen": True}


class AgentCapabilities(BaseModel):
    """Agent 능력 설명 (조회 전용, 동작에 영향 없음)."""

    name: str = Field(..., description="Agent 표시 이름")
    description: str = Field(..., description="Agent 설명")
    tools: list[str] = Field(default_factory=list, description="사용 가능한 도구 이름")
    examples: list[str] = Field(default_factory=list, description="예시 질의")

    model_config = {"extra": "forbid", "frozen": True}


class AgentConfig(BaseModel):
    """Agent LLM 호출 설정.

    시스템 프롬프트와 도구 구성은 Agent 유형별로 고정되어 있으며,
    여기서는 모델 호출 파라미터만 조정합니다.
    """

    model: str | None = Field(
        default=None, description="사용할 LLM 모델 (None이면 provider 기본값)"
    )
    max_tokens: int = Field(default=1024, ge=1, description="최대 응답 토큰 수")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="LLM 온도 설정")
    max_steps: int = Field(
        default=5, ge=1, description="도구 호출/응답 왕복 최대 횟수"
    )

    model_config = {"extra": "forbid"}
