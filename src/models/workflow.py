"""워크플로우(Workflow) 관련 데이터 모델 정의.

이 모듈은 장기 실행 워크플로우의 상태와 체크포인트 모델을 정의합니다.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from .agent import AgentResponse, AgentType
from .message import Message


class WorkflowType(str, Enum):
    """워크플로우 요청 유형."""

    ORDER = "order"  # 주문 검증 → 배송 상태 확인
    REFUND = "refund"  # 환불 요청 → 환불 상태 확인
    SUPPORT = "support"  # 초기 진단 → 예약된 후속 확인
    OTHER = "other"  # 라우터로 바로 전달

    @classmethod
    def parse(cls, value: "WorkflowType | str") -> "WorkflowType":
        """문자열을 워크플로우 유형으로 변환. 알 수 없는 값은 OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class WorkflowStatus(str, Enum):
    """워크플로우 실행 상태."""

    CREATED = "created"  # 생성됨
    RUNNING = "running"  # 단계 실행 중
    SUSPENDED = "suspended"  # 단계 사이 대기 중
    COMPLETED = "completed"  # 완료
    FAILED = "failed"  # 실패


class WorkflowStepResult(BaseModel):
    """완료된 워크플로우 단계 기록."""

    name: str = Field(..., description="단계 이름")
    agent_type: AgentType = Field(..., description="호출한 Agent 유형")
    prompt: str = Field(..., description="단계에서 추가한 사용자 메시지")
    response: AgentResponse = Field(..., description="Agent 응답")
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="완료 시간"
    )

    model_config = {"extra": "forbid"}


class WorkflowRun(BaseModel):
    """워크플로우 실행 체크포인트.

    각 단계가 끝날 때마다 저장되어, 프로세스가 재시작되어도
    다음 단계부터 저장된 대화 기록으로 이어서 실행할 수 있습니다.
    """

    id: str = Field(
        default_factory=lambda: f"wf-{uuid.uuid4()}", description="실행 고유 식별자"
    )
    workflow_type: WorkflowType = Field(..., description="워크플로우 유형")
    entity_id: str = Field(..., description="대상 엔티티 ID (주문/인보이스 번호 등)")
    actor_id: str = Field(..., description="요청한 사용자 ID")
    message: str = Field(..., description="사용자 메시지 또는 문의 내용")
    status: WorkflowStatus = Field(
        default=WorkflowStatus.CREATED, description="실행 상태"
    )
    next_step: int = Field(default=0, ge=0, description="다음에 실행할 단계 인덱스")
    suspensions_done: int = Field(
        default=0, ge=0, description="다음 단계 전에 이미 끝난 대기 횟수"
    )
    transcript: list[Message] = Field(
        default_factory=list, description="이 실행에서 누적된 대화 기록"
    )
    steps: list[WorkflowStepResult] = Field(
        default_factory=list, description="완료된 단계 목록"
    )
    resume_at: datetime | None = Field(
        default=None, description="대기 종료 예정 시간 (대기 중일 때)"
    )
    result: AgentResponse | None = Field(default=None, description="최종 응답")
    error: str | None = Field(default=None, description="에러 메시지 (실패 시)")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="생성 시간"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="마지막 갱신 시간"
    )

    model_config = {"extra": "forbid"}

    @property
    def conversation_id(self) -> str:
        """Agent 컨텍스트에 사용할 대화 ID."""
        return self.id

    def is_finished(self) -> bool:
        """실행 종료 여부 확인."""
        return self.status in (WorkflowStatus.COMPLETED, WorkflowStatus.FAILED)

    def touch(self) -> None:
        """갱신 시간 기록."""
        self.updated_at = datetime.now(UTC)

    def record_step(self, step: WorkflowStepResult) -> None:
        """단계 완료 기록 및 대화 기록 누적."""
        self.steps.append(step)
        self.transcript.append(Message.user(step.prompt))
        self.transcript.append(Message.assistant(step.response.content))
        self.next_step += 1
        self.suspensions_done = 0
        self.touch()

    def mark_suspended(self, resume_at: datetime) -> None:
        """대기 상태 표시."""
        self.status = WorkflowStatus.SUSPENDED
        self.resume_at = resume_at
        self.touch()

    def finish_suspension(self) -> None:
        """대기 종료 기록 후 실행 상태로 전환."""
        self.suspensions_done += 1
        self.mark_running()

    def mark_running(self) -> None:
        """실행 상태 표시."""
        self.status = WorkflowStatus.RUNNING
        self.resume_at = None
        self.touch()

    def mark_completed(self, result: AgentResponse) -> None:
        """완료 표시."""
        self.status = WorkflowStatus.COMPLETED
        self.result = result
        self.resume_at = None
        self.touch()

    def mark_failed(self, error: str) -> None:
        """실패 표시."""
        self.status = WorkflowStatus.FAILED
        self.error = error
        self.resume_at = None
        self.touch()
