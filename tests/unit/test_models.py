"""데이터 모델 단위 테스트."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from src.models import (
    # Agent models
    SPECIALIST_TYPES,
    AgentCapabilities,
    AgentConfig,
    AgentResponse,
    AgentType,
    ToolCallRecord,
    # Message models
    AgentContext,
    Message,
    MessageRole,
    # Workflow models
    WorkflowRun,
    WorkflowStatus,
    WorkflowStepResult,
    WorkflowType,
)
from tests.helpers import FIXED_NOW


def make_run(**kwargs) -> WorkflowRun:
    defaults = {
        "workflow_type": WorkflowType.ORDER,
        "entity_id": "ORD-2024-001",
        "actor_id": "user-1",
        "message": "Where is my order?",
    }
    defaults.update(kwargs)
    return WorkflowRun(**defaults)


class TestAgentModels:
    """Agent 모델 테스트."""

    def test_specialist_types(self):
        """전문 Agent 유형에는 라우터가 포함되지 않음."""
        assert SPECIALIST_TYPES == (AgentType.SUPPORT, AgentType.ORDER, AgentType.BILLING)
        assert AgentType.ROUTER not in SPECIALIST_TYPES

    def test_agent_config_defaults(self):
        """AgentConfig 기본값 테스트."""
        config = AgentConfig()
        assert config.model is None
        assert config.max_tokens == 1024
        assert config.temperature == 0.7
        assert config.max_steps == 5

    @pytest.mark.parametrize(
        "field,value",
        [("max_tokens", 0), ("temperature", 2.5), ("max_steps", 0)],
    )
    def test_agent_config_validation(self, field: str, value):
        """AgentConfig 범위 검증 테스트."""
        with pytest.raises(ValidationError):
            AgentConfig(**{field: value})

    def test_agent_response_immutable(self):
        """AgentResponse는 생성 후 변경 불가."""
        response = AgentResponse(
            agent_type=AgentType.ORDER,
            content="Shipped",
            tool_calls=[ToolCallRecord(tool_name="checkDeliveryStatus", args={"orderNumber": "A"})],
        )

        with pytest.raises(ValidationError):
            response.content = "changed"
        assert response.reasoning is None
        assert response.tool_calls[0].result is None

    def test_agent_response_serialization(self):
        """AgentResponse JSON 왕복 테스트."""
        response = AgentResponse(
            agent_type=AgentType.BILLING,
            content="Refund processed",
            reasoning="Handling billing/payment inquiry",
            tool_calls=[
                ToolCallRecord(
                    tool_name="checkRefundStatus",
                    args={"refundNumber": "REF-2024-001"},
                    result={"success": True},
                )
            ],
        )

        restored = AgentResponse.model_validate_json(response.model_dump_json())

        assert restored == response
        assert restored.agent_type is AgentType.BILLING

    def test_capabilities_extra_forbidden(self):
        """AgentCapabilities는 정의되지 않은 필드를 거부."""
        with pytest.raises(ValidationError):
            AgentCapabilities(name="x", description="y", priority=1)


class TestMessageModels:
    """메시지 모델 테스트."""

    def test_role_helpers(self):
        """역할별 생성 헬퍼 테스트."""
        assert Message.user("hi").role == MessageRole.USER
        assert Message.assistant("hello").role == MessageRole.ASSISTANT
        assert Message.system("note").role == MessageRole.SYSTEM

    def test_text_of_structured_content(self):
        """구조화된 내용은 JSON 텍스트로 변환."""
        message = Message(role=MessageRole.USER, content=[{"type": "text", "text": "안녕"}])
        assert message.text() == '[{"type":"text","text":"안녕"}]'

    def test_to_llm_dict(self):
        """LLM 요청 형식 변환 테스트."""
        assert Message.assistant("done").to_llm_dict() == {
            "role": "assistant",
            "content": "done",
        }

    def test_message_immutable(self):
        """Message는 생성 후 변경 불가."""
        message = Message.user("hi")
        with pytest.raises(ValidationError):
            message.content = "changed"

    def test_invalid_role(self):
        """정의되지 않은 역할 거부."""
        with pytest.raises(ValidationError):
            Message(role="tool", content="x")

    def test_context_last_message(self):
        """마지막 메시지 조회 테스트."""
        context = AgentContext(
            conversation_id="conv-1",
            messages=[Message.user("first"), Message.user("second")],
        )
        assert context.last_message().content == "second"
        assert AgentContext(conversation_id="empty").last_message() is None
        assert context.user_id is None


class TestWorkflowModels:
    """워크플로우 모델 테스트."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("order", WorkflowType.ORDER),
            ("REFUND", WorkflowType.REFUND),
            (" support ", WorkflowType.SUPPORT),
            (WorkflowType.ORDER, WorkflowType.ORDER),
            ("shipping", WorkflowType.OTHER),
            ("", WorkflowType.OTHER),
        ],
    )
    def test_workflow_type_parse(self, value, expected: WorkflowType):
        """요청 유형 파싱 테스트. 알 수 없는 값은 OTHER."""
        assert WorkflowType.parse(value) == expected

    def test_run_defaults(self):
        """WorkflowRun 기본값 테스트."""
        run = make_run()
        assert run.id.startswith("wf-")
        assert run.status == WorkflowStatus.CREATED
        assert run.next_step == 0
        assert run.suspensions_done == 0
        assert run.transcript == []
        assert run.conversation_id == run.id
        assert not run.is_finished()

    def test_run_ids_unique(self):
        """실행마다 고유 ID 부여."""
        assert make_run().id != make_run().id

    def test_record_step(self):
        """단계 기록 시 대화 기록이 누적되고 대기 횟수가 초기화됨."""
        run = make_run()
        run.suspensions_done = 2
        run.record_step(
            WorkflowStepResult(
                name="validate_order",
                agent_type=AgentType.ORDER,
                prompt="Validate order ORD-2024-001",
                response=AgentResponse(agent_type=AgentType.ORDER, content="Valid"),
            )
        )

        assert run.next_step == 1
        assert run.suspensions_done == 0
        assert [m.role for m in run.transcript] == [MessageRole.USER, MessageRole.ASSISTANT]
        assert run.transcript[1].content == "Valid"

    def test_suspension_lifecycle(self):
        """대기 시작과 종료 상태 전환 테스트."""
        run = make_run()
        resume_at = FIXED_NOW + timedelta(seconds=5)

        run.mark_suspended(resume_at)
        assert run.status == WorkflowStatus.SUSPENDED
        assert run.resume_at == resume_at

        run.finish_suspension()
        assert run.status == WorkflowStatus.RUNNING
        assert run.resume_at is None
        assert run.suspensions_done == 1

    def test_terminal_states(self):
        """완료/실패 상태 테스트."""
        completed = make_run()
        result = AgentResponse(agent_type=AgentType.ORDER, content="done")
        completed.mark_completed(result)
        assert completed.is_finished()
        assert completed.result == result

        failed = make_run()
        failed.mark_suspended(FIXED_NOW)
        failed.mark_failed("boom")
        assert failed.is_finished()
        assert failed.error == "boom"
        assert failed.resume_at is None

    def test_run_json_round_trip(self):
        """체크포인트 직렬화 후 복원 테스트."""
        run = make_run(workflow_type=WorkflowType.SUPPORT)
        run.transcript.append(Message.user("App crashes"))
        run.mark_suspended(FIXED_NOW)

        restored = WorkflowRun.model_validate_json(run.model_dump_json())

        assert restored == run
        assert restored.resume_at == FIXED_NOW

    def test_negative_step_rejected(self):
        """음수 단계 인덱스 거부."""
        with pytest.raises(ValidationError):
            make_run(next_step=-1)
