"""Workflow Engine - Durable multi-step support workflows.

Order, refund and support requests run as a fixed sequence of specialist
invocations separated by suspensions. Each step replays the run's own
transcript plus one new user message. The run is checkpointed before every
suspension, so a restarted process resumes from the next step instead of
starting over. Any other request type goes straight to the intent router.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from types import MappingProxyType

from src.agents.base import SpecializedAgent
from src.core.checkpoint import CheckpointStore, InMemoryCheckpointStore
from src.core.router import IntentRouter
from src.models import (
    SPECIALIST_TYPES,
    AgentContext,
    AgentResponse,
    AgentType,
    Message,
    ToolCallRecord,
    WorkflowRun,
    WorkflowStatus,
    WorkflowStepResult,
    WorkflowType,
)
from src.utils.config import WorkflowConfig
from src.utils.exceptions import (
    ConfigurationError,
    WorkflowNotFoundError,
    WorkflowStateError,
)
from src.utils.logging import (
    LoggerAdapter,
    correlation_id_var,
    get_logger,
    get_workflow_logger,
)

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
ClockFunc = Callable[[], datetime]


@dataclass(frozen=True)
class StepSpec:
    """One step of a workflow plan.

    ``prompt`` is formatted with the run's ``entity_id``, ``actor_id`` and
    ``message``. ``wait_before`` lists the suspensions (seconds) taken, in
    order, between the previous step and this one.
    """

    name: str
    agent_type: AgentType
    prompt: str
    wait_before: tuple[float, ...] = ()

    def render(self, run: WorkflowRun) -> str:
        return self.prompt.format(
            entity_id=run.entity_id,
            actor_id=run.actor_id,
            message=run.message,
        )


@dataclass(frozen=True)
class WorkflowPlan:
    """Static definition of a workflow type."""

    workflow_type: WorkflowType
    steps: tuple[StepSpec, ...]
    combine: Callable[[list[WorkflowStepResult]], str]
    reasoning: str
    agent_type: AgentType = field(init=False)

    def __post_init__(self) -> None:
        # The final step's agent answers for the whole run
        object.__setattr__(self, "agent_type", self.steps[-1].agent_type)


def _prefixed_last(prefix: str) -> Callable[[list[WorkflowStepResult]], str]:
    def combine(steps: list[WorkflowStepResult]) -> str:
        return prefix + steps[-1].response.content

    return combine


def _assessment_and_follow_up(steps: list[WorkflowStepResult]) -> str:
    return "\n\nFollow-up: ".join(step.response.content for step in steps)


def build_workflow_plans(
    config: WorkflowConfig,
) -> Mapping[WorkflowType, WorkflowPlan]:
    """Build the read-only table of workflow plans.

    Args:
        config: Suspension intervals.

    Returns:
        Mapping from workflow type to plan. ``WorkflowType.OTHER`` has no plan.
    """
    plans = {
        WorkflowType.ORDER: WorkflowPlan(
            workflow_type=WorkflowType.ORDER,
            steps=(
                StepSpec(
                    name="validate_order",
                    agent_type=AgentType.ORDER,
                    prompt=(
                        "Validate order {entity_id} for customer {actor_id}.\n\n"
                        "Customer message: {message}"
                    ),
                ),
                StepSpec(
                    name="check_delivery_status",
                    agent_type=AgentType.ORDER,
                    prompt="What is the current delivery status of order {entity_id}?",
                    wait_before=(config.order_delay_seconds,),
                ),
            ),
            combine=_prefixed_last("Order processing complete.\n\n"),
            reasoning="Order workflow combined order validation and delivery status checks",
        ),
        WorkflowType.REFUND: WorkflowPlan(
            workflow_type=WorkflowType.REFUND,
            steps=(
                StepSpec(
                    name="initiate_refund",
                    agent_type=AgentType.BILLING,
                    prompt=(
                        "Initiate a refund for {entity_id} requested by customer "
                        "{actor_id}.\n\nCustomer message: {message}"
                    ),
                ),
                StepSpec(
                    name="check_refund_status",
                    agent_type=AgentType.BILLING,
                    prompt="What is the current status of the refund for {entity_id}?",
                    wait_before=(config.refund_delay_seconds,),
                ),
            ),
            combine=_prefixed_last("Refund processing update.\n\n"),
            reasoning="Refund workflow combined refund initiation and status checks",
        ),
        WorkflowType.SUPPORT: WorkflowPlan(
            workflow_type=WorkflowType.SUPPORT,
            steps=(
                StepSpec(
                    name="initial_assessment",
                    agent_type=AgentType.SUPPORT,
                    prompt="{message}",
                ),
                StepSpec(
                    name="follow_up",
                    agent_type=AgentType.SUPPORT,
                    prompt=(
                        "Following up on the earlier issue: has it been resolved, "
                        "or is further assistance needed?"
                    ),
                    wait_before=(
                        config.support_ack_delay_seconds,
                        config.support_followup_delay_seconds,
                    ),
                ),
            ),
            combine=_assessment_and_follow_up,
            reasoning="Support workflow combined initial assessment and scheduled follow-up",
        ),
    }
    return MappingProxyType(plans)


class WorkflowEngine:
    """Runs support workflows and falls back to the router for other requests.

    Steps of one run are strictly sequential. Suspensions are plain awaits
    on ``sleep`` and hold no locks, so independent runs proceed concurrently.
    """

    def __init__(
        self,
        specialists: Mapping[AgentType, SpecializedAgent],
        router: IntentRouter,
        checkpoint_store: CheckpointStore | None = None,
        config: WorkflowConfig | None = None,
        sleep: SleepFunc = asyncio.sleep,
        clock: ClockFunc | None = None,
    ) -> None:
        """Initialize the workflow engine.

        Args:
            specialists: One agent per specialist type.
            router: Router used for requests without a workflow.
            checkpoint_store: Where run state is persisted. Defaults to memory.
            config: Suspension intervals.
            sleep: Coroutine used to suspend between steps.
            clock: Returns the current time (UTC).

        Raises:
            ConfigurationError: If a specialist type has no agent.
        """
        missing = [t.value for t in SPECIALIST_TYPES if t not in specialists]
        if missing:
            raise ConfigurationError(
                f"Workflow engine is missing specialists: {', '.join(missing)}",
                details={"missing": missing},
            )

        self._specialists: Mapping[AgentType, SpecializedAgent] = MappingProxyType(
            {t: specialists[t] for t in SPECIALIST_TYPES}
        )
        self._router = router
        self._store = checkpoint_store or InMemoryCheckpointStore()
        self._plans = build_workflow_plans(config or WorkflowConfig())
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(UTC))
        self._active_runs: set[str] = set()

    @property
    def checkpoint_store(self) -> CheckpointStore:
        """Get the checkpoint store."""
        return self._store

    @property
    def plans(self) -> Mapping[WorkflowType, WorkflowPlan]:
        """Get the read-only workflow plan table."""
        return self._plans

    async def run(
        self,
        request_type: WorkflowType | str,
        entity_id: str,
        actor_id: str,
        message: str,
    ) -> AgentResponse:
        """Run a workflow to completion.

        Args:
            request_type: order, refund, support, or anything else for routing.
            entity_id: Order, invoice or ticket the request is about.
            actor_id: User making the request.
            message: The user's message or issue text.

        Returns:
            The aggregated response of the run.

        Raises:
            Exception: Whatever a failing step raised, unchanged. The run is
                marked failed first.
        """
        workflow_type = WorkflowType.parse(request_type)
        plan = self._plans.get(workflow_type)

        if plan is None:
            return await self._route(entity_id, actor_id, message)

        run = WorkflowRun(
            workflow_type=workflow_type,
            entity_id=entity_id,
            actor_id=actor_id,
            message=message,
        )
        await self._store.save(run)
        logger.info(
            "Workflow started",
            run_id=run.id,
            workflow_type=workflow_type.value,
            actor_id=actor_id,
        )
        return await self._drive(run, plan)

    async def resume(self, run_id: str) -> AgentResponse:
        """Continue a stored run from its last checkpoint.

        A run interrupted during a suspension waits out only the remaining
        time. Completed runs return their stored response.

        Raises:
            WorkflowNotFoundError: If the run does not exist.
            WorkflowStateError: If the run failed or is already executing.
            Exception: Whatever a failing resumed step raised, unchanged.
        """
        run = await self.get_run(run_id)

        if run.status == WorkflowStatus.COMPLETED and run.result is not None:
            return run.result
        if run.status == WorkflowStatus.FAILED:
            raise WorkflowStateError(run_id, run.status.value, "resume")
        if run_id in self._active_runs:
            raise WorkflowStateError(run_id, run.status.value, "resume")

        logger.info(
            "Workflow resumed",
            run_id=run.id,
            workflow_type=run.workflow_type.value,
            next_step=run.next_step,
        )
        return await self._drive(run, self._plans[run.workflow_type])

    async def resume_pending(self) -> dict[str, AgentResponse | Exception]:
        """Resume every stored run that has not finished.

        Runs are resumed concurrently. A failing run does not stop the others.

        Returns:
            Mapping from run ID to its response or the error it raised.
        """
        runs = [
            run
            for run in await self._store.list_unfinished()
            if run.id not in self._active_runs
        ]
        if not runs:
            return {}

        logger.info("Resuming pending workflows", count=len(runs))
        outcomes = await asyncio.gather(
            *(self.resume(run.id) for run in runs), return_exceptions=True
        )

        results: dict[str, AgentResponse | Exception] = {}
        for run, outcome in zip(runs, outcomes):
            if isinstance(outcome, Exception):
                logger.error("Pending workflow failed", run_id=run.id, error=str(outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            results[run.id] = outcome
        return results

    async def get_run(self, run_id: str) -> WorkflowRun:
        """Get the stored state of a run.

        Raises:
            WorkflowNotFoundError: If the run does not exist.
        """
        run = await self._store.load(run_id)
        if run is None:
            raise WorkflowNotFoundError(run_id)
        return run

    async def _route(self, entity_id: str, actor_id: str, message: str) -> AgentResponse:
        context = AgentContext(
            conversation_id=f"wf-{uuid.uuid4()}",
            messages=[Message.user(message)],
            user_id=actor_id,
        )
        logger.info(
            "No workflow for request, routing",
            conversation_id=context.conversation_id,
            entity_id=entity_id,
        )
        return await self._router.route(context)

    async def _drive(self, run: WorkflowRun, plan: WorkflowPlan) -> AgentResponse:
        log = get_workflow_logger(run.id, run.workflow_type.value)
        self._active_runs.add(run.id)
        token = correlation_id_var.set(run.id)
        step = plan.steps[min(run.next_step, len(plan.steps) - 1)]
        try:
            for index in range(run.next_step, len(plan.steps)):
                step = plan.steps[index]
                await self._wait_before(run, step, log)
                await self._execute_step(run, step, log)

            result = self._aggregate(run, plan)
            run.mark_completed(result)
            await self._store.save(run)
            log.info("Workflow completed", agent_type=result.agent_type.value)
            return result
        except Exception as e:
            log.error("Workflow step failed", step=step.name, error=str(e))
            run.mark_failed(str(e))
            await self._save_failure(run, log)
            raise
        finally:
            self._active_runs.discard(run.id)
            correlation_id_var.reset(token)

    async def _wait_before(
        self, run: WorkflowRun, step: StepSpec, log: LoggerAdapter
    ) -> None:
        while run.suspensions_done < len(step.wait_before):
            now = self._clock()
            if run.status == WorkflowStatus.SUSPENDED and run.resume_at is not None:
                # Interrupted mid-suspension; wait out what is left
                remaining = max(0.0, (run.resume_at - now).total_seconds())
            else:
                remaining = step.wait_before[run.suspensions_done]
                run.mark_suspended(now + timedelta(seconds=remaining))
                await self._store.save(run)

            log.debug(
                "Workflow suspended",
                before_step=step.name,
                seconds=remaining,
                resume_at=run.resume_at.isoformat() if run.resume_at else None,
            )
            await self._sleep(remaining)
            run.finish_suspension()

    async def _execute_step(
        self, run: WorkflowRun, step: StepSpec, log: LoggerAdapter
    ) -> None:
        run.mark_running()
        prompt = step.render(run)
        context = AgentContext(
            conversation_id=run.conversation_id,
            messages=[*run.transcript, Message.user(prompt)],
            user_id=run.actor_id,
        )

        log.info("Workflow step started", step=step.name, agent_type=step.agent_type.value)
        response = await self._specialists[step.agent_type].invoke(context)

        run.record_step(
            WorkflowStepResult(
                name=step.name,
                agent_type=step.agent_type,
                prompt=prompt,
                response=response,
            )
        )
        await self._store.save(run)
        log.info("Workflow step completed", step=step.name)

    def _aggregate(self, run: WorkflowRun, plan: WorkflowPlan) -> AgentResponse:
        tool_calls: list[ToolCallRecord] = []
        for step_result in run.steps:
            tool_calls.extend(step_result.response.tool_calls)

        return AgentResponse(
            agent_type=plan.agent_type,
            content=plan.combine(run.steps),
            reasoning=plan.reasoning,
            tool_calls=tool_calls,
        )

    async def _save_failure(self, run: WorkflowRun, log: LoggerAdapter) -> None:
        try:
            await self._store.save(run)
        except Exception:
            log.exception("Failed to checkpoint failed workflow")
