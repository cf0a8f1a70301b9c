"""테스트 공통 설정 및 fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.agents import create_specialists
from src.agents.tools import InMemorySupportStore
from src.core import InMemoryCheckpointStore, IntentRouter, WorkflowEngine
from src.models import AgentResponse, AgentType
from src.utils.config import WorkflowConfig
from tests.helpers import FIXED_NOW, RecordingSleep, ScriptedProvider, mock_agent


@pytest.fixture
def provider() -> ScriptedProvider:
    """Scripted provider fixture."""
    return ScriptedProvider()


@pytest.fixture
def data_store() -> InMemorySupportStore:
    """Seeded in-memory data store fixture."""
    return InMemorySupportStore.with_seed_data()


@pytest.fixture
def specialists(provider: ScriptedProvider, data_store: InMemorySupportStore):
    """Real specialized agents backed by the scripted provider."""
    return create_specialists(provider, data_store)


@pytest.fixture
def mock_specialists() -> dict[AgentType, MagicMock]:
    """Specialist mocks returning '<Type> response'."""
    return {
        AgentType.SUPPORT: mock_agent(AgentType.SUPPORT, "Support response"),
        AgentType.ORDER: mock_agent(AgentType.ORDER, "Order response"),
        AgentType.BILLING: mock_agent(AgentType.BILLING, "Billing response"),
    }


@pytest.fixture
def mock_router() -> MagicMock:
    """Router mock returning a routed support response."""
    router = MagicMock(spec=IntentRouter)
    router.route = AsyncMock(
        return_value=AgentResponse(agent_type=AgentType.SUPPORT, content="Routed response")
    )
    return router


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Recording sleep fixture."""
    return RecordingSleep()


@pytest.fixture
def checkpoint_store() -> InMemoryCheckpointStore:
    """In-memory checkpoint store fixture."""
    return InMemoryCheckpointStore()


@pytest.fixture
def engine(
    mock_specialists: dict[AgentType, MagicMock],
    mock_router: MagicMock,
    checkpoint_store: InMemoryCheckpointStore,
    recording_sleep: RecordingSleep,
) -> WorkflowEngine:
    """WorkflowEngine fixture with mocked agents and instant suspensions."""
    return WorkflowEngine(
        mock_specialists,
        mock_router,
        checkpoint_store=checkpoint_store,
        config=WorkflowConfig(),
        sleep=recording_sleep,
        clock=lambda: FIXED_NOW,
    )
