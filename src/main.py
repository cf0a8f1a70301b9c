"""Customer Support Agents - Application wiring.

This module builds the agent stack from configuration: LLM provider, data
store, specialized agents, intent router and workflow engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.agents import ContextCompactor, SpecializedAgent, create_specialists
from src.agents.tools import InMemorySupportStore, SupportDataStore
from src.core import (
    CheckpointStore,
    FileCheckpointStore,
    InMemoryCheckpointStore,
    IntentRouter,
    WorkflowEngine,
)
from src.llm import BaseLLMProvider, LLMProviderFactory
from src.models import AgentConfig, AgentType
from src.utils.config import AppConfig, LogFormat, init_config
from src.utils.exceptions import MissingConfigurationError
from src.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class SupportApplication:
    """The wired agent stack."""

    config: AppConfig
    provider: BaseLLMProvider
    data_store: SupportDataStore
    specialists: dict[AgentType, SpecializedAgent]
    router: IntentRouter
    engine: WorkflowEngine


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """Get the path to the app.yaml configuration file."""
    return get_project_root() / "configs" / "app.yaml"


def load_config(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> AppConfig:
    """Load configuration and set up logging.

    Args:
        config_path: Optional YAML file. Defaults to ``configs/app.yaml`` if present.
        env_file: Optional .env file.
    """
    if config_path is None:
        default_config_path = get_config_path()
        if default_config_path.exists():
            config_path = default_config_path

    config = init_config(yaml_path=config_path, env_file=env_file)
    setup_logging(
        level=config.logging.level,
        json_format=config.logging.format == LogFormat.JSON,
    )
    return config


def create_provider(config: AppConfig) -> BaseLLMProvider:
    """Create the configured LLM provider.

    Raises:
        MissingConfigurationError: If the provider's API key is not set.
    """
    api_key = config.llm.api_key_for_provider()
    if not api_key:
        raise MissingConfigurationError(
            f"{config.llm.provider.upper()}_API_KEY",
            f"API key for provider '{config.llm.provider}' is not configured",
        )

    kwargs = {}
    if config.llm.provider == "groq":
        kwargs["base_url"] = config.llm.groq_base_url
    return LLMProviderFactory.create(
        provider=config.llm.provider, api_key=api_key, **kwargs
    )


def create_checkpoint_store(config: AppConfig) -> CheckpointStore:
    """Create the checkpoint store. A checkpoint directory makes runs durable."""
    if config.workflow.checkpoint_dir:
        return FileCheckpointStore(config.workflow.checkpoint_dir)
    return InMemoryCheckpointStore()


def create_application(
    config: AppConfig,
    provider: BaseLLMProvider | None = None,
    data_store: SupportDataStore | None = None,
    checkpoint_store: CheckpointStore | None = None,
) -> SupportApplication:
    """Wire the agents, router and workflow engine.

    Args:
        config: Application configuration.
        provider: LLM provider. Created from config if None.
        data_store: Data store for the tools. Seeded in-memory store if None.
        checkpoint_store: Workflow checkpoints. Created from config if None.

    Returns:
        The wired application.
    """
    provider = provider or create_provider(config)
    data_store = data_store or InMemorySupportStore.with_seed_data()

    agent_config = AgentConfig(
        model=config.llm.model,
        max_tokens=config.agent_defaults.max_tokens,
        temperature=config.agent_defaults.temperature,
        max_steps=config.agent_defaults.max_steps,
    )
    compactor = ContextCompactor(
        total_budget=config.context.total_budget,
        response_reserve=config.context.response_reserve,
        near_limit_ratio=config.context.near_limit_ratio,
    )
    specialists = create_specialists(
        provider, data_store, config=agent_config, compactor=compactor
    )
    router = IntentRouter(
        provider,
        specialists,
        classification_max_tokens=config.router.classification_max_tokens,
        model=config.llm.model,
    )
    engine = WorkflowEngine(
        specialists,
        router,
        checkpoint_store=checkpoint_store or create_checkpoint_store(config),
        config=config.workflow,
    )

    logger.info(
        "Customer support agents initialized",
        app_name=config.app.name,
        version=config.app.version,
        environment=config.app.env.value,
        provider=provider.provider_name,
    )
    return SupportApplication(
        config=config,
        provider=provider,
        data_store=data_store,
        specialists=specialists,
        router=router,
        engine=engine,
    )


def create_engine(
    config: AppConfig | None = None,
    provider: BaseLLMProvider | None = None,
) -> WorkflowEngine:
    """Shortcut for ``create_application(...).engine``."""
    return create_application(config or load_config(), provider=provider).engine
