"""Unit tests for utility modules.

Tests for config, logging and exceptions.
"""

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from src.utils.config import (
    AgentDefaults,
    AppConfig,
    AppSettings,
    ContextConfig,
    Environment,
    LLMConfig,
    LogFormat,
    LoggingConfig,
    WorkflowConfig,
    get_config,
    init_config,
    reset_config,
)
from src.utils.exceptions import (
    AgentExecutionFailure,
    ClassificationFailure,
    ConfigurationError,
    LLMAPIError,
    MissingConfigurationError,
    SupportAgentsError,
    WorkflowError,
    WorkflowNotFoundError,
    WorkflowStateError,
)
from src.utils.logging import (
    LoggerAdapter,
    clear_correlation_id,
    get_agent_logger,
    get_correlation_id,
    get_logger,
    get_workflow_logger,
    set_correlation_id,
    setup_logging,
)

_CONFIG_ENV_VARS = [
    "APP_ENV",
    "APP_DEBUG",
    "LLM_PROVIDER",
    "AI_MODEL",
    "GROQ_API_KEY",
    "GROQ_BASE_URL",
    "ANTHROPIC_API_KEY",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "AGENT_MAX_STEPS",
    "CONTEXT_TOTAL_BUDGET",
    "CONTEXT_RESPONSE_RESERVE",
    "WORKFLOW_CHECKPOINT_DIR",
    "WORKFLOW_ORDER_DELAY",
    "WORKFLOW_REFUND_DELAY",
    "WORKFLOW_SUPPORT_ACK_DELAY",
    "WORKFLOW_SUPPORT_FOLLOWUP_DELAY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove config env vars and return a path to an empty .env file."""
    for name in _CONFIG_ENV_VARS:
        # setenv first so values loaded from .env files are undone on teardown
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("", encoding="utf-8")
    yield env_file
    reset_config()


# ============================================================================
# Config Tests
# ============================================================================


class TestConfigSections:
    """Tests for configuration section models."""

    def test_defaults(self):
        """Test default values are set correctly."""
        config = AppConfig()
        assert config.app.env == Environment.DEVELOPMENT
        assert config.llm.provider == "groq"
        assert config.llm.model is None
        assert config.logging.format == LogFormat.JSON
        assert config.agent_defaults.max_steps == 5
        assert config.context.total_budget == 6000
        assert config.context.response_reserve == 1000
        assert config.router.classification_max_tokens == 10
        assert config.workflow.checkpoint_dir is None

    def test_app_settings(self):
        """Test custom values are accepted."""
        settings = AppSettings(env=Environment.PRODUCTION, debug=True)
        assert settings.env == Environment.PRODUCTION
        assert settings.debug is True

    def test_provider_normalized(self):
        """Test provider names are lower-cased."""
        assert LLMConfig(provider="Anthropic").provider == "anthropic"

    def test_invalid_provider(self):
        """Test unknown providers are rejected."""
        with pytest.raises(ValidationError):
            LLMConfig(provider="openai")

    def test_api_key_for_provider(self):
        """Test the key matching the provider is returned."""
        config = LLMConfig(groq_api_key="g", anthropic_api_key="a")
        assert config.api_key_for_provider() == "g"
        assert config.model_copy(update={"provider": "anthropic"}).api_key_for_provider() == "a"

    def test_log_level_normalized(self):
        """Test log levels are upper-cased and validated."""
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    @pytest.mark.parametrize(
        "kwargs",
        [{"temperature": 3.0}, {"max_tokens": 0}, {"max_steps": -1}],
    )
    def test_invalid_agent_defaults(self, kwargs: dict):
        """Test agent defaults validation."""
        with pytest.raises(ValidationError):
            AgentDefaults(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"total_budget": 0},
            {"total_budget": 1000, "response_reserve": 1000},
            {"near_limit_ratio": 0.0},
        ],
    )
    def test_invalid_context_budget(self, kwargs: dict):
        """Test context budget validation."""
        with pytest.raises(ValidationError):
            ContextConfig(**kwargs)

    def test_negative_delay(self):
        """Test workflow delays must not be negative."""
        with pytest.raises(ValidationError):
            WorkflowConfig(order_delay_seconds=-1)


class TestConfigLoading:
    """Tests for YAML and environment loading."""

    def test_from_yaml(self, tmp_path):
        """Test loading configuration from YAML."""
        path = tmp_path / "app.yaml"
        path.write_text(
            "llm:\n  provider: anthropic\nworkflow:\n  order_delay_seconds: 1.5\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(path)

        assert config.llm.provider == "anthropic"
        assert config.workflow.order_delay_seconds == 1.5
        assert config.workflow.refund_delay_seconds == 10.0

    def test_from_yaml_missing_file(self, tmp_path):
        """Test missing YAML file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_not_a_mapping(self, tmp_path):
        """Test YAML content must be a mapping."""
        path = tmp_path / "app.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            AppConfig.from_yaml(path)

    def test_env_overrides_yaml(self, tmp_path, clean_env, monkeypatch):
        """Test environment variables take precedence over YAML."""
        path = tmp_path / "app.yaml"
        path.write_text("logging:\n  level: INFO\n", encoding="utf-8")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
        monkeypatch.setenv("AGENT_MAX_STEPS", "3")
        monkeypatch.setenv("WORKFLOW_SUPPORT_FOLLOWUP_DELAY", "0.5")
        monkeypatch.setenv("APP_DEBUG", "true")

        config = AppConfig.load(yaml_path=path, env_file=clean_env)

        assert config.logging.level == "DEBUG"
        assert config.llm.groq_api_key == "gsk-test"
        assert config.agent_defaults.max_steps == 3
        assert config.workflow.support_followup_delay_seconds == 0.5
        assert config.app.debug is True

    def test_env_file_values(self, clean_env):
        """Test values are read from the .env file."""
        clean_env.write_text("AI_MODEL=llama-3.1-8b-instant\n", encoding="utf-8")

        config = AppConfig.load(env_file=clean_env)

        assert config.llm.model == "llama-3.1-8b-instant"

    def test_invalid_env_value(self, clean_env, monkeypatch):
        """Test invalid override values fail validation."""
        monkeypatch.setenv("LLM_PROVIDER", "mistral")
        with pytest.raises(ValidationError):
            AppConfig.load(env_file=clean_env)

    def test_global_config(self, clean_env):
        """Test init/get/reset of the global configuration."""
        config = init_config(env_file=clean_env)
        assert get_config() is config

        reset_config()
        with pytest.raises(RuntimeError):
            get_config()


# ============================================================================
# Exception Tests
# ============================================================================


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_base_to_dict(self):
        """Test serialization of error details and cause."""
        error = SupportAgentsError(
            "Something broke", details={"key": "value"}, cause=ValueError("bad")
        )
        assert error.to_dict() == {
            "error": "SupportAgentsError",
            "message": "Something broke",
            "details": {"key": "value"},
            "cause": "bad",
        }

    def test_configuration_errors(self):
        """Test configuration error messages."""
        missing = MissingConfigurationError("GROQ_API_KEY")
        assert isinstance(missing, ConfigurationError)
        assert str(missing) == "Missing required configuration: GROQ_API_KEY"

    def test_llm_api_error(self):
        """Test provider and model are recorded."""
        error = LLMAPIError("timeout", provider="anthropic", model="claude-haiku-4-5-20251001")
        assert error.details == {
            "provider": "anthropic",
            "model": "claude-haiku-4-5-20251001",
        }

    def test_agent_errors(self):
        """Test agent-level failures carry their cause."""
        cause = LLMAPIError("down")
        assert ClassificationFailure("failed", cause=cause).cause is cause
        failure = AgentExecutionFailure("order", "failed", cause=cause)
        assert failure.agent_type == "order"
        assert failure.details == {"agent_type": "order"}

    def test_workflow_errors(self):
        """Test workflow error hierarchy and messages."""
        missing = WorkflowNotFoundError("wf-2")
        assert isinstance(missing, WorkflowError)
        assert missing.run_id == "wf-2"
        assert str(WorkflowStateError("wf-3", "failed", "resume")) == (
            "Cannot resume workflow wf-3 in state failed"
        )


# ============================================================================
# Logging Tests
# ============================================================================


class TestCorrelationId:
    """Tests for correlation ID helpers."""

    def test_set_and_clear(self):
        """Test setting an explicit correlation ID."""
        assert set_correlation_id("wf-123") == "wf-123"
        assert get_correlation_id() == "wf-123"
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_generated(self):
        """Test a UUID is generated when none is given."""
        correlation_id = set_correlation_id()
        assert len(correlation_id) == 36
        clear_correlation_id()


class TestLogging:
    """Tests for logger helpers."""

    @pytest.mark.parametrize("json_format", [True, False])
    def test_setup_logging(self, json_format: bool):
        """Test both output formats configure without error."""
        setup_logging(level="DEBUG", json_format=json_format)
        assert get_logger("test") is not None

    def test_adapter_bind(self):
        """Test bound context is merged and the original is unchanged."""
        adapter = LoggerAdapter("test", component="router")
        bound = adapter.bind(conversation_id="conv-1")

        assert adapter.context == {"component": "router"}
        assert bound.context == {"component": "router", "conversation_id": "conv-1"}

    def test_workflow_logger_context(self):
        """Test workflow loggers attach run context to every event."""
        with capture_logs() as logs:
            log = get_workflow_logger("wf-1", "order")
            log.info("Workflow step started", step="validate_order")

        assert logs == [
            {
                "event": "Workflow step started",
                "log_level": "info",
                "run_id": "wf-1",
                "workflow_type": "order",
                "step": "validate_order",
            }
        ]

    def test_agent_logger_context(self):
        """Test agent loggers attach the agent type."""
        with capture_logs() as logs:
            get_agent_logger("billing").warning("Agent invocation failed", error="x")

        assert logs[0]["agent_type"] == "billing"
        assert logs[0]["log_level"] == "warning"
