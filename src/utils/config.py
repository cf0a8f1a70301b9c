"""Application configuration management.

This module provides configuration loading from environment variables and YAML files.
Environment variables take precedence over YAML settings.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogFormat(str, Enum):
    """Log output format types."""

    JSON = "json"
    CONSOLE = "console"


class AppSettings(BaseModel):
    """Application settings."""

    env: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    name: str = Field(default="Customer Support Agents", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")


class LLMConfig(BaseModel):
    """Generative-text provider configuration."""

    provider: str = Field(default="groq", description="LLM provider name")
    model: str | None = Field(
        default=None,
        description="Model used by every agent (None uses the provider default)",
    )
    groq_api_key: str = Field(default="", description="Groq API key")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", description="Groq API base URL"
    )
    anthropic_api_key: str = Field(default="", description="Anthropic API key")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"groq", "anthropic"}:
            raise ValueError("LLM provider must be 'groq' or 'anthropic'")
        return v_lower

    def api_key_for_provider(self) -> str:
        """Return the API key matching the configured provider."""
        if self.provider == "anthropic":
            return self.anthropic_api_key
        return self.groq_api_key


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: LogFormat = Field(default=LogFormat.JSON, description="Log format")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper


class AgentDefaults(BaseModel):
    """Default model-call settings for specialist agents."""

    max_tokens: int = Field(default=1024, description="Default max output tokens")
    temperature: float = Field(default=0.7, description="Default temperature")
    max_steps: int = Field(default=5, description="Tool round-trips per invocation")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @field_validator("max_tokens", "max_steps")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v


class ContextConfig(BaseModel):
    """Context compaction budget."""

    total_budget: int = Field(default=6000, description="Total token budget")
    response_reserve: int = Field(
        default=1000, description="Tokens reserved for the model response"
    )
    near_limit_ratio: float = Field(
        default=0.8, description="Fraction of the budget reported as near limit"
    )

    @model_validator(mode="after")
    def validate_budget(self) -> "ContextConfig":
        if self.total_budget <= 0:
            raise ValueError("total_budget must be positive")
        if not 0 <= self.response_reserve < self.total_budget:
            raise ValueError("response_reserve must be smaller than total_budget")
        if not 0.0 < self.near_limit_ratio <= 1.0:
            raise ValueError("near_limit_ratio must be in (0, 1]")
        return self


class RouterConfig(BaseModel):
    """Intent router configuration."""

    classification_max_tokens: int = Field(
        default=10, description="Output token cap for the classification call"
    )


class WorkflowConfig(BaseModel):
    """Workflow engine configuration."""

    checkpoint_dir: str | None = Field(
        default=None, description="Directory for run checkpoints (None = in-memory)"
    )
    order_delay_seconds: float = Field(
        default=5.0, description="Suspension between order validation and status"
    )
    refund_delay_seconds: float = Field(
        default=10.0, description="Suspension between refund initiation and status"
    )
    support_ack_delay_seconds: float = Field(
        default=2.0, description="Short suspension after the initial assessment"
    )
    support_followup_delay_seconds: float = Field(
        default=30.0, description="Scheduled follow-up suspension"
    )

    @field_validator(
        "order_delay_seconds",
        "refund_delay_seconds",
        "support_ack_delay_seconds",
        "support_followup_delay_seconds",
    )
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Delays must not be negative")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    app: AppSettings = Field(default_factory=AppSettings)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    agent_defaults: AgentDefaults = Field(default_factory=AgentDefaults)
    context: ContextConfig = Field(default_factory=ContextConfig)
    router: RouterConfig = Field(default_factory=RouterConfig)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            AppConfig instance populated from YAML

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If YAML content is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError("YAML content must be a dictionary")

        return cls.model_validate(data)

    @classmethod
    def load(
        cls,
        yaml_path: str | Path | None = None,
        env_file: str | Path | None = None,
    ) -> "AppConfig":
        """Load configuration with YAML as base and environment overrides.

        Args:
            yaml_path: Optional path to YAML configuration file
            env_file: Optional path to .env file

        Returns:
            AppConfig instance with merged configuration
        """
        config = cls.from_yaml(yaml_path) if yaml_path else cls()

        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls._apply_env_overrides(config)

    @classmethod
    def _apply_env_overrides(cls, config: "AppConfig") -> "AppConfig":
        """Apply environment variable overrides to existing config."""
        data = config.model_dump()

        for env_var, (section, key, convert) in _ENV_OVERRIDES.items():
            raw = os.getenv(env_var)
            if raw:
                data[section][key] = convert(raw)

        return cls.model_validate(data)


def _as_bool(value: str) -> bool:
    return value.lower() == "true"


# env var -> (section, key, converter)
_ENV_OVERRIDES: dict[str, tuple[str, str, Any]] = {
    "APP_ENV": ("app", "env", str),
    "APP_DEBUG": ("app", "debug", _as_bool),
    "LLM_PROVIDER": ("llm", "provider", str),
    "AI_MODEL": ("llm", "model", str),
    "GROQ_API_KEY": ("llm", "groq_api_key", str),
    "GROQ_BASE_URL": ("llm", "groq_base_url", str),
    "ANTHROPIC_API_KEY": ("llm", "anthropic_api_key", str),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_FORMAT": ("logging", "format", str),
    "DEFAULT_MAX_TOKENS": ("agent_defaults", "max_tokens", int),
    "DEFAULT_TEMPERATURE": ("agent_defaults", "temperature", float),
    "AGENT_MAX_STEPS": ("agent_defaults", "max_steps", int),
    "CONTEXT_TOTAL_BUDGET": ("context", "total_budget", int),
    "CONTEXT_RESPONSE_RESERVE": ("context", "response_reserve", int),
    "WORKFLOW_CHECKPOINT_DIR": ("workflow", "checkpoint_dir", str),
    "WORKFLOW_ORDER_DELAY": ("workflow", "order_delay_seconds", float),
    "WORKFLOW_REFUND_DELAY": ("workflow", "refund_delay_seconds", float),
    "WORKFLOW_SUPPORT_ACK_DELAY": ("workflow", "support_ack_delay_seconds", float),
    "WORKFLOW_SUPPORT_FOLLOWUP_DELAY": (
        "workflow",
        "support_followup_delay_seconds",
        float,
    ),
}


# Global configuration instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance.

    Raises:
        RuntimeError: If configuration has not been initialized
    """
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _config


def init_config(
    yaml_path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> AppConfig:
    """Initialize the global configuration.

    Args:
        yaml_path: Optional path to YAML configuration file
        env_file: Optional path to .env file

    Returns:
        The initialized AppConfig instance
    """
    global _config
    _config = AppConfig.load(yaml_path=yaml_path, env_file=env_file)
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
