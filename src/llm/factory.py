"""LLM Provider Factory.

This module provides factory functions for creating LLM provider instances.
"""

from __future__ import annotations

import os
from typing import Any

from src.llm.anthropic import AnthropicProvider
from src.llm.base import BaseLLMProvider
from src.llm.groq import GroqProvider


class LLMProviderFactory:
    """Factory for creating LLM provider instances.

    Supports creating providers by name with automatic configuration
    from environment variables.
    """

    _providers: dict[str, type[BaseLLMProvider]] = {
        "groq": GroqProvider,
        "anthropic": AnthropicProvider,
    }

    # Model to provider mapping for automatic provider detection
    _model_provider_map: dict[str, str] = {
        "llama-3.3-70b-versatile": "groq",
        "llama-3.1-8b-instant": "groq",
        "openai/gpt-oss-120b": "groq",
        "claude-sonnet-4-20250514": "anthropic",
        "claude-haiku-4-5-20251001": "anthropic",
        "claude-3-5-haiku-20241022": "anthropic",
    }

    _env_keys: dict[str, str] = {
        "groq": "GROQ_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
    }

    @classmethod
    def get_provider_for_model(cls, model: str) -> str | None:
        """Get the provider name for a given model.

        Args:
            model: Model name.

        Returns:
            Provider name or None if not found.
        """
        if model in cls._model_provider_map:
            return cls._model_provider_map[model]

        # Prefix matching for model variants
        for model_name, provider in cls._model_provider_map.items():
            if model.startswith(model_name.split("-")[0]):
                return provider

        return None

    @classmethod
    def create(
        cls,
        provider: str | None = None,
        model: str | None = None,
        api_key: str | None = None,
        **kwargs: Any,
    ) -> BaseLLMProvider:
        """Create an LLM provider instance.

        Args:
            provider: Provider name. If None, inferred from model.
            model: Model name (used to infer provider if not specified).
            api_key: API key. If None, reads from environment.
            **kwargs: Additional provider-specific configuration.

        Returns:
            BaseLLMProvider instance.

        Raises:
            ValueError: If the provider is unknown.
        """
        if provider is None and model:
            provider = cls.get_provider_for_model(model)

        if provider is None:
            provider = "groq"

        if provider not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(f"Unknown provider: {provider}. Available: {available}")

        if not api_key:
            env_var = cls._env_keys.get(provider, f"{provider.upper()}_API_KEY")
            api_key = os.getenv(env_var)

        provider_class = cls._providers[provider]
        return provider_class(api_key=api_key, **kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())


def get_provider(
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    **kwargs: Any,
) -> BaseLLMProvider:
    """Convenience function to create an LLM provider.

    This is a shortcut for LLMProviderFactory.create().
    """
    return LLMProviderFactory.create(
        provider=provider,
        model=model,
        api_key=api_key,
        **kwargs,
    )
