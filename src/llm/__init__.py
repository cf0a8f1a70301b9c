"""LLM Provider abstraction layer.

This module provides a unified interface for multiple LLM providers
including Groq and Anthropic.
"""

from src.llm.base import (
    BaseLLMProvider,
    CompletionResult,
    ModelTurn,
    ToolCall,
    ToolDefinition,
)
from src.llm.anthropic import AnthropicProvider
from src.llm.groq import GroqProvider
from src.llm.factory import LLMProviderFactory, get_provider

__all__ = [
    "BaseLLMProvider",
    "CompletionResult",
    "ModelTurn",
    "ToolCall",
    "ToolDefinition",
    "AnthropicProvider",
    "GroqProvider",
    "LLMProviderFactory",
    "get_provider",
]
