"""
AI Providers Module - Modular AI provider implementations.

This module provides a plug-and-play architecture for AI providers
using the Strategy pattern.

To add a new AI provider:
1. Create a new provider class inheriting from AIProvider
2. Implement analyze_document and suggest_keywords
3. Register it in AIProviderFactory
"""
from .base import AIProvider, INDEXING_SCHEMA, KEYWORDS_SCHEMA
from .factory import AIProviderFactory
from .openrouter_provider import OpenRouterProvider
from .anthropic_provider import AnthropicProvider
from .mock_provider import MockProvider

__all__ = [
    "AIProvider",
    "AIProviderFactory",
    "INDEXING_SCHEMA",
    "KEYWORDS_SCHEMA",
    "OpenRouterProvider",
    "AnthropicProvider",
    "MockProvider",
]
