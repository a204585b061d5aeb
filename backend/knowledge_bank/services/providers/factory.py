"""
AI Provider Factory.

Manages provider selection and initialization based on configuration.
Uses the Factory pattern to provide plug-and-play AI provider support.
"""
from typing import Optional

from ...core import config
from ...core.logging_config import get_logger
from .base import AIProvider
from .openrouter_provider import OpenRouterProvider
from .anthropic_provider import AnthropicProvider
from .mock_provider import MockProvider

logger = get_logger(__name__)


class AIProviderFactory:
    """
    Factory for creating AI provider instances.

    Automatically selects the appropriate provider based on:
    1. AI_PROVIDER configuration
    2. Available API keys
    3. Fallback to MockProvider if no keys available
    """

    @staticmethod
    def get_provider(provider_type: Optional[str] = None) -> AIProvider:
        """
        Get the appropriate AI provider based on configuration.

        Returns:
            AIProvider instance (OpenRouterProvider, AnthropicProvider, or MockProvider)
        """
        provider_type = (provider_type or config.AI_PROVIDER).lower()

        if provider_type == "mock":
            logger.info("Using MockProvider (configured)")
            return MockProvider()

        if provider_type == "anthropic":
            preferred = [("Anthropic", config.ANTHROPIC_API_KEY, AnthropicProvider),
                         ("OpenRouter", config.OPENROUTER_API_KEY, OpenRouterProvider)]
        else:
            if provider_type != "openrouter":
                logger.warning(f"⚠️  Unknown provider '{provider_type}', checking available API keys...")
            preferred = [("OpenRouter", config.OPENROUTER_API_KEY, OpenRouterProvider),
                         ("Anthropic", config.ANTHROPIC_API_KEY, AnthropicProvider)]

        for index, (name, api_key, provider_cls) in enumerate(preferred):
            if api_key:
                if index == 0:
                    logger.info(f"Using {name} provider")
                else:
                    logger.info(f"✓ Using {name} provider as fallback")
                return provider_cls()
            logger.warning(f"⚠️  {name} API key not configured")

        logger.warning("⚠️  No API keys configured, using MockProvider")
        return MockProvider()
