"""
LLM Provider Factory.

This module provides factory functions for creating and managing LLM providers.
It handles provider selection based on the generator configuration.
"""

import logging
from typing import Optional

from ..config import GeneratorConfig
from ..utils.llm import BaseLLMClient
from .gemini import GeminiProvider

logger = logging.getLogger(__name__)


def create_provider(
    provider_name: Optional[str] = None,
    config: Optional[GeneratorConfig] = None,
    **kwargs
) -> BaseLLMClient:
    """
    Create an LLM provider instance.

    Args:
        provider_name: Name of provider to create ('gemini' or None to use the config)
        config: Generator configuration (read from the environment if None)
        **kwargs: Provider-specific overrides (api_key, model_name, temperature)

    Returns:
        BaseLLMClient instance

    Raises:
        ValueError: If provider_name is invalid or provider cannot be created
    """
    if config is None:
        config = GeneratorConfig.from_env()
    provider_name = (provider_name or config.provider).lower()

    logger.debug(f"Creating LLM provider: {provider_name}")
    if provider_name == "gemini":
        return GeminiProvider(
            api_key=kwargs.get("api_key", config.api_key),
            model_name=kwargs.get("model_name", config.model_name),
            temperature=kwargs.get("temperature", config.temperature),
        )
    raise ValueError(
        f"Unknown LLM provider: {provider_name}. "
        f"Supported providers: gemini"
    )
