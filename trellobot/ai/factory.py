"""
AI Provider Factory - Creates the appropriate AI provider based on configuration

Reads the provider name from the YAML config ('ai.provider') and
instantiates the matching class with the key from the environment.
"""

import importlib
import logging
from typing import Dict, Optional

from trellobot.config import Config, PROVIDER_KEYS

from .base import AIProvider

logger = logging.getLogger(__name__)

# Registry of available providers
PROVIDERS = {
    "groq": "trellobot.ai.groq_provider.GroqProvider",
    "claude": "trellobot.ai.claude.ClaudeProvider",
}

DEFAULT_PROVIDER = "groq"


def get_provider(config: Config) -> AIProvider:
    """
    Get the configured AI provider instance.

    Args:
        config: Bot configuration

    Returns:
        AIProvider: An instance of the configured AI provider

    Raises:
        ValueError: If the provider is unknown or its API key is not set
        ImportError: If the provider's package is not installed

    Example:
        >>> provider = get_provider(Config())
        >>> provider.provider_name
        'groq'
    """
    provider_name = config.ai_provider or DEFAULT_PROVIDER

    if provider_name not in PROVIDERS:
        available = ", ".join(PROVIDERS.keys())
        raise ValueError(
            f"Unknown AI provider: '{provider_name}'. " f"Available providers: {available}"
        )

    provider_path = PROVIDERS[provider_name]
    module_path, class_name = provider_path.rsplit(".", 1)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        logger.error(f"Failed to import {provider_name} provider: {e}")
        raise ImportError(
            f"Failed to load {provider_name} provider. "
            f"Ensure the required package is installed. Error: {e}"
        )

    provider_class = getattr(module, class_name)
    provider = provider_class(
        config.ai_api_key, model=config.ai_model, browse_model=config.ai_browse_model
    )
    logger.info(
        f"{provider.provider_name} AI client initialized with model "
        f"{provider.model_name!r} (browsing: {provider.browse_model_name!r})."
    )
    return provider


def get_optional_provider(config: Config) -> Optional[AIProvider]:
    """
    Get the configured provider, or None if its API key is not set.

    Also None when the provider is unknown or cannot be loaded. Used by the
    reply classifier, which falls back to OTHER_REPLY without a provider.
    """
    if config.ai_provider in PROVIDER_KEYS and config.ai_api_key is None:
        logger.error(
            f"{PROVIDER_KEYS[config.ai_provider]} not set. AI classification disabled."
        )
        return None

    try:
        return get_provider(config)
    except (ValueError, ImportError) as e:
        logger.error(f"AI provider unavailable, AI classification disabled: {e}")
        return None


def get_provider_info(config: Config) -> Dict[str, Dict[str, object]]:
    """Describe each supported provider and whether its key is configured."""
    return {
        name: {
            "env_var": PROVIDER_KEYS[name],
            "has_key": config.env(PROVIDER_KEYS[name]) is not None,
            "selected": name == config.ai_provider,
        }
        for name in PROVIDERS
    }
