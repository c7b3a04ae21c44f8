"""
LLM provider factory with per-name singletons.

WHAT: Factory to get a configured LLM provider by name
WHY: Centralize provider construction and avoid multiple HTTP clients
HOW: Read base URL and key from config, cache one instance per name, log selection
"""

from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from .openai_compatible import OpenAICompatibleProvider

_provider_instances: Dict[str, "OpenAICompatibleProvider"] = {}


def get_provider(name: str) -> "OpenAICompatibleProvider":
    """
    Get the provider singleton for an upstream.

    Args:
        name: "openai" or "groq"

    Returns:
        Provider instance

    Raises:
        ValueError: If provider name is unknown
    """
    if name not in _provider_instances:
        # Import here to avoid circular dependencies
        from ..core.config import settings
        from ..utils.logger import get_logger
        from .openai_compatible import OpenAICompatibleProvider

        logger = get_logger(__name__)

        if name == "openai":
            provider = OpenAICompatibleProvider(
                name="openai",
                base_url=settings.OPENAI_BASE_URL,
                api_key=settings.OPENAI_API_KEY,
            )
        elif name == "groq":
            provider = OpenAICompatibleProvider(
                name="groq",
                base_url=settings.GROQ_BASE_URL,
                api_key=settings.GROQ_API_KEY,
            )
        else:
            raise ValueError(f"Unknown LLM provider: {name}")

        _provider_instances[name] = provider
        logger.info(f"LLM provider initialized: {name}")

    return _provider_instances[name]


def configured_provider_names() -> list[str]:
    """Distinct provider names referenced by the feature settings."""
    from ..core.config import settings

    names = [settings.NEGOTIATION_PROVIDER, settings.CONTRACT_PROVIDER, settings.ANALYZER_PROVIDER]
    return list(dict.fromkeys(names))


async def close_providers() -> None:
    """Close every cached provider's HTTP client and drop the cache."""
    for provider in list(_provider_instances.values()):
        await provider.close()
    _provider_instances.clear()


def reset_provider() -> None:
    """Reset the provider singletons (useful for testing)."""
    _provider_instances.clear()
