"""Factory pattern for creating LLM client instances."""

from app.adapters.llm.anthropic_client import AnthropicClient
from app.adapters.llm.base import AbstractLLMClient
from app.adapters.llm.openai_client import OpenAIClient
from app.core.config import settings
from app.core.errors import ConfigurationAppError

SUPPORTED_PROVIDERS = {
    "anthropic": AnthropicClient,
    "openai": OpenAIClient,
}

# Used when LLM_MODEL is unset
DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}


def create_llm_client() -> AbstractLLMClient:
    """Instantiate the LLM client selected by ``LLM_PROVIDER``.

    Reads configuration from app.core.config.settings (Pydantic Settings).

    Returns:
        AbstractLLMClient: Configured LLM client instance.

    Raises:
        ConfigurationAppError: If the provider is unknown or its API key is
            missing.
    """
    provider = settings.llm.provider.lower()

    client_cls = SUPPORTED_PROVIDERS.get(provider)
    if client_cls is None:
        raise ConfigurationAppError(
            code="llm_unknown_provider",
            message=(
                f"Unknown LLM provider: '{provider}'. "
                f"Supported providers: {', '.join(sorted(SUPPORTED_PROVIDERS))}"
            ),
        )

    if not settings.llm.api_key:
        raise ConfigurationAppError(
            code="llm_missing_api_key",
            message="Server configuration error",
            details={
                "provider": provider,
                "hint": "Set LLM_API_KEY (or CLAUDE_API_KEY) in the environment",
            },
        )

    return client_cls(
        api_key=settings.llm.api_key,
        model=settings.llm.model or DEFAULT_MODELS[provider],
        base_url=settings.llm.base_url,
        timeout_seconds=settings.llm.timeout_seconds,
        max_tokens=settings.llm.max_tokens,
        temperature=settings.llm.temperature,
    )
