"""LLM adapter layer - abstracts over multiple LLM providers."""

from app.adapters.llm.anthropic_client import AnthropicClient
from app.adapters.llm.base import AbstractLLMClient
from app.adapters.llm.factory import SUPPORTED_PROVIDERS, create_llm_client
from app.adapters.llm.openai_client import OpenAIClient

__all__ = [
    "AbstractLLMClient",
    "AnthropicClient",
    "OpenAIClient",
    "SUPPORTED_PROVIDERS",
    "create_llm_client",
]
