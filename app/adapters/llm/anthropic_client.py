"""Anthropic LLM client adapter."""

import logging
from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from app.adapters.llm.base import AbstractLLMClient
from app.core.errors import LLMAppError

logger = logging.getLogger(__name__)


class AnthropicClient(AbstractLLMClient):
    """Client for the Anthropic Messages API returning plain text.

    Uses the official Anthropic Python SDK with async support.
    """

    provider = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 60.0,
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ) -> None:
        """Initialize Anthropic async client.

        Args:
            api_key: Anthropic API key for authentication.
            model: Model name (e.g., "claude-sonnet-4-20250514").
            base_url: Optional custom base URL for the API.
            timeout_seconds: Timeout for requests in seconds.
            max_tokens: Default completion budget.
            temperature: Default sampling temperature.
        """
        self.client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Send one user message and join the text blocks of the reply.

        Args:
            prompt: User prompt to send to the model.
            **kwargs: ``max_tokens``/``temperature`` overrides, plus ``system``
                and ``top_p`` passed through when provided.

        Returns:
            str: Text blocks joined with newlines.

        Raises:
            LLMAppError: On provider errors or when the reply has no text.
        """
        request_params: dict[str, Any] = {
            "model": self.model,
            "max_tokens": kwargs.pop("max_tokens", self.max_tokens),
            "temperature": kwargs.pop("temperature", self.temperature),
            "messages": [{"role": "user", "content": prompt}],
        }
        for param in ("system", "top_p"):
            if param in kwargs:
                request_params[param] = kwargs[param]

        try:
            message = await self.client.messages.create(**request_params)
        except anthropic.AuthenticationError as exc:
            logger.error(
                "llm.authentication_failed",
                extra={"provider": self.provider, "model": self.model},
            )
            raise LLMAppError(
                code="llm_authentication_failed",
                message="Invalid API key",
                details={"http_status": 401, "provider": self.provider},
            ) from exc
        except anthropic.APIError as exc:
            logger.error(
                "llm.request_failed",
                extra={
                    "provider": self.provider,
                    "model": self.model,
                    "error_type": type(exc).__name__,
                    "upstream_status": getattr(exc, "status_code", None),
                },
            )
            raise LLMAppError(
                code="llm_request_failed",
                message=f"Analysis failed: {exc}",
                details={"provider": self.provider, "model": self.model},
            ) from exc

        text = "\n".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise LLMAppError(
                code="llm_empty_response",
                message="LLM returned an empty response",
                details={"provider": self.provider, "model": self.model},
            )

        logger.info(
            "llm.completed",
            extra={
                "provider": self.provider,
                "model": self.model,
                "stop_reason": getattr(message, "stop_reason", None),
                "output_chars": len(text),
            },
        )
        return text
