"""OpenAI LLM client adapter."""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from app.adapters.llm.base import AbstractLLMClient
from app.core.errors import LLMAppError

logger = logging.getLogger(__name__)


class OpenAIClient(AbstractLLMClient):
    """Client for calling OpenAI chat completions and returning plain text.

    Uses the official OpenAI Python SDK with async support.
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 60.0,
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4o", "gpt-4o-mini").
            base_url: Optional custom base URL for OpenAI API.
            timeout_seconds: Timeout for requests in seconds.
            max_tokens: Default completion budget.
            temperature: Default sampling temperature.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Generate text using OpenAI chat completions.

        Args:
            prompt: User prompt to send to the model.
            **kwargs: Provider options (temperature, max_tokens, top_p, etc.).

        Returns:
            str: Message content of the first choice.

        Raises:
            LLMAppError: On provider errors or an empty completion.
        """
        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": kwargs.pop("temperature", self.temperature),
            "max_tokens": kwargs.pop("max_tokens", self.max_tokens),
        }

        allowed_params = {
            "top_p",
            "frequency_penalty",
            "presence_penalty",
            "seed",
        }
        for param in allowed_params:
            if param in kwargs:
                request_params[param] = kwargs[param]

        try:
            response = await self.client.chat.completions.create(**request_params)
        except openai.AuthenticationError as exc:
            logger.error(
                "llm.authentication_failed",
                extra={"provider": self.provider, "model": self.model},
            )
            raise LLMAppError(
                code="llm_authentication_failed",
                message="Invalid API key",
                details={"http_status": 401, "provider": self.provider},
            ) from exc
        except openai.APIError as exc:
            logger.error(
                "llm.request_failed",
                extra={
                    "provider": self.provider,
                    "model": self.model,
                    "error_type": type(exc).__name__,
                },
            )
            raise LLMAppError(
                code="llm_request_failed",
                message=f"Analysis failed: {exc}",
                details={"provider": self.provider, "model": self.model},
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMAppError(
                code="llm_empty_response",
                message="LLM returned an empty response",
                details={"provider": self.provider, "model": self.model},
            )

        return content
