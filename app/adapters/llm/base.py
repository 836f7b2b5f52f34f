from abc import ABC, abstractmethod
from typing import Any


class AbstractLLMClient(ABC):
	"""Interface for LLM clients that return free-form text."""

	provider: str
	model: str

	@abstractmethod
	async def generate_text(
		self,
		prompt: str,
		**kwargs: Any,
	) -> str:
		"""Generate a text completion for a single user prompt.

		Args:
			prompt: User prompt to send to the model.
			**kwargs: Provider-specific options (e.g., temperature, max_tokens).

		Returns:
			str: The model output, unmodified apart from joining content blocks.

		Raises:
			LLMAppError: If the provider call fails or returns no text.
		"""
		...
