"""Abstract base class for text-generation adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from teamplan.schemas import GenerateRequest, RawModelResponse


class LLMAdapter(ABC):
    """Abstract base class for model-server adapters.

    The plan pipeline only depends on this interface, so tests and
    alternative servers can be swapped in without touching the pipeline.
    """

    #: Sampling defaults applied when the caller leaves them out.
    default_model: str
    default_temperature: float = 0.7
    default_max_tokens: int = 2048

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'ollama')."""
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        options: dict[str, Any] | None = None,
    ) -> RawModelResponse:
        """Send one single-shot completion request.

        Args:
            prompt: Full prompt text, must not be blank
            model: Model name (uses default if None)
            temperature: Sampling temperature (0-2)
            max_tokens: Maximum tokens in response
            options: Extra provider-native sampling options

        Returns:
            RawModelResponse with the generated text

        Raises:
            ValueError: If the prompt is blank
            GenerationError: If the server is unreachable, errors, or
                returns an unreadable body
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the model server is reachable.

        Returns:
            True if the server answers, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None

    def _build_request(
        self,
        prompt: str,
        model: str | None,
        temperature: float | None,
        max_tokens: int | None,
        options: dict[str, Any] | None,
    ) -> GenerateRequest:
        """Build the request payload, filling in sampling defaults.

        This is a helper method that subclasses can use or override.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")

        if temperature is None:
            temperature = self.default_temperature
        if max_tokens is None:
            max_tokens = self.default_max_tokens

        return GenerateRequest(
            model=model or self.default_model,
            prompt=prompt,
            stream=False,
            temperature=temperature,
            max_tokens=max_tokens,
            options=options or {},
        )
