"""Ollama adapter.

Ollama serves local models over HTTP at http://localhost:11434.
Only the single-shot `/api/generate` endpoint is used, with streaming
disabled so the whole completion arrives in one JSON envelope.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from teamplan.config import Settings, get_settings
from teamplan.errors import (
    GenerationConnectionError,
    GenerationDecodeError,
    GenerationServerError,
)
from teamplan.llm.base import LLMAdapter
from teamplan.schemas import GenerateRequest, RawModelResponse


logger = logging.getLogger(__name__)


class OllamaConfig(BaseModel):
    """Immutable connection settings for one Ollama server."""
    base_url: str = "http://localhost:11434"
    model: str = "llama2"
    timeout_seconds: float = Field(default=30.0, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "OllamaConfig":
        settings = settings or get_settings()
        return cls(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            timeout_seconds=settings.ollama_timeout_seconds,
            temperature=settings.ollama_temperature,
            max_tokens=settings.ollama_max_tokens,
        )


class OllamaAdapter(LLMAdapter):
    """Ollama API adapter using the native generate endpoint."""

    def __init__(
        self,
        config: OllamaConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or OllamaConfig.from_settings()
        self.default_model = self.config.model
        self.default_temperature = self.config.temperature
        self.default_max_tokens = self.config.max_tokens

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={"Content-Type": "application/json"},
            timeout=self.config.timeout_seconds,
            transport=transport,
        )

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def timeout(self) -> float:
        return self.config.timeout_seconds

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        options: dict[str, Any] | None = None,
    ) -> RawModelResponse:
        """Send a completion request to Ollama."""
        request = self._build_request(
            prompt=prompt,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            options=options,
        )
        payload = self._to_payload(request)

        start_time = time.perf_counter()

        try:
            response = await asyncio.wait_for(
                self._client.post("/api/generate", json=payload),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise GenerationConnectionError(
                "Model server timed out",
                detail=f"no response from {self.config.base_url} within {self.timeout}s",
            ) from e
        except httpx.TransportError as e:
            raise GenerationConnectionError(
                "Model server unreachable",
                detail=f"{self.config.base_url}: {e}",
            ) from e
        except httpx.DecodingError as e:
            raise GenerationDecodeError(
                "Model server response could not be decoded",
                detail=str(e),
            ) from e
        except httpx.RequestError as e:
            raise GenerationConnectionError(
                "Model server request failed",
                detail=f"{self.config.base_url}: {e}",
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            f"Ollama {request.model} answered {response.status_code} in {latency_ms}ms"
        )

        if not response.is_success:
            raise GenerationServerError(
                "Model server returned an error",
                status_code=response.status_code,
                detail=self._error_detail(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationDecodeError(
                "Model server response is not JSON",
                detail=response.text[:500],
            ) from e

        try:
            return RawModelResponse.model_validate(data)
        except ValidationError as e:
            raise GenerationDecodeError(
                "Model server response is missing generate fields",
                detail=str(e),
            ) from e

    async def health_check(self) -> bool:
        """Check if the Ollama server is accessible."""
        try:
            response = await self._client.get("/api/tags")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    @staticmethod
    def _to_payload(request: GenerateRequest) -> dict[str, Any]:
        """Serialize a request, mirroring sampling settings into Ollama options.

        Ollama reads sampling settings from `options` (`num_predict` is its
        name for the output length); the top-level fields are kept for
        servers that read them there. Caller options win.
        """
        payload = request.model_dump()
        payload["options"] = {
            "temperature": request.temperature,
            "num_predict": request.max_tokens,
            **request.options,
        }
        return payload

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"status={response.status_code} body={response.text[:500]}"
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"status={response.status_code} body={response.text[:500]}"
