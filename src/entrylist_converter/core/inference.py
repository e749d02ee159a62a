"""Inference service boundary.

The extractor talks to the model through the narrow :class:`InferenceBackend`
protocol, so the validation logic can be exercised with any substitute
object. :class:`GeminiBackend` is the default implementation and uses the
Google Gen AI SDK.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Protocol, runtime_checkable

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict, Field

from entrylist_converter.core.config import DEFAULT_MODEL
from entrylist_converter.core.document import InlinePayload
from entrylist_converter.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


class InferenceResponse(BaseModel):
    """Raw answer of an inference call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: str | None = Field(
        default=None,
        description="Raw text returned by the service",
    )
    parsed: Any = Field(
        default=None,
        description="Structured data when the backend already decoded the response",
    )
    model: str | None = Field(
        default=None,
        description="Model that produced the response",
    )
    tokens_used: int | None = Field(
        default=None,
        description="Total tokens used by the call",
    )


@runtime_checkable
class InferenceBackend(Protocol):
    """Anything that can turn a document payload into structured output."""

    model: str

    def infer(
        self,
        payload: InlinePayload,
        schema: dict[str, Any],
        *,
        prompt: str,
        system_prompt: str | None = None,
    ) -> InferenceResponse:
        """Send one request and block until the service answers."""
        ...


class GeminiBackend:
    """Inference backend on the Google Gen AI SDK.

    Example:
        ```python
        backend = GeminiBackend(model="gemini-2.5-flash", timeout_seconds=120)
        extractor = EntryExtractor(backend=backend)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int | None = None,
        timeout_seconds: float | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY, then GOOGLE_API_KEY.
            model: Model name.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens, None for the model default.
            timeout_seconds: Request timeout, None for the SDK default.
            client: Pre-configured SDK client. If provided, api_key and
                timeout_seconds are not used to build one.

        Raises:
            ConfigurationError: If no client is given and no API key can be found.
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds

        if client is not None:
            self._client = client
            return

        resolved_key = api_key or _api_key_from_env()
        if not resolved_key:
            raise ConfigurationError(
                "No Gemini API key configured; pass api_key or set "
                + " or ".join(API_KEY_ENV_VARS)
            )
        self._client = genai.Client(api_key=resolved_key)

    def infer(
        self,
        payload: InlinePayload,
        schema: dict[str, Any],
        *,
        prompt: str,
        system_prompt: str | None = None,
    ) -> InferenceResponse:
        http_options = None
        if self.timeout_seconds is not None:
            # HttpOptions.timeout is in milliseconds
            http_options = types.HttpOptions(timeout=int(self.timeout_seconds * 1000))

        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            candidate_count=1,
            response_mime_type="application/json",
            response_schema=schema,
            http_options=http_options,
        )

        contents = [
            types.Part.from_bytes(data=payload.data, mime_type=payload.mime_type),
            prompt,
        ]

        logger.debug(
            "Calling %s with %d byte payload (sha256=%s)",
            self.model,
            len(payload.data),
            payload.sha256[:12],
        )
        response = self._client.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )

        usage = response.usage_metadata
        return InferenceResponse(
            content=response.text,
            model=response.model_version or self.model,
            tokens_used=usage.total_token_count if usage else None,
        )


def _api_key_from_env() -> str | None:
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None
