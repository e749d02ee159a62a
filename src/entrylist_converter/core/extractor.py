"""Main entry list extractor class."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from entrylist_converter.core.config import ExtractionConfig
from entrylist_converter.core.document import Document, InlinePayload
from entrylist_converter.core.exceptions import (
    InvalidInputKindError,
    MalformedResponseError,
    ServiceFailureError,
)
from entrylist_converter.core.inference import (
    GeminiBackend,
    InferenceBackend,
    InferenceResponse,
)
from entrylist_converter.prompts.builder import PromptBuilder
from entrylist_converter.results.types import ExtractionResult
from entrylist_converter.schemas.entry import CompetitionEntry, parse_entries

logger = logging.getLogger(__name__)


class EntryExtractor:
    """LLM-driven extractor for scanned competition entry lists.

    Sends the PDF to an inference service together with a strict output
    schema and validates the answer into :class:`CompetitionEntry` records.
    Each call is a single request; failures are raised, never retried.

    Example:
        ```python
        from entrylist_converter import Document, EntryExtractor

        extractor = EntryExtractor()  # reads GEMINI_API_KEY
        entries = extractor.extract(Document.from_path("start_list.pdf"))
        for entry in entries:
            print(entry.rider, entry.horse_name)

        # Any object with an ``infer`` method can stand in for Gemini
        extractor = EntryExtractor(backend=my_backend)
        ```
    """

    _backend: InferenceBackend

    def __init__(
        self,
        backend: InferenceBackend | None = None,
        api_key: str | None = None,
        model: str | None = None,
        default_config: ExtractionConfig | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            backend: Pre-configured inference backend. If provided, api_key and
                model are ignored.
            api_key: Gemini API key. Only used if backend is not provided.
                If not provided, uses GEMINI_API_KEY or GOOGLE_API_KEY env var.
            model: Model to use. Only used if backend is not provided;
                defaults to the config's model.
            default_config: Extraction configuration.
        """
        self.default_config = default_config or ExtractionConfig()

        if backend is not None:
            self._backend = backend
            self.model = backend.model
        else:
            self.model = model or self.default_config.model
            self._backend = GeminiBackend(
                api_key=api_key,
                model=self.model,
                temperature=self.default_config.temperature,
                max_tokens=self.default_config.max_tokens,
                timeout_seconds=self.default_config.timeout_seconds,
            )

        self._prompt_builder = PromptBuilder(
            include_field_descriptions=self.default_config.include_field_descriptions,
        )

    def extract(self, document: Document) -> tuple[CompetitionEntry, ...]:
        """Extract the entries of a document.

        Args:
            document: PDF document to read.

        Returns:
            Entries in the order the service returned them. May be empty.

        Raises:
            InvalidInputKindError: If the document is not declared as a PDF.
            ServiceFailureError: If the inference call fails.
            MalformedResponseError: If the answer does not match the entry schema.
        """
        return self.extract_result(document).entries

    def extract_result(self, document: Document) -> ExtractionResult:
        """Extract the entries of a document along with call metadata.

        Raises the same errors as :meth:`extract`.
        """
        if not document.is_pdf:
            raise InvalidInputKindError(
                f"Only PDF documents can be processed, got {document.media_type!r}",
                media_type=document.media_type,
            )

        payload = document.to_payload()
        response = self._infer(payload)
        entries = self._parse_response(response)

        if entries:
            logger.info("Extracted %d entries from %s", len(entries), document.name or "document")
        else:
            logger.info("No entries found in %s", document.name or "document")

        return ExtractionResult(
            entries=entries,
            document_sha256=payload.sha256,
            model_used=response.model or self.model,
            tokens_used=response.tokens_used,
            raw_response=response.content,
        )

    def _infer(self, payload: InlinePayload) -> InferenceResponse:
        """Call the inference backend once.

        Raises:
            ServiceFailureError: Wrapping whatever the backend raised.
            MalformedResponseError: If the backend returned something other
                than an InferenceResponse.
        """
        system_prompt = self._prompt_builder.build_system_prompt(self.default_config.system_prompt)
        prompt = self._prompt_builder.build_extraction_prompt(CompetitionEntry)
        schema = self._prompt_builder.build_response_schema(CompetitionEntry)

        logger.debug("Extraction request (model=%s, sha256=%s)", self.model, payload.sha256[:12])
        try:
            response = self._backend.infer(
                payload,
                schema,
                prompt=prompt,
                system_prompt=system_prompt,
            )
        except Exception as e:
            logger.error("Inference call failed: %s", str(e))
            raise ServiceFailureError(
                f"Inference service call failed: {str(e)}",
                last_error=e,
            ) from e

        if not isinstance(response, InferenceResponse):
            logger.warning("Inference backend returned %s", type(response).__name__)
            raise MalformedResponseError(
                f"Inference backend returned {type(response).__name__}",
                raw_response=repr(response),
            )
        return response

    def _parse_response(self, response: InferenceResponse) -> tuple[CompetitionEntry, ...]:
        """Decode and validate the service answer.

        Raises:
            MalformedResponseError: If the answer is missing, not JSON, or does
                not validate as a list of entries.
        """
        data: Any = response.parsed
        if data is None:
            if not response.content or not response.content.strip():
                logger.warning("Inference service returned an empty response")
                raise MalformedResponseError(
                    "Inference service returned no content",
                    raw_response=response.content,
                )
            try:
                data = json.loads(response.content)
            except json.JSONDecodeError as e:
                logger.warning("Response is not valid JSON: %s", str(e))
                raise MalformedResponseError(
                    f"Response is not valid JSON: {str(e)}",
                    raw_response=response.content,
                ) from e

        try:
            return parse_entries(data)
        except ValidationError as e:
            logger.warning("Response does not match the entry schema: %s", str(e))
            raise MalformedResponseError(
                f"Response does not match the entry schema: {str(e)}",
                validation_errors=e.errors(),
                raw_response=response.content,
            ) from e
