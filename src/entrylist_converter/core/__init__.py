"""Core extraction functionality."""

from entrylist_converter.core.config import ExtractionConfig
from entrylist_converter.core.document import Document, InlinePayload
from entrylist_converter.core.exceptions import (
    ConfigurationError,
    EntryListConverterError,
    ExtractionError,
    ExtractionErrorKind,
    InvalidInputKindError,
    MalformedResponseError,
    ServiceFailureError,
    SessionStateError,
)
from entrylist_converter.core.extractor import EntryExtractor
from entrylist_converter.core.inference import (
    GeminiBackend,
    InferenceBackend,
    InferenceResponse,
)

__all__ = [
    "EntryExtractor",
    "Document",
    "InlinePayload",
    "ExtractionConfig",
    "GeminiBackend",
    "InferenceBackend",
    "InferenceResponse",
    "EntryListConverterError",
    "ExtractionError",
    "ExtractionErrorKind",
    "InvalidInputKindError",
    "ServiceFailureError",
    "MalformedResponseError",
    "ConfigurationError",
    "SessionStateError",
]
