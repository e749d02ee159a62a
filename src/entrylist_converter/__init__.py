"""
entrylist-converter: LLM-driven conversion of scanned competition entry lists to CSV and TXT.
"""

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
from entrylist_converter.export import (
    UTF8_BOM,
    ExportArtifact,
    ExportFormat,
    build_artifact,
    render_delimited,
    render_plain,
)
from entrylist_converter.prompts.builder import PromptBuilder
from entrylist_converter.results.types import ExtractionResult
from entrylist_converter.schemas import ENTRY_FIELDS, CompetitionEntry, parse_entries
from entrylist_converter.session import (
    ConversionSession,
    Done,
    Extracting,
    Failed,
    Idle,
    Selected,
    SessionState,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "EntryExtractor",
    "Document",
    "InlinePayload",
    "EntryListConverterError",
    "ExtractionError",
    "ExtractionErrorKind",
    "InvalidInputKindError",
    "ServiceFailureError",
    "MalformedResponseError",
    "ConfigurationError",
    "SessionStateError",
    # Inference
    "InferenceBackend",
    "InferenceResponse",
    "GeminiBackend",
    # Config
    "ExtractionConfig",
    # Prompts
    "PromptBuilder",
    # Schemas
    "CompetitionEntry",
    "ENTRY_FIELDS",
    "parse_entries",
    # Results
    "ExtractionResult",
    # Export
    "ExportArtifact",
    "ExportFormat",
    "UTF8_BOM",
    "build_artifact",
    "render_delimited",
    "render_plain",
    # Session
    "ConversionSession",
    "SessionState",
    "Idle",
    "Selected",
    "Extracting",
    "Done",
    "Failed",
]
