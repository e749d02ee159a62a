"""Result types for extraction outputs."""

from entrylist_converter.results.types import ExtractionResult

__all__ = [
    "ExtractionResult",
]
