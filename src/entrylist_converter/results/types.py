"""Result types for extraction outputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from entrylist_converter.schemas.entry import CompetitionEntry


class ExtractionResult(BaseModel):
    """Result of extracting one document.

    An empty ``entries`` tuple is a valid outcome: the service understood the
    document but found no records. Callers decide how to present it.
    """

    model_config = ConfigDict(frozen=True)

    # Core result
    entries: tuple[CompetitionEntry, ...] = Field(
        default=(),
        description="Extracted entries in document order",
    )

    # Metadata
    document_sha256: str | None = Field(
        default=None,
        description="Digest of the payload the entries were extracted from",
    )
    model_used: str | None = Field(
        default=None,
        description="LLM model used for extraction",
    )
    tokens_used: int | None = Field(
        default=None,
        description="Total tokens used for extraction",
    )
    raw_response: str | None = Field(
        default=None,
        description="Raw LLM response for debugging",
    )

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def count(self) -> int:
        return len(self.entries)
