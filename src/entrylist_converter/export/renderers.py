"""Render extracted entries as CSV or plain text artifacts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from entrylist_converter.schemas.entry import CompetitionEntry

logger = logging.getLogger(__name__)

# Prepended to every artifact
UTF8_BOM = "\ufeff"

LINE_SEPARATOR = "\n"


def render_delimited(entries: Iterable[CompetitionEntry]) -> str:
    """Render entries as comma separated lines.

    Field order is ``rider, club, horse_name, height``. The height is always
    wrapped in double quotes, the other fields never are. No header row and
    no trailing newline.

    Args:
        entries: Entries to render, in output order.

    Returns:
        The delimited text, or an empty string for no entries.
    """
    return LINE_SEPARATOR.join(
        f'{entry.rider},{entry.club},{entry.horse_name},"{entry.height}"' for entry in entries
    )


def render_plain(entries: Iterable[CompetitionEntry]) -> str:
    """Render entries as ``rider - horse_name - club`` lines.

    Args:
        entries: Entries to render, in output order.

    Returns:
        The plain text, or an empty string for no entries.
    """
    return LINE_SEPARATOR.join(
        f"{entry.rider} - {entry.horse_name} - {entry.club}" for entry in entries
    )


class ExportFormat(str, Enum):
    """Supported output formats."""

    CSV = "csv"
    TXT = "txt"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @property
    def default_filename(self) -> str:
        return f"results.{self.value}"

    @property
    def renderer(self) -> Callable[[Iterable[CompetitionEntry]], str]:
        return _RENDERERS[self]


_MIME_TYPES: dict[ExportFormat, str] = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.TXT: "text/plain;charset=utf-8",
}

_RENDERERS: dict[ExportFormat, Callable[[Iterable[CompetitionEntry]], str]] = {
    ExportFormat.CSV: render_delimited,
    ExportFormat.TXT: render_plain,
}


class ExportArtifact(BaseModel):
    """Rendered text ready to be saved as a file."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(min_length=1, description="Suggested file name")
    mime_type: str = Field(description="MIME type including charset")
    text: str = Field(description="Rendered text without byte-order mark")

    def to_bytes(self) -> bytes:
        """Encode the text as UTF-8 with a leading byte-order mark."""
        return (UTF8_BOM + self.text).encode("utf-8")

    def write(self, directory: str | Path) -> Path:
        """Write the artifact into a directory.

        Args:
            directory: Target directory, created when missing.

        Returns:
            Path to the written file.
        """
        path = Path(directory) / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())

        logger.info("Wrote %s (%s, %d bytes)", path, self.mime_type, path.stat().st_size)
        return path


def build_artifact(
    entries: Iterable[CompetitionEntry],
    fmt: ExportFormat | str,
    filename: str | None = None,
) -> ExportArtifact:
    """Render entries in the given format and wrap them as an artifact.

    Args:
        entries: Entries to render.
        fmt: Output format, an ExportFormat or its value ("csv", "txt").
        filename: File name override, defaults to ``results.<ext>``.

    Returns:
        ExportArtifact holding the rendered text.

    Raises:
        ValueError: If fmt is not a supported format.
    """
    fmt = ExportFormat(fmt)
    return ExportArtifact(
        filename=filename or fmt.default_filename,
        mime_type=fmt.mime_type,
        text=fmt.renderer(entries),
    )
