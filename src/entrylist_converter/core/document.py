"""Input documents and their inline transport form."""

from __future__ import annotations

import base64
import hashlib
import mimetypes
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PDF_MEDIA_TYPE = "application/pdf"

# Declared types browsers and mail clients use for PDF files
PDF_MEDIA_TYPES = frozenset({PDF_MEDIA_TYPE, "application/x-pdf"})


def normalize_media_type(media_type: str | None) -> str:
    """Lower-case a media type and drop its parameters (``; charset=...``)."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


class InlinePayload(BaseModel):
    """Document bytes in the form the inference service receives them."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw document bytes")
    mime_type: str = Field(description="Explicit media type tag sent with the bytes")
    sha256: str = Field(description="Hex digest of the bytes, identifies the payload")

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON transport form of the payload."""
        return {"inline_data": {"mime_type": self.mime_type, "data": self.to_base64()}}


class Document(BaseModel):
    """A binary document together with its declared media type.

    The declared type is taken as given. Extraction only proceeds when it
    names a PDF; the content itself is never sniffed.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False, description="Raw document bytes")
    media_type: str = Field(description="Declared media type, e.g. application/pdf")
    name: str | None = Field(default=None, description="Original file name, informational only")

    @classmethod
    def from_path(cls, path: str | Path, media_type: str | None = None) -> Document:
        """Read a document from disk.

        Args:
            path: File to read.
            media_type: Declared media type. Guessed from the file name when omitted.

        Returns:
            Document instance.
        """
        path = Path(path)
        if media_type is None:
            media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            content=path.read_bytes(),
            media_type=media_type or "application/octet-stream",
            name=path.name,
        )

    @property
    def is_pdf(self) -> bool:
        return normalize_media_type(self.media_type) in PDF_MEDIA_TYPES

    @property
    def size(self) -> int:
        return len(self.content)

    def to_payload(self) -> InlinePayload:
        """Encode the document for the inference service.

        Raises:
            ValueError: If the declared media type is not a PDF type.
        """
        if not self.is_pdf:
            raise ValueError(f"Cannot build a PDF payload from media type {self.media_type!r}")
        return InlinePayload(
            data=self.content,
            mime_type=PDF_MEDIA_TYPE,
            sha256=hashlib.sha256(self.content).hexdigest(),
        )
