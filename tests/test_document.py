"""Tests for documents and inline payloads."""

import base64
import hashlib
from pathlib import Path

import pytest

from entrylist_converter.core.document import Document, normalize_media_type

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF\n"


class TestNormalizeMediaType:
    """Tests for normalize_media_type."""

    def test_strips_parameters_and_case(self) -> None:
        assert normalize_media_type("Application/PDF; charset=binary") == "application/pdf"

    def test_empty(self) -> None:
        assert normalize_media_type(None) == ""
        assert normalize_media_type("") == ""


class TestDocument:
    """Tests for Document."""

    @pytest.mark.parametrize(
        "media_type",
        ["application/pdf", "application/x-pdf", "APPLICATION/PDF", "application/pdf; q=1"],
    )
    def test_pdf_media_types(self, media_type: str) -> None:
        """Test that PDF media types are recognised."""
        assert Document(content=PDF_BYTES, media_type=media_type).is_pdf is True

    @pytest.mark.parametrize("media_type", ["text/plain", "image/png", "application/octet-stream", ""])
    def test_non_pdf_media_types(self, media_type: str) -> None:
        """Test that other media types are not PDF."""
        assert Document(content=PDF_BYTES, media_type=media_type).is_pdf is False

    def test_declared_type_wins_over_name(self) -> None:
        """Test that a .pdf file name does not make a document a PDF."""
        document = Document(content=PDF_BYTES, media_type="text/plain", name="list.pdf")

        assert document.is_pdf is False

    def test_from_path_guesses_media_type(self, tmp_path: Path) -> None:
        """Test reading a document from disk."""
        path = tmp_path / "start_list.pdf"
        path.write_bytes(PDF_BYTES)

        document = Document.from_path(path)

        assert document.content == PDF_BYTES
        assert document.media_type == "application/pdf"
        assert document.name == "start_list.pdf"
        assert document.size == len(PDF_BYTES)

    def test_from_path_explicit_media_type(self, tmp_path: Path) -> None:
        """Test that an explicit media type is kept as declared."""
        path = tmp_path / "scan.bin"
        path.write_bytes(PDF_BYTES)

        document = Document.from_path(path, media_type="application/pdf")

        assert document.is_pdf is True

    def test_from_path_unknown_extension(self, tmp_path: Path) -> None:
        """Test the fallback media type for unknown extensions."""
        path = tmp_path / "scan"
        path.write_bytes(PDF_BYTES)

        document = Document.from_path(path)

        assert document.media_type == "application/octet-stream"
        assert document.is_pdf is False


class TestInlinePayload:
    """Tests for Document.to_payload and InlinePayload."""

    def test_payload_fields(self) -> None:
        """Test the payload carries bytes, explicit type and digest."""
        payload = Document(content=PDF_BYTES, media_type="application/x-pdf").to_payload()

        assert payload.data == PDF_BYTES
        assert payload.mime_type == "application/pdf"
        assert payload.sha256 == hashlib.sha256(PDF_BYTES).hexdigest()

    def test_payload_to_dict(self) -> None:
        """Test the JSON transport form."""
        payload = Document(content=PDF_BYTES, media_type="application/pdf").to_payload()

        data = payload.to_dict()

        assert data["inline_data"]["mime_type"] == "application/pdf"
        assert base64.b64decode(data["inline_data"]["data"]) == PDF_BYTES

    def test_payload_requires_pdf(self) -> None:
        """Test that non-PDF documents cannot be encoded."""
        with pytest.raises(ValueError, match="text/plain"):
            Document(content=b"hello", media_type="text/plain").to_payload()

    def test_same_content_same_digest(self) -> None:
        """Test that the digest only depends on content."""
        first = Document(content=PDF_BYTES, media_type="application/pdf", name="a.pdf")
        second = Document(content=PDF_BYTES, media_type="application/pdf", name="b.pdf")

        assert first.to_payload().sha256 == second.to_payload().sha256
