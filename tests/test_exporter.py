"""Tests for CSV/TXT rendering and artifacts."""

from pathlib import Path

import pytest

from entrylist_converter.export import (
    UTF8_BOM,
    ExportArtifact,
    ExportFormat,
    build_artifact,
    render_delimited,
    render_plain,
)
from entrylist_converter.schemas.entry import CompetitionEntry


def make_entry(
    rider: str = "Ali",
    club: str = "ClubA",
    horse_name: str = "Tornado",
    height: str = "1.40m",
) -> CompetitionEntry:
    return CompetitionEntry(rider=rider, club=club, horse_name=horse_name, height=height)


@pytest.fixture
def entries() -> list[CompetitionEntry]:
    return [
        make_entry(),
        make_entry(rider="Ayşe Çelik", club="İzmir Atlı Spor", horse_name="Şimşek", height="120, 130"),
    ]


class TestRenderDelimited:
    """Tests for render_delimited."""

    def test_single_entry_field_order(self) -> None:
        """Test fields are rider, club, horse, quoted height."""
        assert render_delimited([make_entry()]) == 'Ali,ClubA,Tornado,"1.40m"'

    def test_height_always_quoted(self) -> None:
        """Test quoting applies even without a comma in the height."""
        assert render_delimited([make_entry(height="160")]) == 'Ali,ClubA,Tornado,"160"'

    def test_other_fields_never_quoted(self) -> None:
        """Test names are written as is."""
        line = render_delimited([make_entry(rider="Smith, John")])

        assert line == 'Smith, John,ClubA,Tornado,"1.40m"'

    def test_empty_height(self) -> None:
        assert render_delimited([make_entry(height="")]) == 'Ali,ClubA,Tornado,""'

    def test_multiple_entries(self, entries: list[CompetitionEntry]) -> None:
        """Test lines are joined by one newline with no trailing newline."""
        text = render_delimited(entries)

        assert text == 'Ali,ClubA,Tornado,"1.40m"\nAyşe Çelik,İzmir Atlı Spor,Şimşek,"120, 130"'
        assert not text.endswith("\n")
        assert text.count("\n") == 1

    def test_empty_input(self) -> None:
        assert render_delimited([]) == ""

    def test_accepts_generators(self, entries: list[CompetitionEntry]) -> None:
        """Test any iterable of entries is accepted."""
        assert render_delimited(e for e in entries) == render_delimited(entries)


class TestRenderPlain:
    """Tests for render_plain."""

    def test_single_entry_field_order(self) -> None:
        """Test fields are rider, horse, club."""
        assert render_plain([make_entry()]) == "Ali - Tornado - ClubA"

    def test_height_not_included(self) -> None:
        assert "1.40m" not in render_plain([make_entry()])

    def test_multiple_entries(self, entries: list[CompetitionEntry]) -> None:
        """Test lines are joined by one newline with no trailing newline."""
        assert render_plain(entries) == "Ali - Tornado - ClubA\nAyşe Çelik - Şimşek - İzmir Atlı Spor"

    def test_empty_input(self) -> None:
        assert render_plain([]) == ""


class TestRendererPurity:
    """Tests that rendering is deterministic and read-only."""

    @pytest.mark.parametrize("render", [render_delimited, render_plain])
    def test_deterministic(self, render, entries: list[CompetitionEntry]) -> None:
        """Test repeated calls give identical output."""
        assert render(entries) == render(entries)

    @pytest.mark.parametrize("render", [render_delimited, render_plain])
    def test_input_not_mutated(self, render, entries: list[CompetitionEntry]) -> None:
        """Test the input sequence and entries are left untouched."""
        before = [e.model_dump() for e in entries]

        render(entries)

        assert [e.model_dump() for e in entries] == before
        assert len(entries) == 2

    @pytest.mark.parametrize("render", [render_delimited, render_plain])
    def test_order_preserved(self, render) -> None:
        """Test output lines follow input order."""
        names = ["Zeynep", "Ali", "Mehmet"]
        lines = render([make_entry(rider=name) for name in names]).split("\n")

        assert [line.split(",")[0].split(" - ")[0] for line in lines] == names

    def test_malformed_entry_fails_fast(self) -> None:
        """Test an object without the entry fields raises."""
        with pytest.raises(AttributeError):
            render_delimited([object()])  # type: ignore[list-item]


class TestExportFormat:
    """Tests for ExportFormat."""

    def test_csv(self) -> None:
        assert ExportFormat.CSV.mime_type == "text/csv;charset=utf-8"
        assert ExportFormat.CSV.default_filename == "results.csv"
        assert ExportFormat.CSV.renderer is render_delimited

    def test_txt(self) -> None:
        assert ExportFormat.TXT.mime_type == "text/plain;charset=utf-8"
        assert ExportFormat.TXT.default_filename == "results.txt"
        assert ExportFormat.TXT.renderer is render_plain

    def test_from_value(self) -> None:
        assert ExportFormat("csv") is ExportFormat.CSV


class TestExportArtifact:
    """Tests for artifacts and their byte form."""

    def test_build_csv_artifact(self, entries: list[CompetitionEntry]) -> None:
        """Test building a CSV artifact with defaults."""
        artifact = build_artifact(entries, ExportFormat.CSV)

        assert artifact.filename == "results.csv"
        assert artifact.mime_type == "text/csv;charset=utf-8"
        assert artifact.text == render_delimited(entries)

    def test_build_txt_artifact_from_string(self, entries: list[CompetitionEntry]) -> None:
        """Test building a TXT artifact with a format string and file name."""
        artifact = build_artifact(entries, "txt", filename="sonuclar.txt")

        assert artifact.filename == "sonuclar.txt"
        assert artifact.mime_type == "text/plain;charset=utf-8"
        assert artifact.text == render_plain(entries)

    def test_unknown_format(self, entries: list[CompetitionEntry]) -> None:
        with pytest.raises(ValueError):
            build_artifact(entries, "xlsx")

    @pytest.mark.parametrize("fmt", list(ExportFormat))
    def test_bytes_start_with_bom(self, fmt: ExportFormat, entries: list[CompetitionEntry]) -> None:
        """Test both formats are UTF-8 with a leading byte-order mark."""
        data = build_artifact(entries, fmt).to_bytes()

        assert data.startswith(b"\xef\xbb\xbf")
        assert data[3:].decode("utf-8") == fmt.renderer(entries)

    def test_bom_constant(self) -> None:
        assert UTF8_BOM.encode("utf-8") == b"\xef\xbb\xbf"

    def test_empty_artifact_is_only_bom(self) -> None:
        artifact = build_artifact([], ExportFormat.CSV)

        assert artifact.to_bytes() == b"\xef\xbb\xbf"

    def test_non_ascii_round_trip(self) -> None:
        """Test Turkish characters survive encoding."""
        artifact = ExportArtifact(filename="a.txt", mime_type="text/plain;charset=utf-8", text="Ğ ü ş ı")

        assert artifact.to_bytes().decode("utf-8-sig") == "Ğ ü ş ı"

    def test_write(self, tmp_path: Path, entries: list[CompetitionEntry]) -> None:
        """Test writing into a new directory."""
        artifact = build_artifact(entries, ExportFormat.CSV)

        path = artifact.write(tmp_path / "out")

        assert path == tmp_path / "out" / "results.csv"
        assert path.read_bytes() == artifact.to_bytes()
        assert path.read_text(encoding="utf-8-sig") == artifact.text
