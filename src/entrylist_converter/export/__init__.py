"""Export of extracted entries."""

from entrylist_converter.export.renderers import (
    UTF8_BOM,
    ExportArtifact,
    ExportFormat,
    build_artifact,
    render_delimited,
    render_plain,
)

__all__ = [
    "ExportArtifact",
    "ExportFormat",
    "UTF8_BOM",
    "build_artifact",
    "render_delimited",
    "render_plain",
]
