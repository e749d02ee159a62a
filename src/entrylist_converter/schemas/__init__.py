"""Extraction schemas for competition entry lists."""

from entrylist_converter.schemas.entry import ENTRY_FIELDS, CompetitionEntry, parse_entries

__all__ = [
    "CompetitionEntry",
    "ENTRY_FIELDS",
    "parse_entries",
]
