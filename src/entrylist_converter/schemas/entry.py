"""Competition entry schema.

A competition entry is one line of a show-jumping start list: the rider,
the club the rider competes for, the horse and the height class. The
inference service answers with the Turkish key names used on the original
lists, so every field carries its wire name as an alias.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter


class CompetitionEntry(BaseModel):
    """One record of a competition entry list.

    Example:
        ```python
        from entrylist_converter import CompetitionEntry

        entry = CompetitionEntry.model_validate(
            {"binici": "Ali", "kulup": "ClubA", "atinAdi": "Tornado", "yukseklik": "1.40m"}
        )
        print(entry.horse_name)
        ```
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rider: StrictStr = Field(alias="binici", description="Full name of the rider")
    club: StrictStr = Field(alias="kulup", description="Club or organisation the rider represents")
    horse_name: StrictStr = Field(alias="atinAdi", description="Name of the horse")
    height: StrictStr = Field(
        alias="yukseklik",
        description="Obstacle height or class exactly as printed, e.g. 1.40m or 120 cm",
    )

    def to_wire(self) -> dict[str, str]:
        """Return the entry keyed by the service's field names."""
        return self.model_dump(by_alias=True)


# Delimited export order
ENTRY_FIELDS: tuple[str, ...] = ("rider", "club", "horse_name", "height")

_ENTRY_LIST_ADAPTER: TypeAdapter[list[CompetitionEntry]] = TypeAdapter(list[CompetitionEntry])


def parse_entries(data: Any) -> tuple[CompetitionEntry, ...]:
    """Validate decoded service output as an ordered list of entries.

    Args:
        data: Decoded JSON value, expected to be a list of objects.

    Returns:
        The entries in the order they were received.

    Raises:
        pydantic.ValidationError: If ``data`` is not a list or any element
            is missing a field or holds a non-string value.
    """
    entries: Sequence[CompetitionEntry] = _ENTRY_LIST_ADAPTER.validate_python(data)
    return tuple(entries)
