"""Field descriptors and value transforms shared by the export formats."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from domain.common import Player, RatingMap

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

TITLE_CODES = {
    "GM": "g",
    "IM": "i",
    "FM": "f",
    "CM": "c",
}


class FieldKind(str, Enum):
    """Storage kind of a record field."""

    CHARACTER = "C"
    NUMERIC = "N"


class Align(str, Enum):
    LEFT = "<"
    RIGHT = ">"


@dataclass(frozen=True)
class FieldSpec:
    """One column of a fixed-layout record.

    ``extract`` maps a player and the variant's rating map to the raw value.
    ``width`` is the storage width for tabular formats and the minimum padded
    width for text formats (0 means unpadded).
    """

    name: str
    width: int
    kind: FieldKind
    extract: Callable[[Player, RatingMap], Any]
    align: Align = Align.LEFT

    def render(self, value: Any) -> str:
        text = "" if value is None else str(value)
        if self.width <= 0:
            return text
        return f"{text:{self.align.value}{self.width}}"


def sort_players(players: Iterable[Player]) -> list[Player]:
    """Order players by last name then first name, case-sensitive."""
    return sorted(players, key=lambda player: (player.last_name, player.first_name))


def truncate(value: str | None, width: int) -> str:
    if value is None:
        return ""
    return value[:width]


def dob_to_dmy(dob: str | None) -> str:
    """Reformat ``YYYY-MM-DD`` as ``DD-MM-YYYY``; anything else becomes empty."""
    if dob is None:
        return ""
    match = _ISO_DATE_RE.match(dob)
    if match is None:
        return ""
    year, month, day = match.groups()
    return f"{day}-{month}-{year}"


def year_of_birth(dob: str | None) -> str:
    if dob is None:
        return ""
    match = _ISO_DATE_RE.match(dob)
    return "" if match is None else match.group(1)


def title_code(title: str | None) -> str:
    """Map a chess title to its one-letter code, prefixing ``w`` for women's titles.

    A bare ``W`` (or a ``W`` before an unknown title) yields no code at all.
    """
    if title is None:
        return ""
    woman = title.startswith("W")
    base = title[1:] if woman else title
    code = TITLE_CODES.get(base, "")
    if woman and code:
        return f"w{code}"
    return code


def padded_id(player_id: int) -> str:
    """Zero-pad ids below four digits."""
    if player_id < 1000:
        return f"{player_id:04d}"
    return str(player_id)


def club_flag(gender: str | None, club: str | None) -> str:
    """Combine the female marker with the club, recoding ``W``/``w`` in the club to ``U``/``u``."""
    flag = "w" if gender == "F" else ""
    if not club:
        return flag
    recoded = club.replace("W", "U").replace("w", "u")
    if flag:
        return f"{recoded} {flag}"
    return recoded


__all__ = [
    "Align",
    "FieldKind",
    "FieldSpec",
    "TITLE_CODES",
    "club_flag",
    "dob_to_dmy",
    "padded_id",
    "sort_players",
    "title_code",
    "truncate",
    "year_of_birth",
]
