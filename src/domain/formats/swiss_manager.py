"""Swiss Manager rating list export (fixed-width UTF-8 text)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from domain.common import Player, RatingMap
from domain.errors import OutputError
from domain.formats.fields import (
    Align,
    FieldKind,
    FieldSpec,
    club_flag,
    padded_id,
    sort_players,
    title_code,
    year_of_birth,
)

MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
COLUMN_SEPARATOR = "  "

# ID number Name                              TitlFed  Sep11 GamesBorn  Flag
# 12508608  Abbaszadeh, Esmaeil                   IRI  1925    0
#  7900139  Abbou, Meriem                     wf  ALG  2005    0        wi
SWISS_MANAGER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("id", 8, FieldKind.CHARACTER, lambda p, r: padded_id(p.id)),
    FieldSpec("name", 32, FieldKind.CHARACTER, lambda p, r: f"{p.last_name}, {p.first_name}"),
    FieldSpec("title", 2, FieldKind.CHARACTER, lambda p, r: title_code(p.title)),
    FieldSpec("fed", 3, FieldKind.CHARACTER, lambda p, r: p.fed or "", Align.RIGHT),
    FieldSpec("rating", 4, FieldKind.CHARACTER, lambda p, r: r.get(p.id, "")),
    FieldSpec("games", 3, FieldKind.NUMERIC, lambda p, r: 0, Align.RIGHT),
    FieldSpec("born", 4, FieldKind.CHARACTER, lambda p, r: year_of_birth(p.dob)),
    FieldSpec("flag", 0, FieldKind.CHARACTER, lambda p, r: club_flag(p.gender, p.club)),
)


def swiss_manager_filename(short_name: str) -> str:
    return f"swiss_manager_{short_name}.txt"


def month_year_label(today: date) -> str:
    """Capitalised month abbreviation plus two-digit year, e.g. ``Sep11``."""
    return f"{MONTHS[today.month - 1].capitalize()}{today.year % 100:02d}"


def header_line(label: str) -> str:
    return f"{'ID number Name':<44}TitlFed  {label} GamesBorn  Flag\n"


def format_record(player: Player, ratings: RatingMap) -> str:
    cells = [field.render(field.extract(player, ratings)) for field in SWISS_MANAGER_FIELDS]
    return COLUMN_SEPARATOR.join(cells) + "\n"


def emit_fixedwidth(
    players: Iterable[Player],
    ratings: RatingMap,
    month_year: str,
    output_path: Path,
) -> int:
    """Write the Swiss Manager list; players without a rating get an empty rating column."""
    lines = [header_line(month_year)]
    lines.extend(format_record(player, ratings) for player in sort_players(players))
    payload = "".join(lines).encode("utf-8")
    try:
        with output_path.open("wb") as file:
            file.write(payload)
    except OSError as exc:
        raise OutputError(f"can't write to file {output_path}: {exc}") from exc
    return len(payload)


__all__ = [
    "SWISS_MANAGER_FIELDS",
    "emit_fixedwidth",
    "format_record",
    "header_line",
    "month_year_label",
    "swiss_manager_filename",
]
