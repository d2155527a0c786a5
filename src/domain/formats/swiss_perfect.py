"""Swiss Perfect rating table export (dBASE)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from domain.common import Player, RatingMap
from domain.formats.dbf import write_dbf
from domain.formats.fields import (
    FieldKind,
    FieldSpec,
    dob_to_dmy,
    sort_players,
    truncate,
)

SWISS_PERFECT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("ICU_CODE", 20, FieldKind.NUMERIC, lambda p, r: p.id),
    FieldSpec("FIRST_NAME", 50, FieldKind.CHARACTER, lambda p, r: truncate(p.first_name, 50)),
    FieldSpec("LAST_NAME", 50, FieldKind.CHARACTER, lambda p, r: truncate(p.last_name, 50)),
    FieldSpec("ICU_RATING", 5, FieldKind.NUMERIC, lambda p, r: r.get(p.id, 0)),
    FieldSpec("SEX", 1, FieldKind.CHARACTER, lambda p, r: p.gender or ""),
    FieldSpec("CLUB", 25, FieldKind.CHARACTER, lambda p, r: truncate(p.club, 25)),
    FieldSpec("DOB", 10, FieldKind.CHARACTER, lambda p, r: dob_to_dmy(p.dob)),
)


def swiss_perfect_filename(short_name: str) -> str:
    return f"swiss_perfect_{short_name}.dbf"


def tabular_rows(players: Iterable[Player], ratings: RatingMap) -> list[list[object]]:
    return [
        [field.extract(player, ratings) for field in SWISS_PERFECT_FIELDS]
        for player in sort_players(players)
    ]


def emit_tabular(
    players: Iterable[Player],
    ratings: RatingMap,
    output_path: Path,
    *,
    updated: date | None = None,
) -> int:
    """Write the Swiss Perfect table; players without a rating get 0."""
    return write_dbf(
        output_path,
        SWISS_PERFECT_FIELDS,
        tabular_rows(players, ratings),
        updated=updated or date.today(),
    )


__all__ = ["SWISS_PERFECT_FIELDS", "emit_tabular", "swiss_perfect_filename", "tabular_rows"]
