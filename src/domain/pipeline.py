"""Export pipeline: players, merged ratings, format files and archives per variant."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from domain.archive import archive
from domain.common import Player, RatingMap, Variant
from domain.formats.swiss_manager import emit_fixedwidth, month_year_label, swiss_manager_filename
from domain.formats.swiss_perfect import emit_tabular, swiss_perfect_filename
from domain.merge import merge_ratings
from repositories.federation import (
    DEFAULT_PUBLISHED_CUTOFF,
    fetch_legacy_ratings,
    fetch_live_ratings,
    fetch_players,
    fetch_published_ratings,
)


@dataclass(frozen=True)
class VariantExport:
    """Files written for one rating variant."""

    variant: Variant
    rated_players: int
    swiss_perfect_file: Path
    swiss_manager_file: Path
    archive_file: Path


@dataclass(frozen=True)
class ExportSummary:
    """Outcome of one export run."""

    month_year: str
    players: int
    variants: tuple[VariantExport, ...]


def fetch_variant_ratings(
    session,
    variant: Variant,
    *,
    published_cutoff: date = DEFAULT_PUBLISHED_CUTOFF,
    echo: Callable[[str], None] | None = None,
) -> RatingMap:
    """Query the variant's primary source and backfill it from the legacy list."""
    if variant is Variant.PUBLISHED:
        primary = fetch_published_ratings(session, published_cutoff)
    else:
        primary = fetch_live_ratings(session)
    legacy = fetch_legacy_ratings(session)
    return merge_ratings(primary, legacy, label=variant.value, echo=echo)


def export_variant(
    variant: Variant,
    players: dict[int, Player],
    ratings: RatingMap,
    *,
    output_dir: Path,
    month_year: str,
    today: date,
    echo: Callable[[str], None] | None = None,
) -> VariantExport:
    """Write both format files for one variant and zip them."""
    sp_file = output_dir / swiss_perfect_filename(variant.short_name)
    sp_bytes = emit_tabular(players.values(), ratings, sp_file, updated=today)
    _report(echo, sp_file, sp_bytes)

    sm_file = output_dir / swiss_manager_filename(variant.short_name)
    sm_bytes = emit_fixedwidth(players.values(), ratings, month_year, sm_file)
    _report(echo, sm_file, sm_bytes)

    zip_file = archive(variant, [sp_file, sm_file], output_dir)
    _report(echo, zip_file, zip_file.stat().st_size)

    return VariantExport(
        variant=variant,
        rated_players=sum(1 for player_id in players if player_id in ratings),
        swiss_perfect_file=sp_file,
        swiss_manager_file=sm_file,
        archive_file=zip_file,
    )


def run_export(
    *,
    session_factory,
    output_dir: Path,
    today: date | None = None,
    published_cutoff: date = DEFAULT_PUBLISHED_CUTOFF,
    variants: tuple[Variant, ...] = (Variant.PUBLISHED, Variant.LIVE),
    echo: Callable[[str], None] | None = None,
) -> ExportSummary:
    """Run the whole export; any failure propagates and aborts the run."""
    run_date = today or date.today()
    month_year = month_year_label(run_date)
    if echo is not None:
        echo(f"year_month={month_year}")

    exports: list[VariantExport] = []
    with session_factory() as session:
        players = fetch_players(session)
        if echo is not None:
            echo(f"players={len(players)}")

        for variant in variants:
            ratings = fetch_variant_ratings(
                session,
                variant,
                published_cutoff=published_cutoff,
                echo=echo,
            )
            exports.append(
                export_variant(
                    variant,
                    players,
                    ratings,
                    output_dir=output_dir,
                    month_year=month_year,
                    today=run_date,
                    echo=echo,
                )
            )

    return ExportSummary(month_year=month_year, players=len(players), variants=tuple(exports))


def _report(echo: Callable[[str], None] | None, path: Path, size: int) -> None:
    if echo is not None:
        echo(f"wrote path={path} bytes={size}")


__all__ = [
    "ExportSummary",
    "VariantExport",
    "export_variant",
    "fetch_variant_ratings",
    "run_export",
]
