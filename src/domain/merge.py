"""Merge primary and legacy rating rows into one rating per player."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from domain.common import RatingEntry, RatingMap


def select_latest(entries: Iterable[RatingEntry]) -> RatingMap:
    """Keep the first entry per player after a stable descending sort on ``order_key``.

    Entries without an order key sort last. Rows with equal keys keep the
    order the source returned them in, so the first of them wins.
    """
    ordered = sorted(
        entries,
        key=lambda entry: (entry.order_key is not None, entry.order_key or 0),
        reverse=True,
    )
    ratings: RatingMap = {}
    for entry in ordered:
        if entry.player_id not in ratings:
            ratings[entry.player_id] = int(entry.rating)
    return ratings


def merge_ratings(
    primary: Iterable[RatingEntry],
    secondary: Iterable[RatingEntry],
    *,
    label: str = "",
    echo: Callable[[str], None] | None = None,
) -> RatingMap:
    """Return primary ratings backfilled from the legacy list for absent players only."""
    ratings = select_latest(primary)
    if echo is not None:
        echo(f"initial_ratings={len(ratings)} variant={label}")

    for entry in secondary:
        if entry.player_id not in ratings:
            ratings[entry.player_id] = int(entry.rating)

    if echo is not None:
        echo(f"augmented_ratings={len(ratings)} variant={label}")
    return ratings


__all__ = ["merge_ratings", "select_latest"]
