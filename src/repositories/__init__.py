"""Database repository helpers."""

from repositories.federation import (
    DEFAULT_PUBLISHED_CUTOFF,
    fetch_legacy_ratings,
    fetch_live_ratings,
    fetch_players,
    fetch_published_ratings,
)

__all__ = [
    "DEFAULT_PUBLISHED_CUTOFF",
    "fetch_legacy_ratings",
    "fetch_live_ratings",
    "fetch_players",
    "fetch_published_ratings",
]
