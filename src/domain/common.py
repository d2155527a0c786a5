"""Shared types for the ratings export."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

RatingMap = dict[int, int]
OrderKey = date | int | None


class Variant(str, Enum):
    """Which primary rating source an export is built from."""

    PUBLISHED = "published"
    LIVE = "live"

    @property
    def short_name(self) -> str:
        return "pub" if self is Variant.PUBLISHED else "live"


@dataclass(frozen=True)
class Player:
    """Active player snapshot used by the format emitters."""

    id: int
    last_name: str
    first_name: str
    gender: str | None = None
    dob: str | None = None
    club: str | None = None
    title: str | None = None
    fed: str | None = None


@dataclass(frozen=True)
class RatingEntry:
    """One historical rating row; ``order_key`` ranks rows for the same player."""

    player_id: int
    rating: int
    order_key: OrderKey = None


__all__ = ["OrderKey", "Player", "RatingEntry", "RatingMap", "Variant"]
