"""Read-only queries against the ratings application's player and rating tables."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    MetaData,
    String,
    Table,
    select,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.common import Player, RatingEntry
from domain.errors import QueryError

DEFAULT_PUBLISHED_CUTOFF = date(2011, 9, 1)

metadata = MetaData()

icu_players = Table(
    "icu_players",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("last_name", String(255)),
    Column("first_name", String(255)),
    Column("gender", String(1)),
    Column("dob", Date),
    Column("club", String(255)),
    Column("title", String(3)),
    Column("fed", String(3)),
    Column("deceased", Boolean, default=False),
    Column("master_id", Integer),
)

icu_ratings = Table(
    "icu_ratings",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("list", Date),
    Column("icu_id", Integer),
    Column("rating", Integer),
)

old_ratings = Table(
    "old_ratings",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("icu_id", Integer),
    Column("rating", Integer),
    Column("games", Integer),
)

tournaments = Table(
    "tournaments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255)),
    Column("stage", String(20)),
    Column("rorder", Integer),
)

players = Table(
    "players",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("tournament_id", Integer),
    Column("icu_id", Integer),
    Column("new_rating", Integer),
)


def fetch_players(session: Session) -> dict[int, Player]:
    """Fetch all living, unmerged players keyed by id."""
    statement = select(
        icu_players.c.id,
        icu_players.c.last_name,
        icu_players.c.first_name,
        icu_players.c.gender,
        icu_players.c.dob,
        icu_players.c.club,
        icu_players.c.title,
        icu_players.c.fed,
    ).where(
        icu_players.c.deceased.is_(False),
        icu_players.c.master_id.is_(None),
    )
    rows = _execute(session, statement, "players")

    result: dict[int, Player] = {}
    for row in rows:
        player_id = int(row["id"])
        result[player_id] = Player(
            id=player_id,
            last_name=row["last_name"] or "",
            first_name=row["first_name"] or "",
            gender=row["gender"] or None,
            dob=_optional_iso_date(row["dob"]),
            club=row["club"] or None,
            title=row["title"] or None,
            fed=row["fed"] or None,
        )
    return result


def fetch_published_ratings(
    session: Session,
    cutoff: date = DEFAULT_PUBLISHED_CUTOFF,
) -> list[RatingEntry]:
    """Fetch official list ratings issued on or after ``cutoff``, newest list first."""
    statement = (
        select(icu_ratings.c.icu_id, icu_ratings.c.rating, icu_ratings.c.list)
        .where(
            icu_ratings.c.list >= cutoff,
            icu_ratings.c.icu_id.is_not(None),
            icu_ratings.c.rating.is_not(None),
        )
        .order_by(icu_ratings.c.list.desc())
    )
    rows = _execute(session, statement, "published ratings")
    return [
        RatingEntry(player_id=int(row["icu_id"]), rating=int(row["rating"]), order_key=row["list"])
        for row in rows
    ]


def fetch_live_ratings(session: Session) -> list[RatingEntry]:
    """Fetch post-tournament ratings from rated tournaments, most recent tournament first."""
    statement = (
        select(players.c.icu_id, players.c.new_rating, tournaments.c.rorder)
        .select_from(players.join(tournaments, players.c.tournament_id == tournaments.c.id))
        .where(
            tournaments.c.stage == "rated",
            players.c.icu_id.is_not(None),
            players.c.new_rating.is_not(None),
        )
        .order_by(tournaments.c.rorder.desc())
    )
    rows = _execute(session, statement, "live ratings")
    return [
        RatingEntry(
            player_id=int(row["icu_id"]),
            rating=int(row["new_rating"]),
            order_key=None if row["rorder"] is None else int(row["rorder"]),
        )
        for row in rows
    ]


def fetch_legacy_ratings(session: Session) -> list[RatingEntry]:
    """Fetch the flat pre-system rating list."""
    statement = (
        select(old_ratings.c.icu_id, old_ratings.c.rating)
        .where(old_ratings.c.icu_id.is_not(None), old_ratings.c.rating.is_not(None))
        .order_by(old_ratings.c.id)
    )
    rows = _execute(session, statement, "old ratings")
    return [RatingEntry(player_id=int(row["icu_id"]), rating=int(row["rating"])) for row in rows]


def _execute(session: Session, statement, description: str):
    try:
        return session.execute(statement).mappings().all()
    except SQLAlchemyError as exc:
        raise QueryError(f"{description} database query failed: {exc}") from exc


def _optional_iso_date(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text_value = str(value).strip()
    return text_value or None


__all__ = [
    "DEFAULT_PUBLISHED_CUTOFF",
    "fetch_legacy_ratings",
    "fetch_live_ratings",
    "fetch_players",
    "fetch_published_ratings",
    "icu_players",
    "icu_ratings",
    "metadata",
    "old_ratings",
    "players",
    "tournaments",
]
