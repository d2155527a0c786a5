"""Shared fixtures: a file-backed SQLite copy of the ratings schema."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from db import create_db_engine, create_session_factory
from repositories.federation import (
    icu_players,
    icu_ratings,
    metadata,
    old_ratings,
    players,
    tournaments,
)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'ratings.sqlite3'}"


@pytest.fixture()
def engine(db_url: str) -> Iterator[Engine]:
    engine = create_db_engine(db_url)
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seeded_engine(engine: Engine) -> Engine:
    """Three active players, one deceased and one merged duplicate."""
    with engine.begin() as connection:
        connection.execute(
            icu_players.insert(),
            [
                dict(id=7, last_name="Abbou", first_name="Meriem", gender="F",
                     dob=date(1990, 5, 3), club=None, title="WFM", fed="ALG",
                     deceased=False, master_id=None),
                dict(id=12345, last_name="Connolly", first_name="Suzanne", gender="F",
                     dob=date(1963, 2, 1), club="Wanderers", title=None, fed="IRL",
                     deceased=False, master_id=None),
                dict(id=2500, last_name="Orr", first_name="Mark J L", gender="M",
                     dob=None, club="Bray", title="IM", fed="IRL",
                     deceased=False, master_id=None),
                dict(id=90, last_name="Alekhine", first_name="Alexander", gender="M",
                     dob=date(1892, 10, 31), club=None, title="GM", fed="FRA",
                     deceased=True, master_id=None),
                dict(id=91, last_name="Orr", first_name="Mark", gender="M",
                     dob=None, club=None, title=None, fed="IRL",
                     deceased=False, master_id=2500),
            ],
        )
        connection.execute(
            icu_ratings.insert(),
            [
                dict(id=1, list=date(2011, 9, 1), icu_id=7, rating=1990),
                dict(id=2, list=date(2012, 1, 1), icu_id=7, rating=2005),
                dict(id=3, list=date(2012, 1, 1), icu_id=2500, rating=2260),
                dict(id=4, list=date(2010, 1, 1), icu_id=2500, rating=1000),
                dict(id=5, list=date(2010, 5, 1), icu_id=12345, rating=1700),
            ],
        )
        connection.execute(
            old_ratings.insert(),
            [
                dict(id=1, icu_id=7, rating=1500, games=10),
                dict(id=2, icu_id=12345, rating=1800, games=25),
            ],
        )
        connection.execute(
            tournaments.insert(),
            [
                dict(id=1, name="Bunratty", stage="rated", rorder=2),
                dict(id=2, name="Kilkenny", stage="rated", rorder=1),
                dict(id=3, name="Cork Congress", stage="ready", rorder=3),
            ],
        )
        connection.execute(
            players.insert(),
            [
                dict(id=1, tournament_id=1, icu_id=7, new_rating=2020),
                dict(id=2, tournament_id=2, icu_id=7, new_rating=1999),
                dict(id=3, tournament_id=3, icu_id=2500, new_rating=2400),
                dict(id=4, tournament_id=1, icu_id=None, new_rating=1200),
            ],
        )
    return engine


@pytest.fixture()
def session_factory(seeded_engine: Engine):
    return create_session_factory(seeded_engine)
