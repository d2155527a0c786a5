#!/usr/bin/env python3
"""Export the latest published and live ratings for Swiss Perfect and Swiss Manager.

Examples:
  scripts/export_ratings.py --root /var/apps/ratings/current
  scripts/export_ratings.py --env production --out-dir /var/apps/ratings/shared/export
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from sqlalchemy.exc import SQLAlchemyError

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import check_connection, create_db_engine, create_session_factory
from domain.config import load_database_settings
from domain.errors import DatabaseConnectionError, ExportError, OutputError
from domain.pipeline import run_export
from repositories.federation import DEFAULT_PUBLISHED_CUTOFF

DEFAULT_ENVIRONMENT = "development"
DEFAULT_CONFIG = Path("config/database.yml")
DEFAULT_OUT_DIR = Path("tmp")

app = typer.Typer(
    add_completion=False,
    help="Export latest ratings to legacy tournament-software files.",
)


def export_ratings(
    *,
    root: Path | None,
    environment: str,
    config: Path,
    out_dir: Path,
    db_url: str | None,
    published_cutoff: datetime,
) -> None:
    """Resolve the database, run the export and report timings."""
    if root is not None:
        try:
            os.chdir(root)
        except OSError as exc:
            raise ExportError(f"cannot cd to {root}: {exc}") from exc

    typer.echo(f"start_time={datetime.now():%Y-%m-%d %H:%M:%S}")

    url = db_url or load_database_settings(config, environment).url()
    try:
        engine = create_db_engine(url)
    except SQLAlchemyError as exc:
        raise DatabaseConnectionError(f"invalid database URL: {exc}") from exc
    except ImportError as exc:
        raise DatabaseConnectionError(f"database driver not installed: {exc}") from exc
    try:
        check_connection(engine)

        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"cannot create output directory {out_dir}: {exc}") from exc

        summary = run_export(
            session_factory=create_session_factory(engine),
            output_dir=out_dir,
            published_cutoff=published_cutoff.date(),
            echo=typer.echo,
        )
    finally:
        engine.dispose()

    for export in summary.variants:
        typer.echo(
            f"completed variant={export.variant.value} "
            f"players={summary.players} rated_players={export.rated_players} "
            f"archive={export.archive_file}"
        )
    typer.echo(f"finish_time={datetime.now():%Y-%m-%d %H:%M:%S}")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def export(
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Rails root directory (default: current directory)."),
    ] = None,
    environment: Annotated[
        str,
        typer.Option("--env", "-e", help="Environment section of the database config."),
    ] = DEFAULT_ENVIRONMENT,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Database config file, relative to the root."),
    ] = DEFAULT_CONFIG,
    out_dir: Annotated[
        Path,
        typer.Option("--out-dir", "-f", help="Output directory for the export files."),
    ] = DEFAULT_OUT_DIR,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL; overrides --env and --config."),
    ] = None,
    published_cutoff: Annotated[
        datetime,
        typer.Option(
            "--published-cutoff",
            formats=["%Y-%m-%d"],
            help="Ignore published lists issued before this date.",
        ),
    ] = datetime.combine(DEFAULT_PUBLISHED_CUTOFF, datetime.min.time()),
) -> None:
    """Write swiss_perfect_*.dbf, swiss_manager_*.txt and a ZIP per variant."""
    try:
        export_ratings(
            root=root,
            environment=environment,
            config=config,
            out_dir=out_dir,
            db_url=db_url,
            published_cutoff=published_cutoff,
        )
    except ExportError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
