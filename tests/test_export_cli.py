"""Tests for the export_ratings typer script."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "export_ratings.py"

runner = CliRunner()


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("export_ratings", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_help_lists_options(cli) -> None:
    result = runner.invoke(cli.app, ["-h"])
    assert result.exit_code == 0
    for option in ("--root", "--env", "--config", "--out-dir", "--db-url"):
        assert option in result.output


def test_export_with_db_url(cli, seeded_engine, db_url: str, tmp_path: Path) -> None:
    out_dir = tmp_path / "export"
    result = runner.invoke(cli.app, ["--db-url", db_url, "--out-dir", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert sorted(path.name for path in out_dir.iterdir()) == [
        "live.zip",
        "pub.zip",
        "swiss_manager_live.txt",
        "swiss_manager_pub.txt",
        "swiss_perfect_live.dbf",
        "swiss_perfect_pub.dbf",
    ]
    assert "players=3" in result.output
    assert "finish_time=" in result.output


def test_export_reads_database_yml_under_root(
    cli, seeded_engine, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    rails_root = tmp_path / "app"
    (rails_root / "config").mkdir(parents=True)
    (rails_root / "config" / "database.yml").write_text(
        "production:\n"
        "  adapter: sqlite3\n"
        f"  database: {tmp_path / 'ratings.sqlite3'}\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, ["-r", str(rails_root), "-e", "production"])

    assert result.exit_code == 0, result.output
    assert (rails_root / "tmp" / "pub.zip").is_file()
    assert (rails_root / "tmp" / "live.zip").is_file()


def test_missing_config_exits_non_zero(cli, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(cli.app, ["-c", "config/missing.yml"])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_bad_root_exits_non_zero(cli, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["--root", str(tmp_path / "nowhere")])
    assert result.exit_code == 1
    assert "cannot cd to" in result.output


def test_invalid_db_url_exits_non_zero(cli, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["--db-url", "not a url", "--out-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "invalid database URL" in result.output


def test_missing_driver_exits_non_zero(cli, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_driver(url):
        raise ModuleNotFoundError("No module named 'pymysql'")

    monkeypatch.setattr(cli, "create_db_engine", _no_driver)
    result = runner.invoke(cli.app, ["--db-url", "mysql+pymysql://u@localhost/r", "--out-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "database driver not installed" in result.output
