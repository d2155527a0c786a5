"""Load environment-scoped database credentials from a Rails ``database.yml``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from sqlalchemy.engine import URL

from domain.errors import ConfigError

ADAPTER_DRIVERS = {
    "mysql": "mysql+pymysql",
    "mysql2": "mysql+pymysql",
    "postgresql": "postgresql+psycopg",
    "sqlite3": "sqlite",
}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings for one environment section."""

    environment: str
    database: str
    username: str | None
    password: str | None = None
    adapter: str = "mysql2"
    host: str | None = None
    port: int | None = None

    def url(self) -> URL:
        try:
            drivername = ADAPTER_DRIVERS[self.adapter]
        except KeyError as exc:
            available = ", ".join(sorted(ADAPTER_DRIVERS))
            raise ConfigError(
                f"unsupported adapter '{self.adapter}' for {self.environment} environment "
                f"(expected one of: {available})"
            ) from exc

        if drivername == "sqlite":
            return URL.create(drivername, database=self.database)
        return URL.create(
            drivername,
            username=self.username,
            password=self.password,
            host=self.host or "localhost",
            port=self.port,
            database=self.database,
        )


def load_database_settings(config_path: Path, environment: str) -> DatabaseSettings:
    """Read and validate the section for ``environment`` in a database config file."""
    if not config_path.is_file():
        raise ConfigError(f"configuration file ({config_path}) does not exist")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"error reading configuration file ({config_path}): {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"data from {config_path} is not a mapping")

    section = raw.get(environment)
    if not isinstance(section, dict):
        raise ConfigError(f"no {environment} environment in {config_path}")

    return _parse_section(section, environment, config_path)


def _parse_section(section: dict[str, Any], environment: str, config_path: Path) -> DatabaseSettings:
    adapter = str(section.get("adapter") or "mysql2")

    database = section.get("database")
    if not database:
        raise ConfigError(f"no database for {environment} environment in {config_path}")

    username = section.get("username")
    if not username and adapter != "sqlite3":
        raise ConfigError(f"no username for {environment} environment in {config_path}")

    port_value = section.get("port")
    try:
        port = None if port_value is None else int(port_value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"invalid port {port_value!r} for {environment} environment in {config_path}"
        ) from exc

    password = section.get("password")
    return DatabaseSettings(
        environment=environment,
        database=str(database),
        username=None if username is None else str(username),
        password=None if password is None else str(password),
        adapter=adapter,
        host=section.get("host"),
        port=port,
    )


__all__ = ["ADAPTER_DRIVERS", "DatabaseSettings", "load_database_settings"]
