"""Error taxonomy for the ratings export; every error aborts the run."""

from __future__ import annotations


class ExportError(Exception):
    """Base class for fatal export failures."""


class ConfigError(ExportError):
    """The database configuration file is missing, malformed or incomplete."""


class DatabaseConnectionError(ExportError):
    """The database could not be reached."""


class QueryError(ExportError):
    """A player or rating query failed."""


class OutputError(ExportError):
    """An export file could not be created or written."""


class ArchiveError(ExportError):
    """A ZIP archive could not be written."""


__all__ = [
    "ArchiveError",
    "ConfigError",
    "DatabaseConnectionError",
    "ExportError",
    "OutputError",
    "QueryError",
]
