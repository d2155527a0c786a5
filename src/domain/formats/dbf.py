"""Minimal dBASE III table writer for fixed character and integer columns."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path
from typing import Any

from domain.errors import OutputError
from domain.formats.fields import FieldKind, FieldSpec

DBASE_III = 0x03
HEADER_TERMINATOR = b"\x0d"
END_OF_FILE = b"\x1a"
ACTIVE_RECORD = b" "
MAX_FIELD_NAME = 10

_HEADER = struct.Struct("<BBBBIHH20x")
_FIELD_DESCRIPTOR = struct.Struct("<11sc4xBB14x")


def encode_header(fields: Sequence[FieldSpec], record_count: int, updated: date) -> bytes:
    header_length = _HEADER.size + _FIELD_DESCRIPTOR.size * len(fields) + len(HEADER_TERMINATOR)
    record_length = len(ACTIVE_RECORD) + sum(field.width for field in fields)
    parts = [
        _HEADER.pack(
            DBASE_III,
            updated.year - 1900,
            updated.month,
            updated.day,
            record_count,
            header_length,
            record_length,
        )
    ]
    for field in fields:
        name = field.name.encode("ascii")
        if len(name) > MAX_FIELD_NAME:
            raise ValueError(f"dBASE field name too long: {field.name!r}")
        parts.append(_FIELD_DESCRIPTOR.pack(name, field.kind.value.encode("ascii"), field.width, 0))
    parts.append(HEADER_TERMINATOR)
    return b"".join(parts)


def encode_value(field: FieldSpec, value: Any, encoding: str) -> bytes:
    """Encode one cell: numbers right-justified, text left-justified and cut to width."""
    if field.kind is FieldKind.NUMERIC:
        text = "" if value is None else str(int(value))
        if len(text) > field.width:
            raise ValueError(f"value {text} does not fit numeric field {field.name}({field.width})")
        return text.rjust(field.width).encode("ascii")

    text = "" if value is None else str(value)
    return text.encode(encoding, errors="replace")[: field.width].ljust(field.width, b" ")


def encode_record(fields: Sequence[FieldSpec], values: Sequence[Any], encoding: str) -> bytes:
    if len(values) != len(fields):
        raise ValueError(f"expected {len(fields)} values, got {len(values)}")
    cells = [encode_value(field, value, encoding) for field, value in zip(fields, values)]
    return ACTIVE_RECORD + b"".join(cells)


def write_dbf(
    path: Path,
    fields: Sequence[FieldSpec],
    rows: Iterable[Sequence[Any]],
    *,
    updated: date,
    encoding: str = "cp1252",
) -> int:
    """Write a complete table and return the number of bytes written."""
    try:
        records = [encode_record(fields, row, encoding) for row in rows]
        header = encode_header(fields, len(records), updated)
    except ValueError as exc:
        raise OutputError(f"cannot write file {path}: {exc}") from exc

    payload = b"".join([header, *records, END_OF_FILE])
    try:
        with path.open("wb") as file:
            file.write(payload)
    except OSError as exc:
        raise OutputError(f"cannot write file {path}: {exc}") from exc
    return len(payload)


__all__ = ["encode_header", "encode_record", "encode_value", "write_dbf"]
