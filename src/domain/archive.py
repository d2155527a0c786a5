"""Bundle one variant's export files into a flat ZIP archive."""

from __future__ import annotations

import zipfile
from collections.abc import Sequence
from pathlib import Path

from domain.common import Variant
from domain.errors import ArchiveError


def archive_path(variant: Variant, output_dir: Path) -> Path:
    return output_dir / f"{variant.short_name}.zip"


def archive(variant: Variant, files: Sequence[Path], output_dir: Path) -> Path:
    """Write ``<short_name>.zip`` with each file stored under its base name only."""
    target = archive_path(variant, output_dir)
    try:
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as bundle:
            for path in files:
                bundle.write(path, arcname=path.name)
        with zipfile.ZipFile(target) as bundle:
            bad_member = bundle.testzip()
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"couldn't write ZIP archive {target}: {exc}") from exc

    if bad_member is not None:
        raise ArchiveError(f"couldn't write ZIP archive {target}: {bad_member} is corrupt")
    return target


__all__ = ["archive", "archive_path"]
