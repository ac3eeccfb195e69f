"""Output naming and manifest files for batch runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from config import OUTPUT_SUFFIX, DEFAULT_MANIFEST_NAME

logger = logging.getLogger(__name__)


def add_suffix(filename: str | Path, suffix: str = OUTPUT_SUFFIX) -> Path:
    """Insert suffix before the last file extension.

    Examples:
        >>> add_suffix("out/name.png")
        PosixPath('out/name_wb.png')
        >>> add_suffix("archive.tar.gz").name
        'archive.tar_wb.gz'
    """
    path = Path(filename)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def output_path_for(source: str | Path, output_dir: str | Path) -> Path:
    """Path in output_dir where the processed copy of source is written."""
    return add_suffix(Path(output_dir) / Path(source).name)


def default_manifest_path(output_dir: str | Path) -> Path:
    return Path(output_dir) / DEFAULT_MANIFEST_NAME


def write_manifest(manifest_path: str | Path, output_paths: Iterable[str]) -> Path:
    """Write one path per line, creating the parent directory if needed."""
    manifest_path = Path(manifest_path)
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with manifest_path.open("w", encoding="utf-8") as handle:
        for path in output_paths:
            handle.write(f"{path}\n")
    return manifest_path


def read_manifest(manifest_path: str | Path) -> list[str]:
    """Read a manifest back as a list of paths, skipping blank lines."""
    with Path(manifest_path).open("r", encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]
