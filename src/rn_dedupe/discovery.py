"""Installed package directory and source file discovery."""

from __future__ import annotations

from pathlib import Path
from collections.abc import Iterable, Iterator


def package_dir(modules_root: Path, name: str) -> Path | None:
    """Return the installed directory of ``name`` under ``modules_root``.

    Returns None when the package is not installed there. Scoped names map to
    ``@scope/name`` sub-directories.
    """
    parts = name.split("/")
    if any(part in {"", ".", ".."} for part in parts):
        return None
    path = modules_root.joinpath(*parts)
    if not path.is_dir():
        return None
    return path


def iter_source_files(root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield files below ``root`` whose suffix is in ``extensions``.

    Hidden files and directories (dot-prefixed) are skipped.
    """
    suffixes = {f".{ext.lstrip('.')}" for ext in extensions}

    def should_skip(p: Path) -> bool:
        return any(part.startswith(".") for part in p.parts)

    for path in root.rglob("*"):
        if path.suffix not in suffixes:
            continue
        if should_skip(path.relative_to(root)):
            continue
        if not path.is_file():
            continue
        yield path
