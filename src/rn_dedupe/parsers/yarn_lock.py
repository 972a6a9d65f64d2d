"""Parse yarn.lock into a package version index."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import LockfileSourceError, MalformedLockfileError
from ..models.package_index import PackageVersionIndex

logger = logging.getLogger(__name__)

_QUOTES = "\"'"
_METADATA_BLOCK = "__metadata"


def _package_name(header: str) -> str:
    """Return the package name of a block header like ``"@scope/pkg@^1.0.0":``."""
    cleaned = header[:-1]
    for quote in _QUOTES:
        cleaned = cleaned.replace(quote, "")
    segments = cleaned.split("@")
    if segments[0] == "" and len(segments) > 1:
        # leading @ is a scoped package
        return f"@{segments[1]}"
    return segments[0].strip()


def _is_header(line: str) -> bool:
    return line.endswith(":") and "dependencies" not in line.lower()


def parse(text: str) -> PackageVersionIndex:
    """Return the package version index described by yarn lockfile ``text``.

    Handles both the classic (``version "1.2.3"``) and berry
    (``version: 1.2.3``) layouts. Version lines outside a package block are
    dropped.

    Raises:
        MalformedLockfileError: If no package block is found.
    """
    packages: dict[str, dict[str, None]] = {}
    current_name: str | None = None
    # berry nests maps like bin: under each entry; only column 0 starts a block there
    berry = False

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if _is_header(line) and not (berry and raw[:1].isspace()):
            name = _package_name(line)
            if name == _METADATA_BLOCK:
                berry = True
            if not name or name == _METADATA_BLOCK:
                current_name = None
                continue
            current_name = name
            packages.setdefault(name, {})
            continue

        tokens = "".join(ch for ch in line if ch not in _QUOTES).split()
        if tokens[0].rstrip(":") == "version":
            if current_name is None or len(tokens) < 2:
                logger.debug("Dropping version line %d outside a package block: %s", lineno, line)
                continue
            packages[current_name][tokens[1]] = None

    if not packages:
        raise MalformedLockfileError("Lockfile contains no package entries")

    return PackageVersionIndex(packages={name: tuple(versions) for name, versions in packages.items()})


def parse_file(path: Path) -> PackageVersionIndex:
    """Read and parse a yarn lockfile from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LockfileSourceError(f"Failed to read lockfile {path}: {exc}") from exc
    return parse(text)
