"""Merge resolutions into the manifest override map."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from collections.abc import Mapping

from .models.manifest import ProjectManifest
from .models.resolution import ResolutionRecord

logger = logging.getLogger(__name__)


def apply_resolutions(
    existing: Mapping[str, str] | None,
    record: ResolutionRecord,
) -> tuple[dict[str, str], bool]:
    """Return the merged pin map and whether it differs from ``existing``.

    Pins for packages outside ``record`` are kept. Unresolvable packages are
    never pinned. ``existing`` is left untouched.
    """
    changed = existing is None
    if changed:
        logger.info("No override map found, adding one")
    overrides = dict(existing or {})

    for name, version in record.resolved.items():
        if overrides.get(name) != version:
            overrides[name] = version
            changed = True

    return overrides, changed


def write_overrides(path: Path, manifest: ProjectManifest, overrides: Mapping[str, str]) -> None:
    """Replace the manifest's whole pin map and persist it atomically."""
    document = manifest.with_overrides(overrides)
    payload = json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        if path.exists():
            # mkstemp creates 0600 files
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Updated %s %s with resolved versions", path, manifest.overrides_field)
