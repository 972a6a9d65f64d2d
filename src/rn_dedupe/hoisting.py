"""Cross-check native packages against the root install and peer ranges."""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Iterable, Mapping

from packaging.version import InvalidVersion

from .discovery import package_dir
from .models.native_report import PeerDependencyIssue
from .models.package_index import PackageVersionIndex
from .parsers.semver import satisfies

logger = logging.getLogger(__name__)


def audit_hoisting(flagged: Iterable[str], modules_root: Path) -> frozenset[str]:
    """Return the flagged packages that are not installed at ``modules_root``."""
    missing = frozenset(name for name in flagged if package_dir(modules_root, name) is None)
    if missing:
        logger.info("%d native packages are not hoisted to %s", len(missing), modules_root)
    return missing


def audit_peer_dependencies(
    flagged: Iterable[str],
    peer_dependencies: Mapping[str, str],
    index: PackageVersionIndex,
) -> tuple[PeerDependencyIssue, ...]:
    """Report installed versions of flagged packages outside the declared peer range.

    Ranges or versions that cannot be evaluated are skipped.
    """
    issues: list[PeerDependencyIssue] = []
    for name in sorted(flagged):
        declared = peer_dependencies.get(name)
        if declared is None:
            continue
        try:
            offending = tuple(
                version for version in index.versions_of(name) if not satisfies(version, declared)
            )
        except InvalidVersion as exc:
            logger.info("Skipping peer range check for %s (%s): %s", name, declared, exc)
            continue
        if offending:
            issues.append(PeerDependencyIssue(package=name, declared=declared, installed=offending))
    return tuple(issues)
