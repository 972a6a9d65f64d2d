"""Duplicate detection and version resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import MalformedVersionError
from .models.package_index import DuplicateSummary, PackageVersionIndex
from .models.resolution import Outcome, ResolutionRecord, Unresolvable
from .versions import newest_from_list

logger = logging.getLogger(__name__)


def find_duplicates(index: PackageVersionIndex) -> DuplicateSummary:
    """Return the packages recorded with more than one version."""
    duplicates = tuple(name for name in index if len(index.versions_of(name)) > 1)
    logger.info(
        "Found %d duplicate package versions out of %d", len(duplicates), len(index)
    )
    return DuplicateSummary(packages=duplicates, total_packages=len(index))


def _resolve_one(name: str, versions: tuple[str, ...], break_on_major_version: bool) -> Outcome:
    try:
        outcome = newest_from_list(versions, break_on_major_version=break_on_major_version)
    except MalformedVersionError as exc:
        logger.warning("%s cannot be resolved: %s", name, exc)
        return Unresolvable(reason=str(exc), versions=versions)

    if isinstance(outcome, Unresolvable):
        logger.warning("%s %s", name, outcome.reason)
    return outcome


def resolve(
    duplicates: Iterable[str],
    index: PackageVersionIndex,
    break_on_major_version: bool = True,
) -> ResolutionRecord:
    """Pick one version per duplicated package.

    Packages whose versions cross a major boundary, or carry a version that is
    not purely numeric, are recorded as unresolvable instead of pinned.
    """
    outcomes: list[tuple[str, Outcome]] = []
    for name in dict.fromkeys(duplicates):
        versions = index.versions_of(name)
        if len(versions) < 2:
            continue
        outcomes.append((name, _resolve_one(name, versions, break_on_major_version)))
    return ResolutionRecord.from_outcomes(outcomes)


def resolve_pair(
    name: str,
    first: str,
    second: str,
    break_on_major_version: bool = True,
) -> Outcome:
    """Answer a direct two-version conflict query for ``name``.

    Raises:
        MalformedVersionError: If either version is not numeric.
    """
    outcome = newest_from_list([first, second], break_on_major_version=break_on_major_version)
    if isinstance(outcome, Unresolvable):
        logger.info("%s %s", name, outcome.reason)
    return outcome
