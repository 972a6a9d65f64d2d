"""Dotted numeric version comparison.

Versions are plain ``major.minor.patch`` style strings taken from the
lockfile. Comparison walks the segments of the first operand only; segments of
the second operand past that length are never examined, so ``compare(a, b)``
and ``compare(b, a)`` may look at different ranges. Exact ties keep the first
operand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from collections.abc import Sequence

from .errors import MalformedVersionError
from .models.resolution import Resolved, Unresolvable


_SEGMENT = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class MajorMismatch:
    """Two versions whose major segments differ; no safe merge exists."""

    left: str
    right: str

    def __str__(self) -> str:
        return f"major versions {self.left} and {self.right} are unresolvable"


def split_version(version: str) -> list[int]:
    parts: list[int] = []
    for segment in version.split("."):
        if not _SEGMENT.fullmatch(segment):
            raise MalformedVersionError(f"Invalid version {version!r}: segment {segment!r} is not numeric")
        parts.append(int(segment))
    return parts


def compare(a: str, b: str, break_on_major_version: bool = False) -> str | MajorMismatch:
    """Return the newer of ``a`` and ``b``, or ``MajorMismatch``.

    Raises:
        MalformedVersionError: If either version has a non-numeric segment.
    """
    a_parts = split_version(a)
    b_parts = split_version(b)

    if break_on_major_version and a_parts[0] != b_parts[0]:
        return MajorMismatch(a, b)

    for index, a_value in enumerate(a_parts):
        if index >= len(b_parts):
            continue
        if a_value > b_parts[index]:
            return a
        if a_value < b_parts[index]:
            return b

    return a


def newest_from_list(
    versions: Sequence[str],
    break_on_major_version: bool = True,
) -> Resolved | Unresolvable:
    """Fold :func:`compare` over ``versions`` from left to right.

    The first major mismatch stops the fold and the whole list is reported as
    unresolvable.
    """
    if not versions:
        raise ValueError("newest_from_list() requires at least one version")

    newest = versions[0]
    for candidate in versions[1:]:
        outcome = compare(newest, candidate, break_on_major_version=break_on_major_version)
        if isinstance(outcome, MajorMismatch):
            return Unresolvable(reason=str(outcome), versions=tuple(versions))
        newest = outcome

    return Resolved(newest)
