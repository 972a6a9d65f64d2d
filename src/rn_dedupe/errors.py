"""Exception hierarchy shared by the analysis pipeline."""

from __future__ import annotations


class RnDedupeError(RuntimeError):
    """Base error for failures that abort an analysis run."""


class ConfigError(RnDedupeError):
    """Raised when the settings file cannot be loaded or is invalid."""


class LockfileSourceError(RnDedupeError):
    """Raised when the lockfile cannot be read or fetched."""


class MalformedLockfileError(RnDedupeError):
    """Raised when a lockfile contains no parseable package entries."""


class MalformedVersionError(RnDedupeError, ValueError):
    """Raised when a version segment is not a non-negative integer."""


class ManifestParseError(RnDedupeError):
    """Raised when the project manifest is missing or not valid structured data."""


class ScanIOError(RnDedupeError):
    """Raised when an installed package directory cannot be read."""
