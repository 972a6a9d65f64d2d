"""Native bridge scan results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NativeModuleReport:
    """Packages flagged as native bridges and those missing from the root install."""

    flagged: frozenset[str]
    not_hoisted: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.not_hoisted <= self.flagged:
            raise ValueError("Unhoisted packages must be a subset of flagged packages")

    def to_dict(self) -> dict[str, object]:
        return {
            "flagged": sorted(self.flagged),
            "notHoisted": sorted(self.not_hoisted),
        }


@dataclass(frozen=True)
class PeerDependencyIssue:
    """Installed versions of a package that miss the project's declared peer range."""

    package: str
    declared: str
    installed: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.installed:
            raise ValueError("A peer dependency issue needs at least one installed version")

    def to_dict(self) -> dict[str, object]:
        return {
            "package": self.package,
            "declared": self.declared,
            "installed": list(self.installed),
        }
