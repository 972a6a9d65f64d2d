"""Package version index built from a lockfile."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType


@dataclass(frozen=True)
class PackageVersionIndex:
    """Immutable mapping of package name to the unique versions installed.

    Versions keep the order in which they were first seen in the lockfile so
    that resolution folds are reproducible between runs.
    """

    packages: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen: dict[str, tuple[str, ...]] = {}
        for name, versions in self.packages.items():
            if not name:
                raise ValueError("Package name must be non-empty")
            frozen[name] = tuple(dict.fromkeys(versions))
        object.__setattr__(self, "packages", MappingProxyType(frozen))

    def __len__(self) -> int:
        return len(self.packages)

    def __iter__(self) -> Iterator[str]:
        return iter(self.packages)

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.packages)

    def versions_of(self, name: str) -> tuple[str, ...]:
        """Return the versions recorded for ``name`` (empty when unknown)."""
        return self.packages.get(name, ())

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(versions) for name, versions in self.packages.items()}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> PackageVersionIndex:
        collected: dict[str, list[str]] = {}
        for name, version in pairs:
            collected.setdefault(name, []).append(version)
        return cls(packages=collected)


@dataclass(frozen=True)
class DuplicateSummary:
    """Packages installed in more than one version, in index order."""

    packages: tuple[str, ...]
    total_packages: int

    def __post_init__(self) -> None:
        if self.total_packages < len(self.packages):
            raise ValueError("Duplicate count cannot exceed the total package count")

    @property
    def count(self) -> int:
        return len(self.packages)

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def to_dict(self) -> dict[str, object]:
        return {
            "packages": list(self.packages),
            "duplicates": self.count,
            "total": self.total_packages,
        }
