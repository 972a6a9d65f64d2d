"""Resolution outcomes for duplicated packages."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Resolved:
    """A single version every consumer can be pinned to."""

    version: str

    def to_dict(self) -> dict[str, object]:
        return {"status": "resolved", "version": self.version}


@dataclass(frozen=True, slots=True)
class Unresolvable:
    """No safe version exists; a human has to intervene."""

    reason: str
    versions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "status": "unresolvable",
            "reason": self.reason,
            "versions": list(self.versions),
        }


Outcome: TypeAlias = Resolved | Unresolvable


@dataclass(frozen=True)
class ResolutionRecord:
    """Outcome per duplicated package, written exactly once per package."""

    outcomes: Mapping[str, Outcome] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "outcomes", MappingProxyType(dict(self.outcomes)))

    def __len__(self) -> int:
        return len(self.outcomes)

    def __contains__(self, name: object) -> bool:
        return name in self.outcomes

    @property
    def resolved(self) -> dict[str, str]:
        return {
            name: outcome.version
            for name, outcome in self.outcomes.items()
            if isinstance(outcome, Resolved)
        }

    @property
    def unresolvable(self) -> frozenset[str]:
        return frozenset(
            name for name, outcome in self.outcomes.items() if isinstance(outcome, Unresolvable)
        )

    def reasons(self) -> dict[str, str]:
        return {
            name: outcome.reason
            for name, outcome in self.outcomes.items()
            if isinstance(outcome, Unresolvable)
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "resolved": self.resolved,
            "unresolvable": {name: self.outcomes[name].to_dict() for name in sorted(self.unresolvable)},
        }

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[tuple[str, Outcome]]) -> ResolutionRecord:
        collected: dict[str, Outcome] = {}
        for name, outcome in outcomes:
            if name in collected:
                raise ValueError(f"Resolution for {name} recorded twice")
            collected[name] = outcome
        return cls(outcomes=collected)
