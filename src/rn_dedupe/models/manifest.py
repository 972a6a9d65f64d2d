"""Project manifest view holding the override pins."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class ProjectManifest:
    """Validated ``package.json`` content.

    ``overrides`` is ``None`` when the manifest has no override field at all,
    which is distinct from an empty pin map.
    """

    document: Mapping[str, Any]
    overrides_field: str
    overrides: Mapping[str, str] | None = None
    peer_dependencies: Mapping[str, str] = field(default_factory=dict)

    def with_overrides(self, overrides: Mapping[str, str]) -> dict[str, Any]:
        """Return a copy of the document with the whole pin map replaced."""
        updated = dict(self.document)
        updated[self.overrides_field] = dict(overrides)
        return updated
