"""Read package.json and extract the override pins and peer dependencies."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import ManifestParseError
from ..models.manifest import ProjectManifest

_STRING_MAP = {"type": "object", "additionalProperties": {"type": "string"}}


def manifest_schema(overrides_field: str) -> dict[str, Any]:
    """Return the JSON schema the manifest must satisfy."""
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            overrides_field: _STRING_MAP,
            "peerDependencies": _STRING_MAP,
        },
    }


def _format_errors(errors: list) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def parse(text: str, overrides_field: str = "resolutions") -> ProjectManifest:
    """Validate manifest ``text`` and return its override and peer maps.

    Raises:
        ManifestParseError: If the text is not JSON or does not match the schema.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"Failed to read manifest JSON: {exc}") from exc

    validator = Draft202012Validator(manifest_schema(overrides_field))
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ManifestParseError("Manifest failed validation:\n" + _format_errors(errors))

    overrides = data.get(overrides_field)
    return ProjectManifest(
        document=data,
        overrides_field=overrides_field,
        overrides=dict(overrides) if overrides is not None else None,
        peer_dependencies=dict(data.get("peerDependencies") or {}),
    )


def load_manifest(path: Path, overrides_field: str = "resolutions") -> ProjectManifest:
    """Read and validate the manifest at ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestParseError(f"Failed to read manifest {path}: {exc}") from exc
    return parse(text, overrides_field)
