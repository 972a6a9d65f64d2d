"""Settings loader for duplicate analysis runs.

Reads optional settings from a JSON file and validates the structure. Every key
is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .scanner import DEFAULT_EXTENSIONS, DEFAULT_MAX_WORKERS, DEFAULT_SIGNATURE_PATTERN

DEFAULT_CONFIG_NAME = ".rn-dedupe.json"
CONFIG_PATH_ENV_VAR = "RN_DEDUPE_CONFIG"

# JSON key -> Settings attribute
_KEYS = {
    "lockfile": "lockfile",
    "manifest": "manifest",
    "modulesDir": "modules_dir",
    "overridesField": "overrides_field",
    "extensions": "extensions",
    "signaturePattern": "signature_pattern",
    "maxWorkers": "max_workers",
    "breakOnMajorVersion": "break_on_major_version",
    "nativeOnly": "native_only",
}
_ATTR_TO_KEY = {attr: key for key, attr in _KEYS.items()}


@dataclass(slots=True, frozen=True)
class Settings:
    """Validated settings for one analysis run."""

    lockfile: str = "yarn.lock"
    manifest: str = "package.json"
    modules_dir: str = "node_modules"
    overrides_field: str = "resolutions"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    signature_pattern: str = DEFAULT_SIGNATURE_PATTERN
    max_workers: int = DEFAULT_MAX_WORKERS
    break_on_major_version: bool = True
    native_only: bool = True

    def __post_init__(self) -> None:
        for attr in ("lockfile", "manifest", "modules_dir", "overrides_field"):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"'{_ATTR_TO_KEY[attr]}' must be a non-empty string")

        if not self.extensions or any(
            not isinstance(ext, str) or not ext for ext in self.extensions
        ):
            raise ConfigError("'extensions' must be a non-empty list of strings")

        try:
            re.compile(self.signature_pattern)
        except (re.error, TypeError) as exc:
            raise ConfigError(f"Invalid 'signaturePattern': {exc}") from exc

        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise ConfigError("'maxWorkers' must be an integer")
        if self.max_workers < 1:
            raise ConfigError("'maxWorkers' must be at least 1")

        for attr in ("break_on_major_version", "native_only"):
            if not isinstance(getattr(self, attr), bool):
                raise ConfigError(f"'{_ATTR_TO_KEY[attr]}' must be a boolean")

    @property
    def signature(self) -> re.Pattern[str]:
        return re.compile(self.signature_pattern)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a JSON object, rejecting unknown keys."""
        unknown = sorted(set(data) - set(_KEYS))
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, attr in _KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if attr == "extensions":
                if not isinstance(value, list):
                    raise ConfigError("'extensions' must be a list of strings")
                value = tuple(value)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[_ATTR_TO_KEY[f.name]] = list(value) if isinstance(value, tuple) else value
        return data


def _resolve_config_path(root: Path, path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the settings file path and whether it was explicitly requested.

    Priority:
    1. Explicit path argument
    2. RN_DEDUPE_CONFIG environment variable
    3. .rn-dedupe.json in the project root
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return root / DEFAULT_CONFIG_NAME, False


def load_settings(root: Path, path: Path | str | None = None) -> Settings:
    """Load and validate settings for the project at ``root``.

    Returns default settings when no file is requested and the default file
    does not exist.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path, explicit = _resolve_config_path(root, path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
