"""Core analysis entrypoints.

This module wires the lockfile parser, resolver, native scanner, auditors and
writer together. It has no command-line concerns so it can be driven from the
CLI or from other tooling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import Settings, load_settings
from .errors import ManifestParseError
from .fetch import load_lockfile_text
from .hoisting import audit_hoisting, audit_peer_dependencies
from .models import (
    DuplicateSummary,
    NativeModuleReport,
    PackageVersionIndex,
    PeerDependencyIssue,
    ProjectManifest,
    ResolutionRecord,
)
from .parsers.package_json import load_manifest
from .parsers.yarn_lock import parse as parse_yarn_lock
from .resolver import find_duplicates, resolve
from .scanner import classify_all
from .writer import apply_resolutions, write_overrides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one run found, and what it did to the manifest."""

    root: Path
    index: PackageVersionIndex
    duplicates: DuplicateSummary
    native: NativeModuleReport
    native_duplicates: tuple[str, ...]
    targets: tuple[str, ...]
    resolution: ResolutionRecord
    peer_issues: tuple[PeerDependencyIssue, ...]
    manifest_changed: bool
    manifest_written: bool

    @property
    def action_needed(self) -> bool:
        return bool(self.targets or self.native.not_hoisted or self.peer_issues)


def _load_project_manifest(path: Path, settings: Settings, write: bool) -> ProjectManifest | None:
    if path.exists():
        return load_manifest(path, settings.overrides_field)
    if write:
        raise ManifestParseError(f"Manifest not found: {path}")
    logger.info("No manifest at %s; peer dependency checks are skipped", path)
    return None


def analyze_project(
    root: Path,
    settings: Settings | None = None,
    write: bool = False,
    lockfile: str | None = None,
    native_only: bool | None = None,
) -> AnalysisResult:
    """Analyze the project at ``root`` for duplicated native packages.

    Params:
        root: project directory holding the manifest and the install tree
        settings: run settings; loaded from ``root`` when omitted
        write: persist changed override pins to the manifest
        lockfile: path or URL overriding ``settings.lockfile``
        native_only: override ``settings.native_only``; when False every
            duplicated package is resolved, not only native ones

    The manifest is read and validated before anything else, so a broken
    manifest aborts the run before any write.
    """
    root = root.resolve()
    settings = settings or load_settings(root)
    if native_only is None:
        native_only = settings.native_only

    manifest_path = root / settings.manifest
    manifest = _load_project_manifest(manifest_path, settings, write)

    text = load_lockfile_text(lockfile or settings.lockfile, root)
    index = parse_yarn_lock(text)
    duplicates = find_duplicates(index)

    modules_root = root / settings.modules_dir
    flagged = classify_all(
        index.names,
        modules_root,
        extensions=settings.extensions,
        pattern=settings.signature,
        max_workers=settings.max_workers,
    )
    native_duplicates = tuple(name for name in duplicates.packages if name in flagged)
    native = NativeModuleReport(flagged=flagged, not_hoisted=audit_hoisting(flagged, modules_root))
    peer_issues = audit_peer_dependencies(
        flagged, manifest.peer_dependencies if manifest else {}, index
    )

    targets = native_duplicates if native_only else duplicates.packages
    resolution = resolve(targets, index, break_on_major_version=settings.break_on_major_version)

    changed = False
    written = False
    if targets:
        overrides, changed = apply_resolutions(manifest.overrides if manifest else None, resolution)
        if write and changed:
            write_overrides(manifest_path, manifest, overrides)
            written = True

    return AnalysisResult(
        root=root,
        index=index,
        duplicates=duplicates,
        native=native,
        native_duplicates=native_duplicates,
        targets=targets,
        resolution=resolution,
        peer_issues=peer_issues,
        manifest_changed=changed,
        manifest_written=written,
    )
