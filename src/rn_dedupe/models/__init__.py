"""Data models for the duplicate analysis pipeline."""

from __future__ import annotations

from .manifest import ProjectManifest
from .native_report import NativeModuleReport, PeerDependencyIssue
from .package_index import DuplicateSummary, PackageVersionIndex
from .resolution import Outcome, Resolved, ResolutionRecord, Unresolvable

__all__ = [
    "DuplicateSummary",
    "NativeModuleReport",
    "Outcome",
    "PackageVersionIndex",
    "PeerDependencyIssue",
    "ProjectManifest",
    "Resolved",
    "ResolutionRecord",
    "Unresolvable",
]
