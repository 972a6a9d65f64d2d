"""Report aggregation and JSON-friendly output."""

from __future__ import annotations

from typing import Any

from .core import AnalysisResult


def aggregate(result: AnalysisResult) -> dict[str, Any]:
    """Flatten an analysis result into a JSON-serialisable report.

    Unresolvable packages are always included so a human can follow up on
    them.
    """

    resolution = result.resolution
    report: dict[str, Any] = {
        "version": "1",
        "actionNeeded": result.action_needed,
        "totals": {
            "packages": result.duplicates.total_packages,
            "duplicates": result.duplicates.count,
            "native": len(result.native.flagged),
            "nativeDuplicates": len(result.native_duplicates),
            "notHoisted": len(result.native.not_hoisted),
            "unresolvable": len(resolution.unresolvable),
        },
        "duplicates": list(result.duplicates.packages),
        "nativePackages": sorted(result.native.flagged),
        "nativeDuplicates": list(result.native_duplicates),
        "notHoisted": sorted(result.native.not_hoisted),
        "resolved": resolution.resolved,
        "unresolvable": resolution.reasons(),
        "peerIssues": [issue.to_dict() for issue in result.peer_issues],
        "manifestChanged": result.manifest_changed,
        "manifestWritten": result.manifest_written,
    }

    return report
