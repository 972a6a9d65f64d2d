"""Human-readable summary rendering for analysis reports."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a plain-text summary of an aggregated report."""
    totals = report.get("totals", {})

    lines = []
    lines.append(
        f"Found {totals.get('duplicates', 0)} duplicate package versions "
        f"out of {totals.get('packages', 0)}"
    )

    if not report.get("actionNeeded"):
        lines.append("No action needed: no duplicated native packages found.")
        return "\n".join(lines) + "\n"

    not_hoisted = report.get("notHoisted") or []
    if not_hoisted:
        lines.append("")
        lines.append("Native packages not found in the root install, should these be installed?")
        lines.extend(f"  - {name}" for name in not_hoisted)

    native_duplicates = report.get("nativeDuplicates") or []
    if native_duplicates:
        lines.append("")
        lines.append("Duplicated versions of the following native packages:")
        lines.extend(f"  - {name}" for name in native_duplicates)

    resolved = report.get("resolved") or {}
    if resolved:
        lines.append("")
        lines.append("Resolved versions:")
        lines.extend(f"  - {name}: {version}" for name, version in sorted(resolved.items()))

    unresolvable = report.get("unresolvable") or {}
    if unresolvable:
        lines.append("")
        lines.append("warning: these packages cannot be resolved automatically:")
        lines.extend(f"  - {name}: {reason}" for name, reason in sorted(unresolvable.items()))
        lines.append("Use `yarn why <package>` to understand why they are required.")

    peer_issues = report.get("peerIssues") or []
    if peer_issues:
        lines.append("")
        lines.append("Installed versions outside the declared peer dependency range:")
        for issue in peer_issues:
            installed = ", ".join(issue.get("installed", []))
            lines.append(f"  - {issue.get('package')} {issue.get('declared')}: {installed}")

    lines.append("")
    if report.get("manifestWritten"):
        lines.append("Updated manifest overrides; re-run yarn to update the install tree.")
    elif report.get("manifestChanged"):
        lines.append("Manifest overrides are out of date; re-run with --write to update them.")
    else:
        lines.append("Manifest overrides already up to date.")

    return "\n".join(lines) + "\n"
