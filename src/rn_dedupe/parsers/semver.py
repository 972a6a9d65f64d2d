"""Minimal semver range handling built atop packaging.version.

Used to check installed versions against ``peerDependencies`` ranges.

Supported expressions:
- exact versions (e.g., "1.2.3")
- wildcards "*", "x" and the empty string
- caret ranges ^x.y.z → >=x.y.z,<x+1.0.0 (or <0.y+1.0 when x is 0)
- tilde ranges ~x.y.z → >=x.y.z,<x.y+1.0
- basic comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- hyphen ranges "1.0.0 - 2.0.0" (inclusive on both ends)
- alternatives joined by "||"
"""

from __future__ import annotations


from packaging.version import Version

_WILDCARDS = {"", "*", "x", "X"}


def _parse_version(v: str) -> Version:
    return Version(v.strip().lstrip("v"))


def _next_major(v: Version) -> Version:
    return Version(f"{v.major + 1}.0.0")


def _next_minor(v: Version) -> Version:
    return Version(f"{v.major}.{v.minor + 1}.0")


def _satisfies_comparator(v: Version, token: str) -> bool:
    if token.startswith(">="):
        return v >= _parse_version(token[2:])
    if token.startswith(">"):
        return v > _parse_version(token[1:])
    if token.startswith("<="):
        return v <= _parse_version(token[2:])
    if token.startswith("<"):
        return v < _parse_version(token[1:])
    if token.startswith("=="):
        return v == _parse_version(token[2:])
    if token.startswith("="):
        return v == _parse_version(token[1:])
    # treat as exact fallback
    return v == _parse_version(token)


def _satisfies_simple(v: Version, expr: str) -> bool:
    expr = expr.strip()

    if expr in _WILDCARDS:
        return True

    # caret ^x.y.z
    if expr.startswith("^"):
        base = _parse_version(expr[1:])
        upper = _next_major(base) if base.major > 0 else _next_minor(base)
        return base <= v < upper

    # tilde ~x.y.z
    if expr.startswith("~"):
        base = _parse_version(expr[1:])
        return base <= v < _next_minor(base)

    # hyphen range x.y.z - a.b.c
    if " - " in expr:
        low, high = expr.split(" - ", 1)
        return _parse_version(low) <= v <= _parse_version(high)

    # composite comparators like ">=1.0.0 <2.0.0" (space separated)
    return all(_satisfies_comparator(v, token) for token in expr.split())


def satisfies(installed: str, expr: str) -> bool:
    """Return True when ``installed`` falls inside the range ``expr``.

    Raises:
        packaging.version.InvalidVersion: If a version cannot be parsed.
    """
    v = _parse_version(installed)
    return any(_satisfies_simple(v, alternative) for alternative in expr.split("||"))
