"""rn-dedupe core package.

Detects React Native bridge packages installed in more than one version and
pins them to a single version through the manifest override map.
"""

__all__ = [
    "core",
]
