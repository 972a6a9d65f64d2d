"""Lockfile, manifest and version range parsers."""
