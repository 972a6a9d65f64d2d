"""Command line entrypoint for duplicate native package analysis.

Usage:
  rn-dedupe check [--root DIR] [--lockfile PATH_OR_URL] [--write] [--json]
  rn-dedupe resolve <package> <version1> <version2>
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .config import load_settings
from .core import analyze_project
from .errors import MalformedVersionError, RnDedupeError
from .models import Unresolvable
from .report import aggregate
from .resolver import resolve_pair
from .summary import render_summary

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 10

WARN_ONLY_ENV_VAR = "RN_DEDUPE_WARN_ONLY"


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rn-dedupe", description=__doc__.splitlines()[0])
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Analyze a project for duplicated native packages")
    check.add_argument("--root", type=Path, default=Path("."), help="Project root directory")
    check.add_argument(
        "--lockfile",
        type=str,
        default=None,
        help="Lockfile path (relative to the root) or http(s) URL",
    )
    check.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    check.add_argument(
        "--write",
        action="store_true",
        help="Write resolved versions to the manifest overrides",
    )
    check.add_argument(
        "--all-duplicates",
        action="store_true",
        help="Resolve every duplicated package, not only native ones",
    )
    check.add_argument("--json", action="store_true", help="Print the JSON report")
    check.add_argument(
        "--warn-only",
        action="store_true",
        help="Exit 0 even when action is needed",
    )

    resolve = subparsers.add_parser("resolve", help="Pick the newer of two versions")
    resolve.add_argument("package")
    resolve.add_argument("version1")
    resolve.add_argument("version2")

    return parser.parse_args(argv)


def _run_check(args: argparse.Namespace) -> int:
    root = args.root.resolve()
    settings = load_settings(root, args.config)
    result = analyze_project(
        root,
        settings,
        write=args.write,
        lockfile=args.lockfile,
        native_only=False if args.all_duplicates else None,
    )
    report = aggregate(result)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(render_summary(report), end="")

    if not result.action_needed or args.warn_only:
        return EXIT_OK
    warn_env = os.getenv(WARN_ONLY_ENV_VAR, "").strip().lower()
    if warn_env in {"1", "true", "yes", "y"}:
        return EXIT_OK
    return EXIT_FINDINGS


def _run_resolve(args: argparse.Namespace) -> int:
    try:
        outcome = resolve_pair(args.package, args.version1, args.version2)
    except MalformedVersionError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if isinstance(outcome, Unresolvable):
        print(f"{args.package} {outcome.reason}")
        return EXIT_FINDINGS

    print(f"{args.package}@{outcome.version}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "resolve":
            return _run_resolve(args)
        return _run_check(args)
    except RnDedupeError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
