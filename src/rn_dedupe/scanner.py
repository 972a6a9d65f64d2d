"""Native bridge detection across installed packages.

Each package is classified independently by walking its installed directory
and searching source files for React Native bridge base classes. The walk is
fanned out over a bounded thread pool; results are only collected once every
task has finished.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from collections.abc import Iterable

from .discovery import iter_source_files, package_dir
from .errors import ScanIOError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "ts", "tsx", "kts", "java", "m", "h", "swift")
DEFAULT_SIGNATURE_PATTERN = r"ReactContextBaseJavaModule|RCTBridgeModule|ReactPackage|NativeModule"
DEFAULT_MAX_WORKERS = 8


def classify(
    name: str,
    modules_root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    pattern: re.Pattern[str] | str = DEFAULT_SIGNATURE_PATTERN,
) -> bool:
    """Return True when any source file of ``name`` matches ``pattern``.

    Raises:
        ScanIOError: If the package directory or one of its files cannot be read.
    """
    root = package_dir(modules_root, name)
    if root is None:
        logger.debug("%s is not installed under %s", name, modules_root)
        return False

    signature = re.compile(pattern) if isinstance(pattern, str) else pattern
    try:
        for path in iter_source_files(root, extensions):
            content = path.read_text(encoding="utf-8", errors="replace")
            if signature.search(content):
                logger.debug("%s matched native signature in %s", name, path)
                return True
    except OSError as exc:
        raise ScanIOError(f"Failed to scan {name}: {exc}") from exc

    return False


def _classify_safely(
    name: str,
    modules_root: Path,
    extensions: tuple[str, ...],
    signature: re.Pattern[str],
) -> bool:
    try:
        return classify(name, modules_root, extensions, signature)
    except ScanIOError as exc:
        logger.warning("Treating %s as non-native: %s", name, exc)
        return False


def classify_all(
    names: Iterable[str],
    modules_root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    pattern: re.Pattern[str] | str = DEFAULT_SIGNATURE_PATTERN,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> frozenset[str]:
    """Return the subset of ``names`` that classify as native bridges."""
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    pending = tuple(dict.fromkeys(names))
    if not pending:
        return frozenset()

    exts = tuple(extensions)
    signature = re.compile(pattern) if isinstance(pattern, str) else pattern
    results: dict[str, bool] = {}

    with ThreadPoolExecutor(max_workers=min(max_workers, len(pending))) as executor:
        future_to_name = {
            executor.submit(_classify_safely, name, modules_root, exts, signature): name
            for name in pending
        }
        for future in as_completed(future_to_name):
            results[future_to_name[future]] = future.result()

    flagged = frozenset(name for name, is_native in results.items() if is_native)
    logger.info("Flagged %d of %d packages as native bridges", len(flagged), len(pending))
    return flagged
