"""Lockfile source resolution: local path or remote URL."""

from __future__ import annotations

import logging
from pathlib import Path

import requests
from requests import Response
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from .errors import LockfileSourceError

logger = logging.getLogger(__name__)

USER_AGENT = "rn-dedupe (+https://pypi.org/project/rn-dedupe/)"
FETCH_TIMEOUT = 30


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@retry(
    reraise=True,
    retry=retry_if_exception_type(requests.RequestException),
    stop=stop_after_attempt(3),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.DEBUG),
)
def _http_get(url: str) -> Response:
    return requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=FETCH_TIMEOUT)


def fetch_lockfile(url: str) -> str:
    """Return the lockfile text served at ``url``.

    Connection errors are retried; an error status is not.
    """
    logger.debug("Fetching lockfile from %s", url)
    try:
        response = _http_get(url)
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise LockfileSourceError(f"Lockfile request to {url} was rejected: {exc}") from exc
    except requests.RequestException as exc:
        raise LockfileSourceError(f"Failed to fetch lockfile {url}: {exc}") from exc

    return response.text


def load_lockfile_text(source: str, root: Path) -> str:
    """Return lockfile text from a URL or a path (relative to ``root``)."""
    if is_remote(source):
        return fetch_lockfile(source)

    path = Path(source)
    if not path.is_absolute():
        path = root / path
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LockfileSourceError(f"Failed to read lockfile {path}: {exc}") from exc
