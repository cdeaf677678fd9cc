"""Fetch listed packages to local storage."""

from __future__ import annotations

import logging
from pathlib import Path, PureWindowsPath

import requests

from constants import CHUNK_SIZE, DEFAULT_TIMEOUT, DOWNLOAD_DIR
from models import DownloadError, ListingEntry

__all__ = ["download_entry"]

logger = logging.getLogger(__name__)


def download_entry(
    session: requests.Session,
    entry: ListingEntry,
    download_dir: Path = DOWNLOAD_DIR,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """Download `entry` into `download_dir` and return the written path.

    Names carrying a directory part (either slash) are rejected so the file
    always lands directly inside `download_dir`. The HTTP status is checked
    before the target is opened, so a failed request leaves no file behind.
    A transfer interrupted mid-stream leaves the partial file in place. An
    existing file with the same name is replaced.
    """
    logger.info("Starting download for %s", entry.name)
    if entry.name in ("", ".", "..") or PureWindowsPath(entry.name).name != entry.name:
        raise DownloadError(f"Refusing unsafe file name {entry.name!r}")
    try:
        download_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DownloadError(f"Dir error: {exc}") from exc

    file_path = download_dir / entry.name
    try:
        with session.get(entry.url, stream=True, timeout=timeout) as resp:
            if resp.status_code != 200:
                raise DownloadError(
                    f"received non-OK HTTP status {resp.status_code} for {entry.url}"
                )
            with file_path.open("wb") as fh:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
    except requests.exceptions.RequestException as exc:
        raise DownloadError(f"Download error: {exc}") from exc
    except OSError as exc:
        raise DownloadError(f"Write error for {file_path}: {exc}") from exc

    logger.info("Downloaded: %s", file_path)
    return file_path
