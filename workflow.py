"""End-to-end lookup, download and install of one store application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import requests

from constants import DEFAULT_TIMEOUT, DOWNLOAD_DIR, STORE_API_URL
from downloader import download_entry
from installer import Installer
from models import DownloadError, InstallError, ListingEntry, PackageBuckets
from store import (
    ListingParser,
    TableListingParser,
    classify,
    query_store,
    select_dependencies,
    validate_store_url,
)

__all__ = ["install_entry", "install_all", "run"]


def install_entry(
    entry: ListingEntry,
    *,
    session: requests.Session,
    installer: Installer,
    logger: logging.Logger,
    download_dir: Path = DOWNLOAD_DIR,
    timeout: float = DEFAULT_TIMEOUT,
) -> bool:
    """Download and install one entry; failures are logged, not raised."""
    print(f"Installing {entry.name}")
    try:
        path = download_entry(session, entry, download_dir, timeout=timeout)
        installer.install(path)
    except InstallError as exc:
        print(f"Install error: {exc.output}")
        logger.error("Install of %s failed: %s", entry.name, exc)
        return False
    except DownloadError as exc:
        logger.error("Download of %s failed: %s", entry.name, exc)
        return False

    print(f"Installed {entry.name}")
    return True


def install_all(entries: Iterable[ListingEntry], **kwargs) -> None:
    """Attempt every entry in order, independently of earlier failures."""
    for entry in entries:
        install_entry(entry, **kwargs)


def run(
    url: str,
    *,
    arch: str,
    session: requests.Session,
    installer: Installer,
    logger: logging.Logger,
    parser: Optional[ListingParser] = None,
    download_dir: Path = DOWNLOAD_DIR,
    timeout: float = DEFAULT_TIMEOUT,
    endpoint: str = STORE_API_URL,
    ring: Optional[str] = None,
    lang: Optional[str] = None,
) -> PackageBuckets:
    """Look up `url` on the mirror and install its packages.

    Dependencies are filtered by `arch`; application bundles are all
    installed. Raises InvalidStoreUrlError or StoreQueryError before any
    download starts.
    """
    store_url = validate_store_url(url)
    html = query_store(
        session, store_url, timeout=timeout, endpoint=endpoint, ring=ring, lang=lang
    )
    entries = (parser or TableListingParser()).parse(html)
    logger.info("Mirror listed %d files", len(entries))

    buckets = classify(entries)
    dependencies = select_dependencies(buckets.dependencies, arch)
    logger.info(
        "%d of %d dependencies match %r, %d application bundles",
        len(dependencies),
        len(buckets.dependencies),
        arch,
        len(buckets.applications),
    )

    options = dict(
        session=session,
        installer=installer,
        logger=logger,
        download_dir=download_dir,
        timeout=timeout,
    )
    install_all(dependencies, **options)
    install_all(buckets.applications, **options)
    return buckets
