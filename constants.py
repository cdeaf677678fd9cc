"""Shared configuration constants for the application."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple

DEFAULT_TIMEOUT = 30
STORE_API_URL = os.getenv(
    "APPX_FETCH_STORE_API", "https://store.rg-adguard.net/api/GetFiles"
)
ALLOWED_DOMAIN = "microsoft.com"
DOWNLOAD_DIR = Path(os.getenv("APPX_FETCH_DOWNLOAD_DIR", "downloads"))
EXIT_DELAY = 5.0
CHUNK_SIZE = 64 * 1024
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

LISTING_ROW_SELECTOR = "table.tftable tr"
DEPENDENCY_SUFFIX = ".appx"
APPLICATION_SUFFIX = ".msixbundle"

ARCH_LABELS: Dict[Tuple[str, ...], str] = {
    ("amd64", "x86_64", "x64"): "x64",
    ("x86", "i386", "i486", "i586", "i686"): "x86",
    ("arm64", "aarch64"): "arm64",
}

_EXPORTED_NAMES = (
    "DEFAULT_TIMEOUT",
    "STORE_API_URL",
    "ALLOWED_DOMAIN",
    "DOWNLOAD_DIR",
    "EXIT_DELAY",
    "CHUNK_SIZE",
    "USER_AGENT",
    "LISTING_ROW_SELECTOR",
    "DEPENDENCY_SUFFIX",
    "APPLICATION_SUFFIX",
    "ARCH_LABELS",
)

__all__ = [name for name in _EXPORTED_NAMES if name in globals()]
