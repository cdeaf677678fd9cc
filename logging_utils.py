"""Logging setup for the command-line tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

__all__ = ["configure_logging"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    also_console: bool = True,
) -> logging.Logger:
    """Attach console and optional file handlers to the root logger.

    Calling it again only updates the level; handlers are added once.
    Returns the logger the workflow should write to.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if not getattr(root, "_appx_fetch_configured", False):
        fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        handlers: List[logging.Handler] = []
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        if also_console:
            handlers.append(logging.StreamHandler())
        for h in handlers:
            h.setFormatter(fmt)
            root.addHandler(h)
        setattr(root, "_appx_fetch_configured", True)

    return logging.getLogger("appx_fetch")
