#!/usr/bin/env python3
"""Command-line entry point: download and install a Microsoft Store app."""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from arch import detect_arch
from constants import DEFAULT_TIMEOUT, DOWNLOAD_DIR, EXIT_DELAY, STORE_API_URL
from installer import get_installer
from logging_utils import configure_logging
from models import AppxFetchError
from store import build_session, validate_store_url
from workflow import run


def _prompt_url() -> str:
    try:
        return input("Enter Microsoft Store app URL: ")
    except EOFError:
        # closed stdin reads as an empty answer
        print()
        return ""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Download a Microsoft Store app and its dependencies, then install them."
    )
    p.add_argument("--url", "-u", help="Store URL (prompted for when omitted).")
    p.add_argument("--download-dir", "-d", type=Path, default=DOWNLOAD_DIR,
                   help=f"Where packages are saved (default: {DOWNLOAD_DIR}).")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT}).")
    p.add_argument("--endpoint", default=STORE_API_URL, help="Mirror lookup endpoint.")
    p.add_argument("--ring", help="Release channel sent to the mirror (e.g. RP, Retail).")
    p.add_argument("--lang", help="Language sent to the mirror (e.g. en-US).")
    p.add_argument("--dry-run", action="store_true",
                   help="Download packages but only log the install command.")
    p.add_argument("--exit-delay", type=float, default=EXIT_DELAY,
                   help=f"Seconds to wait before exiting (default: {EXIT_DELAY}).")
    p.add_argument("--log-file", type=Path, help="Also write the log to this file.")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = configure_logging(
        logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file
    )

    arch = detect_arch()
    print(f"Detected architecture: {arch}")

    url = args.url if args.url is not None else _prompt_url()

    try:
        validate_store_url(url)
        installer = get_installer(dry_run=args.dry_run)
    except AppxFetchError as exc:
        print(exc)
        return 1

    session = build_session()
    try:
        run(
            url,
            arch=arch,
            session=session,
            installer=installer,
            logger=logger,
            download_dir=args.download_dir,
            timeout=args.timeout,
            endpoint=args.endpoint,
            ring=args.ring,
            lang=args.lang,
        )
    except AppxFetchError as exc:
        print(exc)
        return 1
    finally:
        session.close()

    print("Finish")
    time.sleep(args.exit_delay)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
