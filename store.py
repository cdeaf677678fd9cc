"""Mirror lookup, listing parsing and package classification."""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from constants import (
    ALLOWED_DOMAIN,
    DEFAULT_TIMEOUT,
    LISTING_ROW_SELECTOR,
    STORE_API_URL,
    USER_AGENT,
)
from models import (
    InvalidStoreUrlError,
    ListingEntry,
    PackageBuckets,
    StoreQueryError,
)

__all__ = [
    "build_session",
    "validate_store_url",
    "query_store",
    "ListingParser",
    "TableListingParser",
    "parse_listing",
    "classify",
    "select_dependencies",
]


def build_session() -> requests.Session:
    """Create a `requests.Session` carrying the browser-like headers."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept-Language": "en-US,en;q=0.9",
    })
    return session


def validate_store_url(url: str) -> str:
    """Return the stripped URL, or raise if it is not a store link."""
    candidate = url.strip()
    if ALLOWED_DOMAIN not in candidate:
        raise InvalidStoreUrlError(
            f"Invalid URL. Must be a Microsoft Store link: {candidate!r}"
        )
    return candidate


def query_store(
    session: requests.Session,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    endpoint: str = STORE_API_URL,
    ring: Optional[str] = None,
    lang: Optional[str] = None,
) -> str:
    """Ask the mirror for the download table of a store URL."""
    store_url = validate_store_url(url)
    form = {"type": "url", "url": store_url}
    if ring:
        form["ring"] = ring
    if lang:
        form["lang"] = lang

    try:
        resp = session.post(endpoint, data=form, timeout=timeout)
    except requests.exceptions.Timeout as exc:
        raise StoreQueryError(f"Store lookup timed out: {exc}") from exc
    except requests.exceptions.RequestException as exc:
        raise StoreQueryError(f"Request error: {exc}") from exc

    if resp.status_code != 200:
        raise StoreQueryError(f"Store lookup returned HTTP {resp.status_code}")
    return resp.text


class ListingParser(Protocol):
    """Turns a mirror response page into listing entries."""

    def parse(self, html: str) -> List[ListingEntry]:
        ...


def _cell_text(cells: List[Tag], index: int) -> str:
    if index >= len(cells):
        return ""
    return cells[index].get_text()


def _cell_href(cells: List[Tag], index: int) -> str:
    if index >= len(cells):
        return ""
    anchor = cells[index].find("a")
    if not isinstance(anchor, Tag):
        return ""
    href = anchor.get("href")
    return href if isinstance(href, str) else ""


class TableListingParser:
    """Scrape the mirror's ``tftable`` result table with BeautifulSoup.

    The first row is the header. Rows with missing cells or links still
    produce an entry, with empty strings in place of the missing values.
    """

    def __init__(self, selector: str = LISTING_ROW_SELECTOR) -> None:
        self.selector = selector

    def parse(self, html: str) -> List[ListingEntry]:
        soup = BeautifulSoup(html, "html.parser")
        entries: List[ListingEntry] = []
        for row in soup.select(self.selector)[1:]:
            cells = row.find_all("td")
            entries.append(
                ListingEntry(
                    name=_cell_text(cells, 0),
                    url=_cell_href(cells, 0),
                    expire=_cell_text(cells, 1),
                    hash=_cell_text(cells, 2),
                )
            )
        return entries


def parse_listing(html: str) -> List[ListingEntry]:
    """Parse the mirror response with the default table parser."""
    return TableListingParser().parse(html)


def classify(entries: Iterable[ListingEntry]) -> PackageBuckets:
    """Split entries into dependency and application buckets by suffix."""
    buckets = PackageBuckets()
    for entry in entries:
        buckets.add(entry)
    return buckets


def select_dependencies(
    entries: Iterable[ListingEntry], arch: str
) -> List[ListingEntry]:
    """Keep the entries built for `arch`; an empty label keeps nothing."""
    if not arch:
        return []
    return [entry for entry in entries if arch in entry.name.lower()]
