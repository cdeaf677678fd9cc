"""Data structures and errors used across the application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple

from constants import APPLICATION_SUFFIX, DEPENDENCY_SUFFIX


class ListingEntry(NamedTuple):
    """One row of the mirror's download table."""

    name: str
    url: str
    expire: str
    hash: str


@dataclass
class PackageBuckets:
    """Listing entries split by package type, in source order."""

    dependencies: List[ListingEntry] = field(default_factory=list)
    applications: List[ListingEntry] = field(default_factory=list)

    def add(self, entry: ListingEntry) -> None:
        name = entry.name.lower()
        if name.endswith(DEPENDENCY_SUFFIX):
            self.dependencies.append(entry)
        if name.endswith(APPLICATION_SUFFIX):
            self.applications.append(entry)


class AppxFetchError(Exception):
    """Base class for every error raised by this package."""


class InvalidStoreUrlError(AppxFetchError):
    """The operator supplied something that is not a Microsoft Store link."""


class StoreQueryError(AppxFetchError):
    """The mirror lookup failed at the network or HTTP level."""


class DownloadError(AppxFetchError):
    """A package could not be fetched or written to disk."""


class InstallError(AppxFetchError):
    """The package installer exited with a non-zero status."""

    def __init__(self, message: str, *, returncode: int, output: str) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class UnsupportedPlatformError(AppxFetchError):
    """No package installer is available on this host."""


__all__ = [
    "ListingEntry",
    "PackageBuckets",
    "AppxFetchError",
    "InvalidStoreUrlError",
    "StoreQueryError",
    "DownloadError",
    "InstallError",
    "UnsupportedPlatformError",
]
