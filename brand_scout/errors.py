# File: brand_scout/errors.py
"""brand_scout.errors: failures surfaced by scan, proxy and download calls.

Every error renders as one human-readable message; callers only tell
success from failure, so the subclasses exist for logging and tests.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ScanError",
    "InvalidUrl",
    "ClientBuildFailed",
    "FetchFailed",
    "BadStatus",
    "DecodeFailed",
    "ParseTaskFailed",
]


class ScanError(Exception):
    """Base class for fatal pipeline failures."""


class InvalidUrl(ScanError):
    """User input does not parse as an absolute URL."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid URL {url!r}{detail}")


class ClientBuildFailed(ScanError):
    """The HTTP session could not be created."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"Failed to build HTTP client: {reason}")


class FetchFailed(ScanError):
    """Transport-level failure while reaching a required resource."""

    def __init__(self, url: str, reason: object, what: str = "website") -> None:
        self.url = url
        text = str(reason) or type(reason).__name__
        super().__init__(f"Failed to fetch {what} {url}: {text}")


class BadStatus(ScanError):
    """A required resource answered with a non-2xx status."""

    def __init__(self, url: str, status: int, what: str = "Website") -> None:
        self.url = url
        self.status = status
        super().__init__(f"{what} returned status {status}")


class DecodeFailed(ScanError):
    """Response body could not be read or decoded."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        super().__init__(f"Failed to read response from {url}: {reason}")


class ParseTaskFailed(ScanError):
    """The off-loop markup parsing step did not complete."""

    def __init__(self, reason: Optional[object] = None) -> None:
        super().__init__(f"Parse task failed: {reason}")
