# brand_scout/crawler/fetcher.py
"""
Fetcher module: one aiohttp session per scan with the configured timeouts,
redirect limit and user agent.

Two failure policies live here side by side:

* ``fetch_page`` / ``fetch_asset`` serve *required* resources and raise
  :class:`~brand_scout.errors.ScanError` subclasses.
* ``fetch_text`` / ``probe`` serve *secondary* resources and return ``None``
  on any network, status or decoding failure.

Text bodies are decoded leniently: undecodable bytes become U+FFFD.
No request is retried.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from brand_scout.config import ScannerConfig
from brand_scout.crawler.models import Asset, PageData
from brand_scout.errors import BadStatus, ClientBuildFailed, DecodeFailed, FetchFailed
from brand_scout.logger import logger

__all__ = ("Fetcher",)

# aiohttp raises ValueError for some malformed URLs.
_SECONDARY_ERRORS = (ClientError, asyncio.TimeoutError, ValueError, LookupError)

_REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


async def _read_text(resp: ClientResponse) -> str:
    return await resp.text(errors="replace")


class Fetcher:
    """Owns the HTTP session of one scan or asset request."""

    def __init__(self, config: ScannerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            try:
                self.session = ClientSession(
                    timeout=ClientTimeout(total=self.config.timeout_global),
                    headers={"User-Agent": self.config.user_agent},
                    raise_for_status=False,
                )
            except (TypeError, ValueError, RuntimeError) as exc:
                raise ClientBuildFailed(exc) from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _session(self) -> ClientSession:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        return self.session

    def _request_kwargs(self, timeout: Optional[float]) -> Dict[str, Any]:
        # aiohttp gives up once the redirect count reaches max_redirects,
        # and treats 0 as "no limit".
        limit = self.config.max_redirects
        kwargs: Dict[str, Any] = (
            {"allow_redirects": True, "max_redirects": limit + 1}
            if limit > 0
            else {"allow_redirects": False}
        )
        if timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=timeout)
        return kwargs

    def _check_redirect(self, url: str, resp: ClientResponse, what: str = "website") -> None:
        """Reject a redirect that was not followed because redirects are disabled."""
        if self.config.max_redirects == 0 and resp.status in _REDIRECT_STATUSES:
            raise FetchFailed(url, f"too many redirects (limit {self.config.max_redirects})", what=what)

    async def fetch_page(self, url: str) -> PageData:
        """GET the root document, bounded only by the session-wide timeout."""
        try:
            async with self._session().get(url, **self._request_kwargs(None)) as resp:
                self._check_redirect(url, resp)
                if not _is_success(resp.status):
                    raise BadStatus(url, resp.status)
                try:
                    text = await _read_text(resp)
                except (ClientError, LookupError) as exc:
                    raise DecodeFailed(url, _describe(exc)) from exc
                return PageData(str(resp.url), text)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchFailed(url, _describe(exc)) from exc

    async def fetch_text(self, url: str) -> Optional[PageData]:
        """GET a secondary text resource with the request timeout; None on failure."""
        try:
            async with self._session().get(url, **self._request_kwargs(self.config.timeout_request)) as resp:
                if not _is_success(resp.status):
                    logger.debug("Skipping %s: HTTP %s", url, resp.status)
                    return None
                return PageData(str(resp.url), await _read_text(resp))
        except _SECONDARY_ERRORS as exc:
            logger.warning("Skipping %s: %s", url, _describe(exc))
            return None

    async def fetch_asset(self, url: str, *, timeout: Optional[float] = None, what: str = "asset") -> Asset:
        """GET raw bytes of a directly requested asset."""
        try:
            async with self._session().get(url, **self._request_kwargs(timeout)) as resp:
                self._check_redirect(url, resp, what=what)
                if not _is_success(resp.status):
                    raise BadStatus(url, resp.status, what=what.capitalize())
                try:
                    body = await resp.read()
                except ClientError as exc:
                    raise DecodeFailed(url, _describe(exc)) from exc
                return Asset(str(resp.url), body, resp.headers.get("Content-Type"))
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchFailed(url, _describe(exc), what=what) from exc

    async def probe(self, url: str) -> Optional[str]:
        """HEAD *url*; return its Content-Type ('' if absent) on 2xx, else None."""
        try:
            async with self._session().head(url, **self._request_kwargs(self.config.timeout_probe)) as resp:
                if not _is_success(resp.status):
                    logger.debug("Probe %s -> HTTP %s", url, resp.status)
                    return None
                return resp.headers.get("Content-Type", "")
        except _SECONDARY_ERRORS as exc:
            logger.debug("Probe %s failed: %s", url, _describe(exc))
            return None
