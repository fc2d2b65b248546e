# === FILE: brand_scout/parser/html_parser.py ===
"""HTML parsing utilities for BrandScout.

:func:`parse_html` turns one fetched document into everything the scan
needs from markup:

* favicons - ``<link>`` elements whose ``rel`` contains ``icon``, resolved
  and deduplicated by URL (first occurrence wins).
* favicon_ico_url - the conventional ``/favicon.ico`` of the page's origin,
  unless the markup already links it.
* inline_css - text of every ``<style>`` element, concatenated.
* stylesheet_urls - ``rel=stylesheet`` and ``rel=preload as=style`` links in
  document order, truncated to the first *max_stylesheets*.

BeautifulSoup's ``html.parser`` tree builder recovers from broken markup, so
this function does not raise on malformed documents.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from brand_scout.logger import logger
from brand_scout.models import FaviconInfo
from brand_scout.utils import favicon_ico_url, resolve_url

__all__: Sequence[str] = ("ParsedPage", "parse_html")


@dataclass(slots=True)
class ParsedPage:
    """Assets discovered in one HTML document."""

    url: str
    favicons: list[FaviconInfo] = field(default_factory=list)
    favicon_ico_url: Optional[str] = None
    inline_css: str = ""
    stylesheet_urls: list[str] = field(default_factory=list)


def _attr(tag: Tag, name: str) -> Optional[str]:
    # bs4 returns multi-valued attributes (rel) as lists
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _is_stylesheet(rel: str, tag: Tag) -> bool:
    if rel == "stylesheet":
        return True
    return rel == "preload" and (_attr(tag, "as") or "").strip().lower() == "style"


def parse_html(html: str, base_url: str, max_stylesheets: int) -> ParsedPage:
    """Parse *html* fetched from *base_url*."""
    soup = BeautifulSoup(html, "html.parser")
    page = ParsedPage(url=base_url)

    seen: set[str] = set()
    stylesheet_urls: list[str] = []
    for tag in soup.find_all("link"):
        if not isinstance(tag, Tag):
            continue
        rel = (_attr(tag, "rel") or "").lower()
        href = _attr(tag, "href")
        if href is None:
            continue
        if "icon" in rel:
            url = resolve_url(base_url, href)
            if url is not None and url not in seen:
                seen.add(url)
                page.favicons.append(
                    FaviconInfo(
                        url=url,
                        rel=rel,
                        sizes=_attr(tag, "sizes"),
                        mime_type=_attr(tag, "type"),
                    )
                )
        if _is_stylesheet(rel.strip(), tag):
            url = resolve_url(base_url, href)
            if url is not None:
                stylesheet_urls.append(url)

    implicit = favicon_ico_url(base_url)
    page.favicon_ico_url = None if implicit in seen else implicit

    page.inline_css = "\n".join(style.get_text() for style in soup.find_all("style"))

    if len(stylesheet_urls) > max_stylesheets:
        logger.debug(
            "Truncating %d stylesheets to %d for %s",
            len(stylesheet_urls),
            max_stylesheets,
            base_url,
        )
    page.stylesheet_urls = stylesheet_urls[:max_stylesheets]
    return page
