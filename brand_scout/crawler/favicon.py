# brand_scout/crawler/favicon.py
"""
Existence check for the implicit ``/favicon.ico`` of a site.
"""
from __future__ import annotations

from typing import Optional

from brand_scout.crawler.fetcher import Fetcher
from brand_scout.logger import logger
from brand_scout.models import FaviconInfo

__all__ = ("verify_favicon",)

DEFAULT_ICON_TYPE = "image/x-icon"


async def verify_favicon(fetcher: Fetcher, url: str) -> Optional[FaviconInfo]:
    """
    Probe *url* and return a FaviconInfo when it looks like an image.

    A missing Content-Type is accepted as a legacy icon response; anything
    else must mention ``image`` or ``icon`` (HTML error pages are rejected).
    """
    content_type = await fetcher.probe(url)
    if content_type is None:
        return None
    content_type = content_type.strip()
    lowered = content_type.lower()
    if content_type and "image" not in lowered and "icon" not in lowered:
        logger.debug("Rejecting %s: content-type %s", url, content_type)
        return None
    return FaviconInfo(
        url=url,
        rel="icon",
        sizes=None,
        mime_type=content_type or DEFAULT_ICON_TYPE,
    )
