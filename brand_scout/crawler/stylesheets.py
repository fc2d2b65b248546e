# brand_scout/crawler/stylesheets.py
"""
Stylesheet crawling: fetch each linked stylesheet, collect its font-faces
and follow its ``@import`` rules exactly one level deep.
"""
from __future__ import annotations

from typing import List, Sequence

from brand_scout.crawler.fetcher import Fetcher
from brand_scout.logger import logger
from brand_scout.models import RawFontFace
from brand_scout.parser.css_parser import parse_font_faces, parse_imports

__all__ = ("fetch_stylesheet_fonts",)


async def _fetch_font_faces(fetcher: Fetcher, url: str, follow_imports: bool) -> List[RawFontFace]:
    page = await fetcher.fetch_text(url)
    if page is None:
        return []

    faces = parse_font_faces(page.content, page.url)
    logger.debug("%s: %d font-face block(s)", url, len(faces))
    if not follow_imports:
        return faces

    imports = parse_imports(page.content, page.url)
    limit = fetcher.config.max_imports
    if len(imports) > limit:
        logger.debug("Truncating %d @import rules to %d in %s", len(imports), limit, url)
    for import_url in imports[:limit]:
        # imported sheets are not followed further
        faces.extend(await _fetch_font_faces(fetcher, import_url, follow_imports=False))
    return faces


async def fetch_stylesheet_fonts(fetcher: Fetcher, urls: Sequence[str]) -> List[RawFontFace]:
    """
    Fetch *urls* one at a time and return every font-face they declare.

    A stylesheet that fails to load is skipped; the scan goes on.
    """
    faces: List[RawFontFace] = []
    for url in urls:
        faces.extend(await _fetch_font_faces(fetcher, url, follow_imports=True))
    return faces
