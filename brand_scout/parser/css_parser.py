# === FILE: brand_scout/parser/css_parser.py ===
"""Stylesheet parsing for BrandScout.

Two independent passes over the same CSS text:

* :func:`parse_font_faces` - one :class:`~brand_scout.models.RawFontFace`
  per ``@font-face`` block that declares a family and at least one remotely
  fetchable ``url(...)``.
* :func:`parse_imports` - absolute targets of ``@import`` rules, in
  document order.

Both are regex driven and never raise on malformed input: a block or rule
that does not match is simply skipped.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional
from urllib.parse import urlsplit

from brand_scout.models import RawFontFace
from brand_scout.utils import resolve_url

__all__: Sequence[str] = (
    "parse_font_faces",
    "parse_imports",
    "infer_format",
    "format_priority",
)

_BLOCK_RE = re.compile(r"@font-face\s*\{([^}]+)\}", re.IGNORECASE | re.DOTALL)
_FAMILY_RE = re.compile(r"""font-family\s*:\s*['"]?([^'";,}]+?)['"]?\s*(?:[;,}]|$)""", re.IGNORECASE)
_WEIGHT_RE = re.compile(r"font-weight\s*:\s*(\d+|normal|bold|lighter|bolder)", re.IGNORECASE)
_STYLE_RE = re.compile(r"font-style\s*:\s*(normal|italic|oblique)", re.IGNORECASE)
_SRC_RE = re.compile(
    r"""url\(\s*['"]?([^'")]+?)['"]?\s*\)(?:\s*format\(\s*['"]?([^'")]+?)['"]?\s*\))?""",
    re.IGNORECASE,
)
_IMPORT_RE = re.compile(
    r"""@import\s+(?:url\(\s*['"]?([^'")]+?)['"]?\s*\)|['"]([^'"]+?)['"])""",
    re.IGNORECASE,
)

_EXTENSION_FORMATS: tuple[tuple[str, str], ...] = (
    (".woff2", "woff2"),
    (".woff", "woff"),
    (".ttf", "truetype"),
    (".otf", "opentype"),
    (".eot", "embedded-opentype"),
    (".svg", "svg"),
)

_PRIORITY: dict[str, int] = {
    "woff2": 4,
    "woff": 3,
    "truetype": 2,
    "ttf": 2,
    "opentype": 1,
    "otf": 1,
}


def infer_format(url: str) -> str:
    """Guess the font format from the file extension of *url*'s path."""
    path = urlsplit(url).path.lower()
    for extension, fmt in _EXTENSION_FORMATS:
        if path.endswith(extension):
            return fmt
    return "unknown"


def format_priority(fmt: str) -> int:
    """woff2 > woff > truetype > opentype > anything else."""
    return _PRIORITY.get(fmt.strip().lower(), 0)


def _pick_source(block: str, base_url: str) -> Optional[tuple[str, str]]:
    best: Optional[tuple[str, str]] = None
    best_priority = -1
    for match in _SRC_RE.finditer(block):
        raw = match.group(1).strip()
        if raw.lower().startswith("data:"):
            continue
        resolved = resolve_url(base_url, raw)
        if resolved is None:
            continue
        fmt = match.group(2).strip() if match.group(2) else infer_format(resolved)
        priority = format_priority(fmt)
        # ties keep the earliest candidate
        if priority > best_priority:
            best, best_priority = (resolved, fmt), priority
    return best


def parse_font_faces(css: str, base_url: str) -> list[RawFontFace]:
    """Extract font-face facts from *css* retrieved from *base_url*."""
    faces: list[RawFontFace] = []
    for block_match in _BLOCK_RE.finditer(css):
        block = block_match.group(1)

        family_match = _FAMILY_RE.search(block)
        if family_match is None:
            continue
        family = family_match.group(1).strip()
        if not family:
            continue

        weight_match = _WEIGHT_RE.search(block)
        style_match = _STYLE_RE.search(block)

        source = _pick_source(block, base_url)
        if source is None:
            continue
        url, fmt = source

        faces.append(
            RawFontFace(
                family=family,
                weight=weight_match.group(1) if weight_match else "400",
                style=style_match.group(1) if style_match else "normal",
                url=url,
                format=fmt,
            )
        )
    return faces


def parse_imports(css: str, base_url: str) -> list[str]:
    """Return absolute ``@import`` targets found in *css*, in document order."""
    imports: list[str] = []
    for match in _IMPORT_RE.finditer(css):
        href = match.group(1) or match.group(2)
        resolved = resolve_url(base_url, href)
        if resolved is not None:
            imports.append(resolved)
    return imports
