# File: brand_scout/aggregator.py
"""brand_scout.aggregator: группировка фактов @font-face в каталог шрифтов."""

from __future__ import annotations

from typing import Dict, Iterable, List
from urllib.parse import urlsplit

from brand_scout.models import FontInfo, FontVariant, RawFontFace

__all__ = ["aggregate_fonts", "detect_font_source"]

_GOOGLE_HOSTS = ("fonts.gstatic.com", "fonts.googleapis.com")
_ADOBE_HOSTS = ("use.typekit.net", "p.typekit.net")


def detect_font_source(url: str) -> str:
    """Классифицирует поставщика шрифта по хосту URL."""
    host = urlsplit(url).netloc.lower()
    if any(h in host for h in _GOOGLE_HOSTS):
        return "google-fonts"
    if any(h in host for h in _ADOBE_HOSTS):
        return "adobe-fonts"
    return "custom"


def _weight_key(weight: str) -> int:
    """Числовой вес для сортировки; ключевые слова и мусор считаются 400."""
    try:
        return int(weight)
    except ValueError:
        return 400


def _build_variants(faces: List[RawFontFace]) -> List[FontVariant]:
    """Удаляет дубликаты по URL и сортирует по (вес, стиль)."""
    unique: Dict[str, FontVariant] = {}
    for face in faces:
        unique.setdefault(
            face.url,
            FontVariant(style=face.style, weight=face.weight, url=face.url, format=face.format),
        )
    by_url = sorted(unique.values(), key=lambda v: v.url)
    return sorted(by_url, key=lambda v: (_weight_key(v.weight), v.style))


def aggregate_fonts(faces: Iterable[RawFontFace]) -> List[FontInfo]:
    """Собирает FontInfo по семействам; имена сравниваются точно, с учётом регистра."""
    groups: Dict[str, List[RawFontFace]] = {}
    for face in faces:
        groups.setdefault(face.family, []).append(face)

    fonts: List[FontInfo] = []
    for family, members in groups.items():
        variants = _build_variants(members)
        fonts.append(
            FontInfo(
                family=family,
                variants=variants,
                source=detect_font_source(variants[0].url),
            )
        )
    fonts.sort(key=lambda f: f.family)
    return fonts
