# File: brand_scout/models.py
"""brand_scout.models: значения, которые производит один вызов сканирования."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class FaviconInfo:
    """Иконка сайта: абсолютный URL и атрибуты тега <link>."""

    url: str
    rel: str
    sizes: Optional[str] = None
    mime_type: Optional[str] = None


@dataclass(slots=True)
class RawFontFace:
    """Один блок @font-face с выбранным источником (внутреннее значение)."""

    family: str
    weight: str
    style: str
    url: str
    format: str


@dataclass(slots=True)
class FontVariant:
    """Один физический файл шрифта."""

    style: str
    weight: str
    url: str
    format: str


@dataclass(slots=True)
class FontInfo:
    """Семейство шрифтов с отсортированными вариантами."""

    family: str
    variants: List[FontVariant] = field(default_factory=list)
    source: str = "custom"


@dataclass(slots=True)
class ScanResult:
    """Результат сканирования: нормализованный URL, иконки и шрифты."""

    url: str
    favicons: List[FaviconInfo] = field(default_factory=list)
    fonts: List[FontInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScanResult."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["FaviconInfo", "RawFontFace", "FontVariant", "FontInfo", "ScanResult"]
