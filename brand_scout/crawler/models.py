# brand_scout/crawler/models.py
"""
Data models for the BrandScout fetch layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class PageData:
    """Final URL and decoded text of a fetched document."""

    url: str
    content: str


@dataclass(slots=True)
class Asset:
    """Raw bytes of a fetched asset with the content type the server reported."""

    url: str
    content: bytes
    content_type: Optional[str]
