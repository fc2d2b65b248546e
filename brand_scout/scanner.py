# === FILE: brand_scout/scanner.py ===
"""
Сквозной конвейер BrandScout: сканирование страницы и две независимые
операции над отдельными ресурсами (data-URI прокси и скачивание).

Шаги одного сканирования выполняются последовательно, одновременно открыт
не более чем один исходящий запрос. Ошибки корневой страницы фатальны,
ошибки стилей, импортов и /favicon.ico поглощаются.
"""
from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from typing import Optional, Tuple, Union

from brand_scout.aggregator import aggregate_fonts
from brand_scout.config import ScannerConfig, default_config
from brand_scout.crawler.favicon import verify_favicon
from brand_scout.crawler.fetcher import Fetcher
from brand_scout.crawler.stylesheets import fetch_stylesheet_fonts
from brand_scout.errors import ParseTaskFailed
from brand_scout.logger import logger
from brand_scout.models import ScanResult
from brand_scout.parser.css_parser import parse_font_faces
from brand_scout.parser.html_parser import ParsedPage, parse_html
from brand_scout.utils import normalize_url

__all__ = ["scan_website", "proxy_image", "download_asset_bytes", "download_asset"]

DEFAULT_IMAGE_TYPE = "image/png"
DEFAULT_DOWNLOAD_TYPE = "application/octet-stream"


async def _parse_off_loop(html: str, base_url: str, max_stylesheets: int) -> ParsedPage:
    """Разбор HTML в отдельном потоке, чтобы не блокировать цикл событий."""
    try:
        return await asyncio.to_thread(parse_html, html, base_url, max_stylesheets)
    except Exception as exc:
        raise ParseTaskFailed(exc) from exc


async def scan_website(url: str, config: Optional[ScannerConfig] = None) -> ScanResult:
    """
    Сканирует сайт и возвращает найденные иконки и шрифты.

    Parameters
    ----------
    url : str
        Ввод пользователя; без схемы подставляется ``https://``.
    config : ScannerConfig, optional
        Таймауты и лимиты; по умолчанию конфиг процесса из окружения.

    Raises
    ------
    ScanError
        InvalidUrl, ClientBuildFailed, FetchFailed, BadStatus,
        DecodeFailed или ParseTaskFailed.
    """
    cfg = config or default_config()
    base_url = normalize_url(url)
    logger.info("Scanning %s", base_url)

    async with Fetcher(cfg) as fetcher:
        page = await fetcher.fetch_page(base_url)
        parsed = await _parse_off_loop(page.content, page.url, cfg.max_stylesheets)

        favicons = list(parsed.favicons)
        if parsed.favicon_ico_url is not None:
            icon = await verify_favicon(fetcher, parsed.favicon_ico_url)
            if icon is not None:
                favicons.append(icon)

        faces = parse_font_faces(parsed.inline_css, page.url)
        faces.extend(await fetch_stylesheet_fonts(fetcher, parsed.stylesheet_urls))

    fonts = aggregate_fonts(faces)
    logger.info(
        "Scan of %s finished: %d favicon(s), %d font famil%s",
        base_url,
        len(favicons),
        len(fonts),
        "y" if len(fonts) == 1 else "ies",
    )
    return ScanResult(url=base_url, favicons=favicons, fonts=fonts)


async def proxy_image(url: str, config: Optional[ScannerConfig] = None) -> str:
    """Загружает изображение и возвращает его как ``data:<type>;base64,...``."""
    cfg = config or default_config()
    async with Fetcher(cfg) as fetcher:
        asset = await fetcher.fetch_asset(url, timeout=cfg.timeout_image, what="image")
    content_type = asset.content_type or DEFAULT_IMAGE_TYPE
    encoded = base64.b64encode(asset.content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def download_asset_bytes(
    url: str, config: Optional[ScannerConfig] = None
) -> Tuple[bytes, str]:
    """Скачивает ресурс целиком: (байты, Content-Type)."""
    cfg = config or default_config()
    async with Fetcher(cfg) as fetcher:
        asset = await fetcher.fetch_asset(url, what="asset")
    logger.debug("Downloaded %d bytes from %s", len(asset.content), url)
    return asset.content, asset.content_type or DEFAULT_DOWNLOAD_TYPE


async def download_asset(
    url: str, save_path: Union[str, Path], config: Optional[ScannerConfig] = None
) -> Path:
    """Скачивает ресурс и сохраняет его в *save_path*."""
    data, _ = await download_asset_bytes(url, config)
    path = Path(save_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    await asyncio.to_thread(path.write_bytes, data)
    return path
