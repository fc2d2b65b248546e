# File: brand_scout/server.py
"""brand_scout.server: HTTP-адаптер (aiohttp.web) над scan / proxy-image / download.

Маршруты:
  GET /api/scan?url=...         → ScanResult в JSON или {"error": ...} (400)
  GET /api/proxy-image?url=...  → {"data": "data:..."} или {"error": ...} (400)
  GET /api/download?url=...     → байты ресурса с Content-Disposition
Если задана папка фронтенда, остальные пути раздаются из неё
(с откатом на index.html).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from aiohttp import web

from brand_scout.config import ScannerConfig, default_config
from brand_scout.errors import ScanError
from brand_scout.logger import logger
from brand_scout.scanner import download_asset_bytes, proxy_image, scan_website
from brand_scout.utils import filename_from_url

__all__ = ["create_app", "run_server", "CONFIG_KEY", "DEFAULT_PORT", "port_from_env"]

DEFAULT_PORT = 3001
CONFIG_KEY = web.AppKey("config", ScannerConfig)
STATIC_KEY = web.AppKey("static_dir", Path)


def port_from_env() -> int:
    """Порт из ``BRAND_SCOUT_PORT``; при ошибке 3001."""
    raw = os.environ.get("BRAND_SCOUT_PORT", "")
    try:
        port = int(raw)
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


def _error(message: str) -> web.Response:
    return web.json_response({"error": message}, status=400)


def _target(request: web.Request) -> Optional[str]:
    url = request.query.get("url", "").strip()
    return url or None


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response()
    else:
        response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return response


async def api_scan(request: web.Request) -> web.Response:
    url = _target(request)
    if url is None:
        return _error("Missing 'url' query parameter")
    logger.info("[scan] url=%s", url)
    try:
        result = await scan_website(url, request.app[CONFIG_KEY])
    except ScanError as exc:
        logger.error("[scan] %s", exc)
        return _error(str(exc))
    return web.json_response(result.to_dict())


async def api_proxy_image(request: web.Request) -> web.Response:
    url = _target(request)
    if url is None:
        return _error("Missing 'url' query parameter")
    try:
        data = await proxy_image(url, request.app[CONFIG_KEY])
    except ScanError as exc:
        logger.error("[proxy-image] %s", exc)
        return _error(str(exc))
    return web.json_response({"data": data})


async def api_download(request: web.Request) -> web.Response:
    url = _target(request)
    if url is None:
        return _error("Missing 'url' query parameter")
    try:
        body, content_type = await download_asset_bytes(url, request.app[CONFIG_KEY])
    except ScanError as exc:
        logger.error("[download] %s", exc)
        return _error(str(exc))
    filename = filename_from_url(url).replace('"', "")
    return web.Response(
        body=body,
        headers={
            "Content-Type": content_type,
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )


async def serve_static(request: web.Request) -> web.StreamResponse:
    root = request.app[STATIC_KEY]
    tail = request.match_info.get("tail", "")
    candidate = (root / tail).resolve()
    if not candidate.is_relative_to(root):
        raise web.HTTPNotFound()
    if candidate.is_dir():
        candidate = candidate / "index.html"
    if not candidate.is_file():
        candidate = root / "index.html"
        if not candidate.is_file():
            raise web.HTTPNotFound()
    return web.FileResponse(candidate)


def create_app(
    config: Optional[ScannerConfig] = None,
    static_dir: Union[str, Path, None] = None,
) -> web.Application:
    """Собирает aiohttp-приложение с API и (опционально) статикой."""
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config or default_config()
    app.router.add_get("/api/scan", api_scan)
    app.router.add_get("/api/proxy-image", api_proxy_image)
    app.router.add_get("/api/download", api_download)

    if static_dir is not None and Path(static_dir).is_dir():
        app[STATIC_KEY] = Path(static_dir).resolve()
        app.router.add_get("/{tail:.*}", serve_static)
    return app


def run_server(
    host: str = "0.0.0.0",
    port: Optional[int] = None,
    config: Optional[ScannerConfig] = None,
    static_dir: Union[str, Path, None] = "dist",
) -> None:
    """Блокирующий запуск сервера."""
    port = port or port_from_env()
    app = create_app(config, static_dir)
    logger.info("BrandScout server listening on http://%s:%d", host, port)
    web.run_app(app, host=host, port=port, print=None)
