# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from brand_scout.config import ScannerConfig

ServeT = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def fast_config() -> ScannerConfig:
    """
    Return a ScannerConfig with short timeouts for local test servers.
    """
    return ScannerConfig(
        timeout_global=5,
        timeout_request=2,
        timeout_probe=2,
        timeout_image=2,
        user_agent="TestAgent/1.0",
    )


@pytest_asyncio.fixture
async def serve() -> AsyncIterator[ServeT]:
    """
    Start aiohttp applications on free local ports; yield a starter that
    returns the base URL. Every started app is cleaned up afterwards.
    """
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        host, port = runner.addresses[0][:2]
        return f"http://{host}:{port}"

    yield _serve

    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def brand_page_html() -> str:
    """
    A page with two icon links, an inline font-face and one stylesheet.
    """
    return """
    <html><head>
      <link rel="icon" href="/static/icon-32.png" sizes="32x32" type="image/png">
      <link rel="apple-touch-icon" href="/static/apple.png" sizes="180x180">
      <link rel="stylesheet" href="/css/site.css">
      <style>
        @font-face { font-family: 'Inline Sans'; src: url(/fonts/inline.woff2) format('woff2'); }
      </style>
    </head><body><h1>Brand</h1></body></html>
    """
