# brand_scout/__init__.py
"""
BrandScout package initializer.
Defines package version and exposes the scan API and CLI.
"""
__version__ = "0.1.0"

from brand_scout.scanner import download_asset, download_asset_bytes, proxy_image, scan_website
from brand_scout.cli import cli

__all__ = [
    "__version__",
    "cli",
    "scan_website",
    "proxy_image",
    "download_asset_bytes",
    "download_asset",
]
