# File: brand_scout/report/__init__.py
"""brand_scout.report: JSON- и HTML-отчёты по результату сканирования."""

from brand_scout.report.html_report import render_html
from brand_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
