# File: brand_scout/crawler/__init__.py
"""brand_scout.crawler: сетевой слой: загрузка страниц, стилей и проверка иконок."""
