# File: brand_scout/parser/__init__.py
"""brand_scout.parser: разбор HTML-разметки и CSS."""
