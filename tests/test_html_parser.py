# File: tests/test_html_parser.py
from brand_scout.parser.html_parser import parse_html

BASE = "https://example.com/"


def test_favicon_links(brand_page_html):
    page = parse_html(brand_page_html, BASE, max_stylesheets=20)
    assert [(f.url, f.rel, f.sizes, f.mime_type) for f in page.favicons] == [
        ("https://example.com/static/icon-32.png", "icon", "32x32", "image/png"),
        ("https://example.com/static/apple.png", "apple-touch-icon", "180x180", None),
    ]
    assert page.favicon_ico_url == "https://example.com/favicon.ico"


def test_rel_lowercased_and_duplicates_dropped():
    html = """
    <link rel="Shortcut Icon" href="/favicon.ico" type="image/X-Icon">
    <link rel="icon" href="https://example.com/favicon.ico">
    <link rel="mask-icon" href="/mask.svg">
    <link rel="icon">
    """
    page = parse_html(html, BASE, max_stylesheets=20)
    assert [(f.rel, f.url, f.mime_type) for f in page.favicons] == [
        ("shortcut icon", "https://example.com/favicon.ico", "image/X-Icon"),
        ("mask-icon", "https://example.com/mask.svg", None),
    ]
    # already linked explicitly, so no implicit probe
    assert page.favicon_ico_url is None


def test_inline_styles_concatenated():
    html = "<style>a{color:red}</style><p>x</p><style>@font-face{font-family:A;src:url(a.woff2)}</style>"
    page = parse_html(html, BASE, max_stylesheets=20)
    assert "a{color:red}" in page.inline_css
    assert "@font-face{font-family:A;src:url(a.woff2)}" in page.inline_css


def test_stylesheet_selection():
    html = """
    <link rel="stylesheet" href="/one.css">
    <link rel="preload" as="style" href="/two.css">
    <link rel="preload" as="font" href="/font.woff2">
    <link rel="alternate stylesheet" href="/alt.css">
    <link rel="stylesheet">
    <link rel="STYLESHEET" href="https://cdn.example.net/three.css">
    """
    page = parse_html(html, BASE, max_stylesheets=20)
    assert page.stylesheet_urls == [
        "https://example.com/one.css",
        "https://example.com/two.css",
        "https://cdn.example.net/three.css",
    ]


def test_stylesheets_truncated_to_first_n_in_document_order():
    html = "".join(f'<link rel="stylesheet" href="/css/{i}.css">' for i in range(30))
    page = parse_html(html, BASE, max_stylesheets=20)
    assert page.stylesheet_urls == [f"https://example.com/css/{i}.css" for i in range(20)]


def test_implicit_favicon_uses_origin_of_deep_page():
    page = parse_html("<html></html>", "https://example.com/blog/post?id=1", max_stylesheets=20)
    assert page.favicon_ico_url == "https://example.com/favicon.ico"


def test_malformed_markup_does_not_raise():
    html = '<html><head><link rel="icon" href="/i.png"<style>@font-face{font-family:X;src:url(x.woff2)}'
    page = parse_html(html, BASE, max_stylesheets=20)
    assert page.url == BASE
    assert page.stylesheet_urls == []


def test_empty_document():
    page = parse_html("", BASE, max_stylesheets=20)
    assert page.favicons == []
    assert page.inline_css == ""
    assert page.stylesheet_urls == []
    assert page.favicon_ico_url == "https://example.com/favicon.ico"
