# File: tests/test_reports.py
import json

from brand_scout.models import FaviconInfo, FontInfo, FontVariant, ScanResult
from brand_scout.report import render_html, render_json


def make_result() -> ScanResult:
    return ScanResult(
        url="https://example.com/",
        favicons=[FaviconInfo(url="https://example.com/icon.png", rel="icon", sizes="32x32", mime_type="image/png")],
        fonts=[
            FontInfo(
                family="<Brand>",
                variants=[
                    FontVariant(style="normal", weight="400", url="https://example.com/b.woff2", format="woff2"),
                ],
                source="custom",
            )
        ],
    )


def test_to_dict_wire_shape():
    data = make_result().to_dict()
    assert set(data) == {"url", "favicons", "fonts"}
    assert set(data["favicons"][0]) == {"url", "rel", "sizes", "mime_type"}
    assert set(data["fonts"][0]) == {"family", "variants", "source"}
    assert set(data["fonts"][0]["variants"][0]) == {"style", "weight", "url", "format"}


def test_render_json(tmp_path):
    path = render_json(make_result(), tmp_path / "reports" / "scan.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == make_result().to_dict()


def test_render_html_escapes_values(tmp_path):
    path = render_html(make_result(), None, tmp_path / "scan.html")
    html = path.read_text(encoding="utf-8")
    assert "&lt;Brand&gt;" in html
    assert "<Brand>" not in html
    assert "https://example.com/icon.png" in html
    assert "32x32" in html


def test_render_html_custom_template(tmp_path):
    (tmp_path / "report.html.j2").write_text("{{ url }}|{{ fonts|length }}", encoding="utf-8")
    path = render_html(make_result(), tmp_path, tmp_path / "out.html")
    assert path.read_text(encoding="utf-8") == "https://example.com/|1"
