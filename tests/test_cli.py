# File: tests/test_cli.py
"""Тесты для CLI (`brand_scout.cli`) с использованием click.testing.CliRunner.
Сетевые операции подменяются, проверяются команды и обработка ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

cli_module = importlib.import_module("brand_scout.cli")
from brand_scout.cli import cli
from brand_scout.errors import BadStatus
from brand_scout.models import FaviconInfo, FontInfo, FontVariant, ScanResult

QUIET = ["--log-level", "ERROR"]


@pytest.fixture()
def dummy_result() -> ScanResult:
    return ScanResult(
        url="https://example.com/",
        favicons=[FaviconInfo(url="https://example.com/favicon.ico", rel="icon", mime_type="image/x-icon")],
        fonts=[
            FontInfo(
                family="Inter",
                variants=[FontVariant(style="normal", weight="400", url="https://fonts.gstatic.com/i.woff2", format="woff2")],
                source="google-fonts",
            )
        ],
    )


@pytest.fixture(autouse=True)
def patch_scan(monkeypatch, dummy_result):
    """Патчим scan_website, чтобы не ходить в сеть."""
    calls = []

    async def fake_scan(url, cfg):
        calls.append((url, cfg))
        return dummy_result

    monkeypatch.setattr(cli_module, "scan_website", fake_scan)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "BrandScout" in result.output


def test_show_config_reads_env(monkeypatch):
    monkeypatch.setenv("BRAND_SCOUT_MAX_IMPORTS", "3")
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_imports"] == 3
    assert data["max_stylesheets"] == 20


def test_show_config_from_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("max_stylesheets: 4\nuser_agent: Agent/1.0\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_stylesheets"] == 4
    assert data["user_agent"] == "Agent/1.0"


def test_invalid_config_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout_global: -1\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code != 0
    assert "Ошибка загрузки конфигурации" in result.output


def test_scan_stdout(patch_scan):
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["scan", "example.com"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["url"] == "https://example.com/"
    assert output["fonts"][0]["family"] == "Inter"
    assert patch_scan[0][0] == "example.com"


def test_scan_json_file(tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["scan", "example.com", "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["favicons"][0]["mime_type"] == "image/x-icon"


def test_scan_html_file(tmp_path):
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["scan", "example.com", "--html", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert "Inter" in out.read_text(encoding="utf-8")


def test_scan_error(monkeypatch):
    async def failing(url, cfg):
        raise BadStatus(url, 404)

    monkeypatch.setattr(cli_module, "scan_website", failing)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["scan", "example.com"])
    assert result.exit_code == 1
    assert "Website returned status 404" in result.output


def test_scan_timeout(monkeypatch):
    async def slow(url, cfg):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "scan_website", slow)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["scan", "example.com", "--scan-timeout", "0.2"])
    assert result.exit_code != 0
    assert "не завершено" in result.output


def test_proxy_image_command(monkeypatch):
    async def fake_proxy(url, cfg):
        return "data:image/png;base64,AAAA"

    monkeypatch.setattr(cli_module, "proxy_image", fake_proxy)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["proxy-image", "https://example.com/logo.png"])
    assert result.exit_code == 0
    assert result.output.strip() == "data:image/png;base64,AAAA"


def test_download_command_into_directory(monkeypatch, tmp_path):
    saved = []

    async def fake_download(url, path, cfg):
        saved.append(path)
        return path

    monkeypatch.setattr(cli_module, "download_asset", fake_download)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["download", "https://example.com/fonts/a.woff2?v=1", "-o", str(tmp_path)])
    assert result.exit_code == 0
    assert saved == [tmp_path / "a.woff2"]
    assert "Saved:" in result.output
