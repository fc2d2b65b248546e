# === FILE: brand_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа BrandScout для командной строки.

Команды:
  scan URL          Найти иконки и веб-шрифты сайта, вывести/сохранить отчёт
  proxy-image URL   Вывести изображение как data-URI (base64)
  download URL      Скачать ресурс (шрифт, иконку) в файл
  serve             Запустить HTTP API (и раздачу фронтенда)
  config            Показать текущую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-конфиг поверх переменных BRAND_SCOUT_*
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сканирования (секунд)

Дополнительно:
  --version, -v       Показать версию BrandScout

Пример:
  brand-scout scan example.com --json report.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from brand_scout import __version__
from brand_scout.config import load_config
from brand_scout.errors import ScanError
from brand_scout.logger import DEFAULT_FORMAT, init_logging
from brand_scout.report.html_report import render_html
from brand_scout.report.json_report import render_json
from brand_scout.scanner import download_asset, proxy_image, scan_website
from brand_scout.server import port_from_env, run_server
from brand_scout.utils import filename_from_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='BrandScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к YAML/JSON-конфигу (поверх переменных окружения).'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд BrandScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего сканирования (секунд)'
)
@click.pass_context
def scan(ctx, url, json_output, html_output, template_dir, pretty, scan_timeout):
    """Просканировать сайт и вывести найденные иконки и шрифты."""
    cfg = ctx.obj['config']
    try:
        if scan_timeout:
            result = asyncio.run(
                asyncio.wait_for(scan_website(url, cfg), timeout=scan_timeout)
            )
        else:
            result = asyncio.run(scan_website(url, cfg))
    except asyncio.TimeoutError:
        print_error(f'Сканирование не завершено за {scan_timeout} секунд')
    except ScanError as e:
        print_error(f'Ошибка при сканировании: {e}')

    # Если не сохраняем в файл - печатаем в stdout
    if not json_output and not html_output:
        click.echo(result.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(result, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('proxy-image', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def proxy_image_cmd(ctx, url):
    """Вывести изображение как data-URI."""
    try:
        data = asyncio.run(proxy_image(url, ctx.obj['config']))
    except ScanError as e:
        print_error(f'Ошибка загрузки изображения: {e}')
    click.echo(data)


@cli.command('download', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, path_type=Path),
    help='Файл или папка назначения (по умолчанию имя из URL в текущей папке)'
)
@click.pass_context
def download(ctx, url, output):
    """Скачать ресурс в файл."""
    target = output or Path(filename_from_url(url))
    if target.is_dir():
        target = target / filename_from_url(url)
    try:
        saved = asyncio.run(download_asset(url, target, ctx.obj['config']))
    except (ScanError, OSError) as e:
        print_error(f'Ошибка скачивания: {e}')
    click.echo(f'Saved: {saved}')


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='0.0.0.0', show_default=True, help='Адрес для прослушивания')
@click.option('--port', '-p', type=int, default=None, help='Порт (по умолчанию BRAND_SCOUT_PORT или 3001)')
@click.option(
    '--static-dir', 'static_dir',
    default='dist', show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Папка собранного фронтенда (игнорируется, если её нет)'
)
@click.pass_context
def serve(ctx, host, port, static_dir):
    """Запустить HTTP API."""
    port = port or port_from_env()
    click.echo(f'BrandScout server listening on http://{host}:{port}')
    run_server(host=host, port=port, config=ctx.obj['config'], static_dir=static_dir)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
