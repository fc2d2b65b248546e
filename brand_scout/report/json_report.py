# brand_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта BrandScout.

Сериализация объекта ScanResult в файл.
"""
import json
from pathlib import Path

from brand_scout.models import ScanResult


def render_json(result: ScanResult, output_path: Path | str) -> Path:
    """
    Сохраняет результат сканирования в формате JSON по указанному пути.

    :param result: объект ScanResult
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from brand_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/example.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    return output
