# === FILE: brand_scout/config.py ===
"""
Загрузка и валидация конфигурации сканера BrandScout.

Значения берутся из переменных окружения ``BRAND_SCOUT_*`` (с умолчаниями),
опционально перекрываются YAML/JSON-файлом. Pydantic описывает схему,
объект конфигурации неизменяем и передаётся в каждую операцию явно.
"""
from __future__ import annotations

import errno
import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from brand_scout.logger import logger

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

ENV_PREFIX = "BRAND_SCOUT_"

# field name -> environment variable suffix
_ENV_TIMEOUTS: Dict[str, str] = {
    "timeout_global": "TIMEOUT_GLOBAL",
    "timeout_request": "TIMEOUT_REQUEST",
    "timeout_probe": "TIMEOUT_PROBE",
    "timeout_image": "TIMEOUT_IMAGE",
}
_ENV_LIMITS: Dict[str, str] = {
    "max_stylesheets": "MAX_STYLESHEETS",
    "max_imports": "MAX_IMPORTS",
    "max_redirects": "MAX_REDIRECTS",
}


class ScannerConfig(BaseModel):
    """Настройки сети и лимиты обхода для одного процесса."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout_global: float = Field(30.0, gt=0, description="Общий таймаут HTTP-клиента (секунд).")
    timeout_request: float = Field(10.0, gt=0, description="Таймаут загрузки стилей и импортов.")
    timeout_probe: float = Field(10.0, gt=0, description="Таймаут проверки /favicon.ico.")
    timeout_image: float = Field(10.0, gt=0, description="Таймаут проксирования изображений.")
    max_stylesheets: int = Field(20, ge=0, description="Лимит внешних таблиц стилей на страницу.")
    max_imports: int = Field(5, ge=0, description="Лимит @import на одну таблицу стилей.")
    max_redirects: int = Field(10, ge=0, description="Максимум переходов по редиректам.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ScannerConfig:
        """Собирает конфиг из ``BRAND_SCOUT_*``; неверные значения → умолчания."""
        return cls(**_env_values(os.environ if environ is None else environ))


def _read_int(environ: Mapping[str, str], name: str, minimum: int) -> Optional[int]:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Ignoring unparseable %s%s=%r", ENV_PREFIX, name, raw)
        return None
    if value < minimum:
        logger.debug("Ignoring out-of-range %s%s=%r", ENV_PREFIX, name, raw)
        return None
    return value


def _env_values(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field, name in _ENV_TIMEOUTS.items():
        seconds = _read_int(environ, name, minimum=1)
        if seconds is not None:
            values[field] = float(seconds)
    for field, name in _ENV_LIMITS.items():
        limit = _read_int(environ, name, minimum=0)
        if limit is not None:
            values[field] = limit
    user_agent = environ.get(ENV_PREFIX + "USER_AGENT", "").strip()
    if user_agent:
        values["user_agent"] = user_agent
    return values


@lru_cache(maxsize=1)
def default_config() -> ScannerConfig:
    """Конфиг процесса: читается из окружения один раз при первом обращении."""
    return ScannerConfig.from_env()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(
    path: Union[str, Path, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ScannerConfig:
    """
    Возвращает проверенный ScannerConfig.

    Без *path* - только окружение. С *path* - YAML или JSON поверх значений
    окружения. При отсутствии файла бросает FileNotFoundError.
    """
    base = _env_values(os.environ if environ is None else environ)
    if path is None:
        return ScannerConfig(**base)

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return ScannerConfig(**{**base, **data})
    except ValidationError:
        logger.error("Invalid configuration in %s", path_obj)
        raise


__all__ = ["ScannerConfig", "default_config", "load_config", "DEFAULT_USER_AGENT", "ENV_PREFIX"]
