# File: brand_scout/utils.py
"""brand_scout.utils: нормализация и разрешение URL, имя файла для скачивания."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from brand_scout.errors import InvalidUrl
from brand_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "resolve_url",
    "favicon_ico_url",
    "filename_from_url",
)

_SPECIAL_SCHEMES = ("http", "https", "ftp", "ws", "wss")


def normalize_url(raw: str) -> str:
    """Превращает ввод пользователя в абсолютный URL.

    Без ``://`` добавляется ``https://``. Схема и хост приводятся к нижнему
    регистру, пустой путь становится ``/``. Иначе бросает InvalidUrl.
    """
    text = raw.strip()
    candidate = text if "://" in text else f"https://{text}"
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrl(raw, str(exc)) from exc

    if not parts.scheme:
        raise InvalidUrl(raw, "missing scheme")
    host = parts.hostname or ""
    if parts.scheme.lower() in _SPECIAL_SCHEMES:
        if not host:
            raise InvalidUrl(raw, "empty host")
        if any(ch.isspace() or ch in "<>^|%\\" for ch in host):
            raise InvalidUrl(raw, "invalid host")

    netloc = parts.netloc
    if host:
        userinfo = netloc.rpartition("@")[0]
        netloc = f"[{host}]" if ":" in host else host
        if port is not None:
            netloc = f"{netloc}:{port}"
        if userinfo:
            netloc = f"{userinfo}@{netloc}"
    path = parts.path or ("/" if host else "")
    normalized = urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))
    logger.debug("Normalized URL: %s -> %s", raw, normalized)
    return normalized


def resolve_url(base: str, href: str) -> Optional[str]:
    """Разрешает относительную ссылку *href* относительно *base*.

    Возвращает None, если результат не является абсолютным URL, а также
    для пустого *href* (ссылка на саму страницу не считается ресурсом).
    """
    href = href.strip()
    if not href:
        return None
    try:
        joined = urljoin(base, href)
        parts = urlsplit(joined)
        _ = parts.port  # ValueError on a malformed port
    except ValueError:
        logger.debug("Cannot resolve %r against %s", href, base)
        return None
    if not parts.scheme:
        return None
    if parts.scheme.lower() in _SPECIAL_SCHEMES and not parts.hostname:
        return None
    return joined


def favicon_ico_url(base: str) -> str:
    """``{scheme}://{host}[:port]/favicon.ico`` для страницы *base*."""
    parts = urlsplit(base)
    host = parts.hostname or ""
    netloc = f"[{host}]" if ":" in host else host
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, "/favicon.ico", "", ""))


def filename_from_url(url: str) -> str:
    """Последний сегмент пути без query; ``download`` если сегмент пуст."""
    segment = url.rsplit("/", 1)[-1].split("?", 1)[0].split("#", 1)[0]
    return segment or "download"
