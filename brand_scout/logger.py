# === FILE: brand_scout/logger.py ===
"""Project-wide logging for **BrandScout**.

One named logger, :data:`logger`, shared by every module::

    from brand_scout.logger import logger
    logger.info("Scanning %s", url)

Console output goes to *stderr*: the CLI prints JSON on stdout.
The CLI calls :func:`init_logging` to apply ``--log-level``/``--log-file``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "BrandScout"


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the project logger and apply *level*.

    With *log_file* set, records also go to a rotating file (5 MB x 3).
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    lg.addHandler(_handler(logging.StreamHandler(sys.stderr), log_format))
    if log_file is not None:
        file_handler = RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        lg.addHandler(_handler(file_handler, log_format))
    lg.propagate = False
    return lg


logger: logging.Logger = init_logging(level="WARNING")

__all__ = ["logger", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
