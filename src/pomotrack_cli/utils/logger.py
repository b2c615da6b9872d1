"""Application logger for pomotrack.

Commands log through ``get_logger()``; the timer engines use module loggers
(``pomotrack_cli.models.timer.*``) whose records propagate here. Everything
lands in one rotating file under ``platformdirs.user_log_dir``.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomotrack_cli"
_LOG_FILE = "pomotrack.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def _rotating_handler(log_dir: Path) -> logging.handlers.RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """Return the app logger, attaching the rotating file handler on first call.

    Other handlers on the logger (pytest's capture handlers, for one) do not
    count as configured; only an existing ``RotatingFileHandler`` does.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    ):
        logger.addHandler(_rotating_handler(Path(user_log_dir(_APP_NAME))))
    logger.propagate = False

    _logger = logger
    return _logger
