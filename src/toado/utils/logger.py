"""Application logger for toado.

Every layer logs through a child of the ``toado`` logger (``toado.sqlite``,
``toado.commands``, ...). Records go to a size-rotated file in the platform
log directory and never to the terminal.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "toado"
_LOG_FILE = "toado.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Location of the active log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or the named child of it.

    The file handler is attached to the ``toado`` logger on the first call;
    children propagate to it.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        logger.propagate = False
        _logger = logger

    return _logger.getChild(name) if name else _logger
