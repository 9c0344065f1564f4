from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from priority_loader.config.models import LoggingSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_MARKER = "_priority_loader_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def init_logging(settings: LoggingSettings) -> None:
    """
    Configure the root logger with a console handler and a daily rotating file handler.

    Calling this again replaces the handlers installed by a previous call.
    """
    root = logging.getLogger()
    root.setLevel(settings.level.upper())

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(_LOG_FORMAT)

    console = _mark(logging.StreamHandler(sys.stderr))
    console.setFormatter(formatter)
    root.addHandler(console)

    log_path = Path(settings.file.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = _mark(
        TimedRotatingFileHandler(
            log_path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
