"""Logging configuration for the AI catalog browser."""

import logging
import sys
from pathlib import Path
from typing import Optional

from ai_catalog.config import LOG_DIR
from ai_catalog.config import LOG_LEVEL

LOG_FILE = "ai_catalog.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "multipart", "uvicorn.access")


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Optional[Path] = None) -> None:
    """Log the catalog at `log_level` to a file and to stdout.

    Calling it again replaces the handlers it installed instead of stacking them.
    """
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, "_ai_catalog", False)]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)

    file_handler = logging.FileHandler(log_dir / LOG_FILE, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    # Console shows INFO and above even when the file is more verbose
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    stream_handler.setLevel(max(level, logging.INFO))

    for handler in (file_handler, stream_handler):
        handler._ai_catalog = True
        root_logger.addHandler(handler)

    logging.getLogger("ai_catalog").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
