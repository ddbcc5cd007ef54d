"""
Logging setup for the whiteboard.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

import config

_initialized = False


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> None:
    """Install console (and optional file) handlers on the root logger once."""
    global _initialized
    if _initialized:
        return

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "whiteboard.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _initialized = True
    logger.info("Logging system initialized")
