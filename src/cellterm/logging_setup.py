"""Logging configuration for the cellterm package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


_LOGGER_NAME = "cellterm"


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Attach a handler to the package logger.

    While the renderer owns the screen, anything printed to the terminal
    corrupts the frame, so pass ``log_file`` in that case. Without one,
    records go to stderr through rich. Calling this twice is a no-op.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.addHandler(handler)

    logger.debug("logging configured level=%s file=%s", level, log_file)
    return logger
