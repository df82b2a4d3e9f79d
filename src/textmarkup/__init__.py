"""textmarkup - rich text that behaves like a string.

A block of text with inline bold/italic/code/link stylings that can be
sliced, concatenated and searched-and-replaced while every styling keeps
covering the characters it covered before.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from textmarkup.errors import (
    ConstructionError,
    DeserializationError,
    TextMarkupError,
)
from textmarkup.models import Markup, MarkupType
from textmarkup.serialization import Serialization

__version__ = "0.1.0"

__all__ = [
    "ConstructionError",
    "DeserializationError",
    "Markup",
    "MarkupType",
    "Serialization",
    "TextMarkupError",
    "setup_logging",
]


def setup_logging() -> None:
    """Configure logging to the console and, if configured, a rotating file.

    Only entry points call this; importing the library never touches the
    logging configuration.
    """
    from textmarkup.config import get_settings

    config = get_settings().log

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if config.log_dir is None:
        return

    config.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.log_dir / f"textmarkup.{os.getpid()}.log"

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
