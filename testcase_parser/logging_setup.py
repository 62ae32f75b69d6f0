"""Logging setup for the command-line tool.

Library modules only create loggers under the ``testcase_parser`` hierarchy;
handlers are attached here, once, by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``testcase_parser`` logger.

    Parameters
    ----------
    level:
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``), case-insensitive.
    log_file:
        Optional path to a log file with timestamped records.
    console:
        Optional Rich console for the console handler (defaults to stderr).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("testcase_parser")
    logger.setLevel(numeric_level)

    # Repeated calls replace rather than stack handlers
    logger.handlers.clear()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
    )
    rich_handler.setLevel(numeric_level)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
