"""Unit tests for testcase_parser.logging_setup."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from testcase_parser.logging_setup import setup_logging


class TestSetupLogging:
    """Tests for the setup_logging function."""

    def teardown_method(self) -> None:
        logger = logging.getLogger("testcase_parser")
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_returns_package_logger(self) -> None:
        logger = setup_logging()
        assert logger.name == "testcase_parser"
        assert logger.level == logging.INFO

    def test_case_insensitive_level(self) -> None:
        logger = setup_logging(level="debug")
        assert logger.level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self) -> None:
        logger = setup_logging(level="chatty")
        assert logger.level == logging.INFO

    def test_has_single_rich_handler_after_repeated_calls(self) -> None:
        setup_logging()
        logger = setup_logging()
        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1

    def test_file_handler_writes_records(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "parser.log"
        logger = setup_logging(log_file=log_file)
        logging.getLogger("testcase_parser.bdd.normalizer").warning("split feature")
        for handler in logger.handlers:
            handler.flush()
            if isinstance(handler, logging.FileHandler):
                handler.close()
        assert "split feature" in log_file.read_text(encoding="utf-8")
