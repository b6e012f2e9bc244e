"""Tests for CLI logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from clip_emitter.logging_config import setup_logging


def _rich_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, RichHandler)]


class TestSetupLogging:
    def test_handler_on_package_logger(self):
        setup_logging()
        assert len(_rich_handlers(logging.getLogger("clip_emitter"))) == 1

    def test_root_logger_untouched(self):
        setup_logging()
        assert _rich_handlers(logging.getLogger()) == []

    def test_idempotent(self):
        setup_logging()
        setup_logging()
        assert len(_rich_handlers(logging.getLogger("clip_emitter"))) == 1

    def test_verbose_levels(self):
        package_logger = logging.getLogger("clip_emitter")
        setup_logging(verbose=True)
        assert package_logger.level == logging.DEBUG
        setup_logging(verbose=False)
        assert package_logger.level == logging.WARNING

    def test_records_still_propagate(self, caplog):
        setup_logging()
        with caplog.at_level(logging.WARNING, logger="clip_emitter"):
            logging.getLogger("clip_emitter.application").warning("write failed")
        assert "write failed" in caplog.text
