"""Tests for the shared logging setup."""

import logging
import logging.handlers

import pytest

from src.logging_config import LOG_FILE_NAME, setup_logging


@pytest.fixture
def root_logger():
    """Root logger restored to its previous handlers and level afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _added(root, before):
    return [h for h in root.handlers if h not in before]


class TestSetupLogging:
    def test_writes_to_log_dir(self, root_logger, tmp_path):
        log_file = setup_logging(log_dir=tmp_path / "logs")
        assert log_file == tmp_path / "logs" / LOG_FILE_NAME

        logging.getLogger("src.lineup_engine.test").warning("Override rejected for x")
        for handler in root_logger.handlers:
            handler.flush()
        assert "Override rejected for x" in log_file.read_text(encoding="utf-8")

    def test_console_level(self, root_logger, tmp_path):
        before = list(root_logger.handlers)
        setup_logging("DEBUG", console_level="WARNING", log_dir=tmp_path)

        added = _added(root_logger, before)
        file_handlers = [
            h for h in added if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        console = [h for h in added if h not in file_handlers]
        assert root_logger.level == logging.DEBUG
        assert [h.level for h in file_handlers] == [logging.DEBUG]
        assert [h.level for h in console] == [logging.WARNING]

    def test_second_call_is_noop(self, root_logger, tmp_path):
        first = setup_logging(log_dir=tmp_path / "a")
        count = len(root_logger.handlers)
        second = setup_logging(log_dir=tmp_path / "b")
        assert second == first
        assert len(root_logger.handlers) == count
        assert not (tmp_path / "b").exists()

    def test_unknown_level_falls_back_to_info(self, root_logger, tmp_path):
        setup_logging("CHATTY", log_dir=tmp_path)
        assert root_logger.level == logging.INFO
