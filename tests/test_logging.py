"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest
from textual.logging import TextualHandler

from taskboard.logging import LOGGER_NAME, log_level, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(
        "verbose,expected",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_log_level(self, verbose, expected):
        assert log_level(verbose) == expected

    def test_cli_logs_to_stderr(self):
        setup_logging(1)

        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert not isinstance(handlers[0], TextualHandler)

    def test_tui_logs_through_textual(self):
        setup_logging(0, tui=True)

        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert [type(h) for h in handlers] == [TextualHandler]
        assert handlers[0].level == logging.WARNING

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path):
        setup_logging(1, tmp_path / "first.log")
        setup_logging(1, tmp_path / "second.log")

        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert len(handlers) == 2
        files = [h.baseFilename for h in handlers if isinstance(h, logging.FileHandler)]
        assert files == [str(tmp_path / "second.log")]

    def test_log_file_receives_records(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "taskboard.log"
        setup_logging(2, log_file, tui=True)

        logging.getLogger("taskboard.services.reorder_engine").info("Task moved: t1")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        content = log_file.read_text()
        assert "taskboard.services.reorder_engine - INFO - Task moved: t1" in content
