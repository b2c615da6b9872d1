"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

from pomotrack_cli.utils import logger as logger_mod


def _file_handlers(logger):
    return [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = logger_mod.get_logger()

    assert (tmp_path / "pomotrack.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "pomotrack_cli"


def test_get_logger_is_singleton(tmp_path):
    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert logger_mod.get_logger() is logger_mod.get_logger()


def test_handler_rotates(tmp_path):
    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = logger_mod.get_logger()

    handlers = _file_handlers(logger)
    assert len(handlers) == 1
    assert handlers[0].maxBytes == 5 * 1024 * 1024
    assert handlers[0].backupCount == 3


def test_foreign_handler_does_not_block_file_handler(tmp_path):
    """A handler someone else attached is not mistaken for our file handler."""
    app_logger = logging.getLogger("pomotrack_cli")
    other = logging.NullHandler()
    app_logger.addHandler(other)
    try:
        with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
            logger = logger_mod.get_logger()
        logger.info("hello from the app")
        _flush(logger)

        assert len(_file_handlers(logger)) == 1
        assert "hello from the app" in (tmp_path / "pomotrack.log").read_text()
    finally:
        app_logger.removeHandler(other)


def test_reinitialising_does_not_duplicate_file_handler(tmp_path):
    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger_mod.get_logger()
        logger_mod._logger = None
        logger = logger_mod.get_logger()

    assert len(_file_handlers(logger)) == 1


def test_engine_records_reach_log_file(tmp_path, scheduler):
    """Module loggers under pomotrack_cli.* write through the app handler."""
    from pomotrack_cli.models.timer.cycle import CycleEngine

    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = logger_mod.get_logger()

    CycleEngine(60, 30, 2, scheduler=scheduler).start()
    _flush(logger)

    content = (tmp_path / "pomotrack.log").read_text()
    assert "cycle session started" in content
    assert "[pomotrack_cli.models.timer.cycle]" in content


def test_does_not_propagate_to_root(tmp_path):
    with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert logger_mod.get_logger().propagate is False
