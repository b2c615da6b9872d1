"""Shared test fixtures and configuration.

Keeps tests away from the real user config and log directories.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from pomotrack_cli.models.timer.scheduler import ManualScheduler


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_log_dir(tmp_path):
    """Send the application log file to a per-test temporary directory."""
    import pomotrack_cli.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    with patch(
        "pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    app_logger = logging.getLogger("pomotrack_cli")
    for handler in list(app_logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            app_logger.removeHandler(handler)
    logger_mod._logger = original


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from pomotrack_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "pomotrack_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        svc = ConfigService()
        yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def patch_config_service(tmp_config):
    """Route every command module's get_config_service() to tmp_config."""
    with patch(
        "pomotrack_cli.commands.timer.get_config_service", return_value=tmp_config
    ):
        with patch(
            "pomotrack_cli.commands.config.get_config_service",
            return_value=tmp_config,
        ):
            yield tmp_config


# ---------------------------------------------------------------------------
# Virtual time
# ---------------------------------------------------------------------------


@pytest.fixture()
def scheduler() -> ManualScheduler:
    """A virtual clock starting at t=0."""
    return ManualScheduler()
