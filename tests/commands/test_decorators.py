"""Unit tests for command decorators."""

from unittest.mock import patch

import pytest
import typer

from pomotrack_cli.commands.decorators import AppError, command_wrapper
from pomotrack_cli.utils.exit_codes import ERROR_CONFIG, ERROR_GENERAL, ERROR_INVALID_ARGS
from pomotrack_cli.utils.logger import get_logger


class TestAppError:
    def test_default_exit_code(self):
        err = AppError("boom")
        assert str(err) == "boom"
        assert err.exit_code == ERROR_GENERAL

    def test_custom_exit_code(self):
        assert AppError("bad", exit_code=ERROR_CONFIG).exit_code == ERROR_CONFIG


class TestCommandWrapper:
    def test_returns_result(self):
        @command_wrapper
        def cmd(x):
            return x * 2

        assert cmd(21) == 42

    def test_preserves_metadata(self):
        @command_wrapper
        def cmd():
            """Docstring."""

        assert cmd.__name__ == "cmd"
        assert cmd.__doc__ == "Docstring."

    def test_app_error_becomes_exit(self, capsys):
        @command_wrapper
        def cmd():
            raise AppError("config missing", exit_code=ERROR_CONFIG)

        with pytest.raises(typer.Exit) as exc_info:
            cmd()

        assert exc_info.value.exit_code == ERROR_CONFIG
        out = capsys.readouterr().out
        assert "config missing" in out
        assert "pomotrack config show" in out

    def test_non_config_error_has_no_config_hint(self, capsys):
        @command_wrapper
        def cmd():
            raise AppError("bad input", exit_code=ERROR_INVALID_ARGS)

        with pytest.raises(typer.Exit):
            cmd()

        out = capsys.readouterr().out
        assert "bad input" in out
        assert "config show" not in out

    def test_failure_log_names_exit_code(self, tmp_path):
        @command_wrapper
        def cmd():
            raise AppError("config missing", exit_code=ERROR_CONFIG)

        with patch("pomotrack_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
            with pytest.raises(typer.Exit):
                cmd()

        logger = get_logger()
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "pomotrack.log").read_text()
        assert "command failed: cmd" in content
        assert "[ERROR_CONFIG]" in content

    def test_typer_exit_passes_through(self):
        @command_wrapper
        def cmd():
            raise typer.Exit(0)

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == 0

    def test_unexpected_error_exits_one(self, capsys):
        @command_wrapper
        def cmd():
            raise ZeroDivisionError("division by zero")

        with pytest.raises(typer.Exit) as exc_info:
            cmd()

        assert exc_info.value.exit_code == ERROR_GENERAL
        assert "An unexpected error occurred" in capsys.readouterr().out
