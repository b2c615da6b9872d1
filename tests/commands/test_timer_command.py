"""Unit tests for the focus, break and cycle commands.

The full-screen TimerDisplay is replaced with a mock so these tests only
cover argument handling, config defaults and the summary printed afterwards.
"""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pomotrack_cli.main import app
from pomotrack_cli.models.timer.durations import MAX_TIME_MESSAGE, ZERO_TIME_MESSAGE
from pomotrack_cli.utils.exit_codes import ERROR_CONFIG, ERROR_INVALID_ARGS

runner = CliRunner()


@pytest.fixture()
def display(patch_config_service):
    """Mock TimerDisplay; yields the instance the commands will use."""
    with patch("pomotrack_cli.commands.timer.TimerDisplay") as display_cls:
        instance = display_cls.return_value
        instance.run_countdown.return_value = "completed"
        instance.run_cycle.return_value = "completed"
        yield instance


def _countdown(display):
    countdown, label = display.run_countdown.call_args[0]
    return countdown, label


def _engine(display):
    return display.run_cycle.call_args[0][0]


# ---------------------------------------------------------------------------
# focus / break
# ---------------------------------------------------------------------------


class TestFocusCommand:
    def test_uses_configured_default(self, display):
        result = runner.invoke(app, ["focus"])

        assert result.exit_code == 0
        countdown, label = _countdown(display)
        assert label == "Focus"
        assert countdown.saved_seconds == 1500
        assert "Focus complete!" in result.output

    def test_explicit_duration(self, display):
        result = runner.invoke(app, ["focus", "10:30"])

        assert result.exit_code == 0
        countdown, _ = _countdown(display)
        assert countdown.saved_seconds == 630

    def test_zero_duration_rejected(self, display):
        result = runner.invoke(app, ["focus", "00:00"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert ZERO_TIME_MESSAGE in result.output
        display.run_countdown.assert_not_called()

    def test_over_maximum_rejected(self, display):
        result = runner.invoke(app, ["focus", "61:00"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert MAX_TIME_MESSAGE in result.output

    def test_malformed_duration_rejected(self, display):
        result = runner.invoke(app, ["focus", "soon"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert "Invalid duration" in result.output

    def test_stopped_early_shows_remaining(self, display):
        display.run_countdown.return_value = "stopped"

        result = runner.invoke(app, ["focus", "5:00"])

        assert result.exit_code == 0
        assert "Focus stopped" in result.output
        assert "Remaining: 05:00" in result.output

    def test_display_uses_configured_theme(self, display, patch_config_service):
        patch_config_service.set("ui.theme", "dark")
        with patch("pomotrack_cli.commands.timer.TimerDisplay") as display_cls:
            display_cls.return_value.run_countdown.return_value = "completed"
            runner.invoke(app, ["focus", "1:00"])

        assert display_cls.call_args.kwargs["theme"] == "dark"


class TestBreakCommand:
    def test_uses_configured_default(self, display):
        result = runner.invoke(app, ["break"])

        assert result.exit_code == 0
        countdown, label = _countdown(display)
        assert label == "Break"
        assert countdown.saved_seconds == 300
        assert "Break complete!" in result.output

    def test_zero_break_rejected_outside_cycle_mode(self, display):
        result = runner.invoke(app, ["break", "0:00"])

        assert result.exit_code == ERROR_INVALID_ARGS
        assert ZERO_TIME_MESSAGE in result.output

    def test_config_default_zero_break_rejected(self, display, patch_config_service):
        patch_config_service.set("timer.break_time", "00:00")

        result = runner.invoke(app, ["break"])

        assert result.exit_code == ERROR_INVALID_ARGS


# ---------------------------------------------------------------------------
# cycle
# ---------------------------------------------------------------------------


class TestCycleCommand:
    def test_uses_configured_defaults(self, display):
        result = runner.invoke(app, ["cycle"])

        assert result.exit_code == 0
        engine = _engine(display)
        assert engine.focus_seconds == 1500
        assert engine.break_seconds == 300
        assert engine.total_cycles == 4
        assert "All cycles completed!" in result.output

    def test_options(self, display):
        result = runner.invoke(app, ["cycle", "-f", "50:00", "-b", "10:00", "-c", "3"])

        assert result.exit_code == 0
        engine = _engine(display)
        assert engine.focus_seconds == 3000
        assert engine.break_seconds == 600
        assert engine.total_cycles == 3

    def test_zero_break_allowed(self, display):
        result = runner.invoke(app, ["cycle", "--break", "00:00"])

        assert result.exit_code == 0
        assert _engine(display).break_seconds == 0

    def test_zero_focus_rejected(self, display):
        result = runner.invoke(app, ["cycle", "--focus", "00:00"])

        assert result.exit_code == ERROR_INVALID_ARGS
        display.run_cycle.assert_not_called()

    @pytest.mark.parametrize("requested,expected", [("150", 99), ("0", 1)])
    def test_cycle_count_is_clamped(self, display, requested, expected):
        result = runner.invoke(app, ["cycle", "--cycles", requested])

        assert result.exit_code == 0
        assert _engine(display).total_cycles == expected

    def test_stopped_shows_progress(self, display):
        display.run_cycle.return_value = "stopped"

        result = runner.invoke(app, ["cycle", "-c", "2"])

        assert result.exit_code == 0
        assert "Cycle mode stopped" in result.output
        assert "Cycle 1 of 2 - Focus" in result.output

    def test_configured_cycle_count(self, display, patch_config_service):
        patch_config_service.set("timer.cycles", 6)

        runner.invoke(app, ["cycle"])

        assert _engine(display).total_cycles == 6


class TestConfigErrors:
    def test_broken_config_file_exits_with_config_code(self, display, patch_config_service):
        patch_config_service._config = None
        patch_config_service.config_path.write_text("{broken")

        result = runner.invoke(app, ["focus"])

        assert result.exit_code == ERROR_CONFIG
        assert "Failed to load config" in result.output

    def test_unexpected_error_exits_with_general_code(self, display):
        display.run_countdown.side_effect = OSError("terminal went away")

        result = runner.invoke(app, ["focus", "1:00"])

        assert result.exit_code == 1
        assert "An unexpected error occurred" in result.output
