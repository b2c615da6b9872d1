"""pomotrack - a Pomodoro focus/break/cycle timer for the terminal."""

__version__ = "0.1.0"
