"""Cross-platform non-blocking key reader for the live timer screen."""

import sys
from typing import Optional


class KeyboardHandler:
    """Non-blocking keyboard input handler for POSIX terminals."""

    def __init__(self):
        self.fd = None
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal into cbreak mode so single keys arrive unbuffered."""
        import termios
        import tty

        try:
            self.fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, ValueError, termios.error):
            # stdin is not a tty (piped input, test runner)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the lower-cased key or None if nothing was pressed.
        """
        if self.old_settings is None:
            return None

        import select

        if select.select([sys.stdin], [], [], 0)[0]:
            key = sys.stdin.read(1)
            return key.lower()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is None:
            return

        import termios

        termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        import msvcrt

        self.msvcrt = msvcrt

    def get_key(self) -> Optional[str]:
        """Get key on Windows."""
        if self.msvcrt.kbhit():
            key = self.msvcrt.getwch()
            return key.lower()
        return None

    def stop(self):
        """No cleanup needed on Windows."""


def create_keyboard_handler():
    """Return the key reader matching the current platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
