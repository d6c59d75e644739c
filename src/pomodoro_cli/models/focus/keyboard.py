"""Non-blocking keyboard input for the timer screen."""

import select
import sys
from typing import Optional

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None
    tty = None


class KeyboardHandler:
    """Reads single keypresses from stdin without blocking (POSIX terminals)."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode so keys arrive unbuffered."""
        if termios is None:
            return
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a TTY (piped input, test runner)
            self.old_settings = None

    def get_key(self, timeout: float = 0) -> Optional[str]:
        """
        Return one key, waiting at most ``timeout`` seconds.

        Case is preserved: "w" and "W" are different bindings.
        """
        try:
            ready, _, _ = select.select([sys.stdin], [], [], timeout)
        except (OSError, ValueError):
            return None
        if ready:
            return sys.stdin.read(1)
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
