"""Single-key terminal input for the live timer display."""

import select
import sys
import termios
import tty
from typing import Optional, TextIO

from mywarrior_cli.utils.logger import get_child_logger


class KeyboardHandler:
    """Cbreak-mode keyboard reader.

    Constructing the handler switches the terminal to cbreak mode;
    :meth:`stop` restores the saved settings and must run on every exit path.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self.old_settings = None
        self._logger = get_child_logger("tracking.keyboard")
        self._setup()

    def _setup(self):
        """Setup terminal for single-key input."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError) as e:
            # Not a TTY (piped input, CI); keys still arrive line by line
            self._logger.debug("cbreak mode unavailable: %s", e)

    def get_key(self, timeout: float = 0.0) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for a single keypress.

        Returns the lowercased key, or None if no key arrived in time.
        Raises EOFError once the input stream is closed.
        """
        ready, _, _ = select.select([self.stream], [], [], timeout)
        if not ready:
            return None
        key = self.stream.read(1)
        if key == "":
            raise EOFError
        return key.lower()

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            except termios.error as e:
                self._logger.warning("could not restore terminal settings: %s", e)
            self.old_settings = None
