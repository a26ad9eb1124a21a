"""Audible overrun notifiers."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable

from rich.console import Console

from mywarrior_cli.config import NotifyConfig
from mywarrior_cli.utils.logger import get_child_logger

Notifier = Callable[[], None]

# Upper bound on one sound command; disarming the reminder waits for it
DEFAULT_COMMAND_TIMEOUT = 2.0


class NullNotifier:
    """Does nothing; used for ``--quiet`` and tests."""

    def __call__(self) -> None:
        return None


class BellNotifier:
    """Rings the terminal bell."""

    def __init__(self, console: Console):
        self.console = console

    def __call__(self) -> None:
        self.console.bell()


class CommandNotifier:
    """Runs an external sound command, falling back to a bell if it cannot start."""

    def __init__(
        self,
        command: str,
        fallback: Notifier | None = None,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
    ):
        self.argv = shlex.split(command)
        if not self.argv:
            raise ValueError("notify command is empty")
        self.fallback = fallback
        self.timeout = timeout
        self._broken = False
        self._logger = get_child_logger("tracking.notify")

    def __call__(self) -> None:
        if self._broken:
            if self.fallback is not None:
                self.fallback()
            return
        try:
            subprocess.run(
                self.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self._logger.warning("notify command %s failed: %s", self.argv[0], e)
            self._broken = True
            if self.fallback is not None:
                self.fallback()


def build_notifier(config: NotifyConfig, console: Console, quiet: bool = False) -> Notifier:
    """Pick the notifier described by the ``notify`` config section."""
    if quiet or config.mode == "none":
        return NullNotifier()
    bell = BellNotifier(console)
    if config.mode == "bell" or not config.command.strip():
        return bell
    return CommandNotifier(config.command, fallback=bell)
