"""Periodic overrun reminder."""

from __future__ import annotations

import threading
from collections.abc import Callable

from mywarrior_cli.utils.logger import get_child_logger

DEFAULT_REMINDER_SECONDS = 10


class ReminderTicker:
    """Calls ``notify`` right away when armed, then every ``period`` seconds.

    The ticker owns one daemon thread. ``disarm`` and the check in front of
    every ``notify`` share ``_lock``, so once ``disarm`` returns no further
    notification can start. A notification already in progress delays
    ``disarm`` until it returns, so notifiers must be bounded in time
    (see ``notify.DEFAULT_COMMAND_TIMEOUT``). A notifier that raises is
    logged and the ticker keeps going.
    """

    def __init__(
        self,
        notify: Callable[[], None],
        period: float = DEFAULT_REMINDER_SECONDS,
        wait: Callable[[float], bool] | None = None,
    ):
        if period <= 0:
            raise ValueError("reminder period must be positive")
        self.notify = notify
        self.period = period
        self._disarmed = threading.Event()
        self._wait = wait or self._disarmed.wait
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._fired = 0
        self._logger = get_child_logger("tracking.reminder")

    @property
    def armed(self) -> bool:
        return self._thread is not None and not self._disarmed.is_set()

    @property
    def fired(self) -> int:
        """Number of notifications delivered so far."""
        return self._fired

    def arm(self) -> None:
        """Start reminding. Arming twice, or after disarm, does nothing."""
        with self._lock:
            if self._thread is not None or self._disarmed.is_set():
                return
            self._thread = threading.Thread(
                target=self._run, name="reminder", daemon=True
            )
            self._thread.start()
        self._logger.info("reminder armed (every %ss)", self.period)

    def disarm(self, timeout: float | None = 2.0) -> None:
        """Stop reminding. Safe to call any number of times, armed or not."""
        self._disarmed.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        while True:
            with self._lock:
                if self._disarmed.is_set():
                    return
                try:
                    self.notify()
                except Exception:
                    self._logger.exception("reminder notification failed")
                self._fired += 1
            if self._wait(self.period):
                return
