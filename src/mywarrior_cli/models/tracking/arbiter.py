"""Single-winner resolution of concurrent stop signals."""

from __future__ import annotations

import threading

from mywarrior_cli.utils.logger import get_child_logger

from .session import StopReason


class TerminationArbiter:
    """Single-use latch deciding how a session ended.

    Any number of producers (input listener, SIGINT handler, tests) may call
    :meth:`signal_stop` from any thread. The first call wins; every later
    call returns ``False`` without blocking. :meth:`await_stop` returns the
    winning reason once the latch is released.

    The lock is taken without blocking: a producer that finds it held knows
    another producer is resolving the latch right now, so it loses. This also
    keeps the SIGINT handler from deadlocking if it interrupts the main
    thread while that thread holds the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._released = threading.Event()
        self._reason: StopReason | None = None
        self._logger = get_child_logger("tracking.arbiter")

    @property
    def stopped(self) -> threading.Event:
        """Event set once a reason has been accepted."""
        return self._released

    @property
    def resolved(self) -> bool:
        return self._released.is_set()

    @property
    def reason(self) -> StopReason | None:
        """Winning reason, or None while unresolved."""
        return self._reason if self._released.is_set() else None

    def signal_stop(self, reason: StopReason) -> bool:
        """Ask for the session to end. Returns True only for the winning call."""
        if self._released.is_set() or not self._lock.acquire(blocking=False):
            self._logger.debug("ignored stop signal: %s", reason.value)
            return False
        try:
            if self._reason is not None:
                self._logger.debug("ignored stop signal: %s", reason.value)
                return False
            self._reason = reason
        finally:
            self._lock.release()

        self._released.set()
        self._logger.info("stop accepted: %s", reason.value)
        return True

    def await_stop(self, timeout: float | None = None) -> StopReason | None:
        """Block until a stop is accepted; None if ``timeout`` ran out first."""
        if not self._released.wait(timeout):
            return None
        return self._reason
