"""Cooperative countdown loop."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from datetime import datetime

from mywarrior_cli.utils.logger import get_child_logger

from .session import Phase, Session

DEFAULT_TICK_SECONDS = 0.5
MAX_TICK_SECONDS = 1.0

TickCallback = Callable[[float, Phase], None]


class Countdown:
    """Step through a session one tick at a time until a stop is requested.

    Between ticks the loop waits on ``stop_event`` (at most ``tick_seconds``)
    and re-checks it immediately after waking, so a stop from another thread
    is noticed within one tick. Crossing the planned duration moves the
    session to OVERRUN and calls ``on_overrun`` at most once; it is not
    called if a stop has already been requested.
    """

    def __init__(
        self,
        session: Session,
        stop_event: threading.Event,
        *,
        clock: Callable[[], datetime] = datetime.now,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        on_overrun: Callable[[], None] | None = None,
        wait: Callable[[float], bool] | None = None,
    ):
        if not 0 < tick_seconds <= MAX_TICK_SECONDS:
            raise ValueError(f"tick must be in (0, {MAX_TICK_SECONDS}] seconds")
        self.session = session
        self.stop_event = stop_event
        self.clock = clock
        self.tick_seconds = tick_seconds
        self.on_overrun = on_overrun
        self._wait = wait or stop_event.wait
        self._logger = get_child_logger("tracking.countdown")

    def progression(self) -> Iterator[float]:
        """Yield elapsed seconds once per tick while no stop is requested."""
        while not self.stop_event.is_set():
            elapsed = self.session.elapsed(self.clock())
            if elapsed >= self.session.planned_seconds and self.session.enter_overrun():
                self._logger.info("planned %ss elapsed, overrun begins", self.session.planned_seconds)
                # a stop that raced the transition must not arm the reminder
                if self.on_overrun is not None and not self.stop_event.is_set():
                    self.on_overrun()
            yield elapsed
            if self._wait(self.tick_seconds) or self.stop_event.is_set():
                return

    def run(self, tick: TickCallback) -> None:
        """Drive ``tick(elapsed, phase)`` until stopped."""
        for elapsed in self.progression():
            tick(elapsed, self.session.phase)
