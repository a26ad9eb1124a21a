"""Session state for a single tracked work period."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from mywarrior_cli.models.record import SessionRecord

SECONDS_PER_MINUTE = 60
DEFAULT_INTERVAL_MINUTES = 25


class Phase(str, Enum):
    """Lifecycle phase of a running session."""

    COUNTING = "counting"
    OVERRUN = "overrun"
    STOPPED = "stopped"


class StopReason(str, Enum):
    """Why a session ended."""

    USER_STOPPED_EARLY = "user_stopped_early"
    TIMER_ELAPSED_ACKNOWLEDGED = "timer_elapsed_acknowledged"
    PROCESS_INTERRUPTED = "process_interrupted"


def planned_seconds_for(intervals: int, interval_minutes: int = DEFAULT_INTERVAL_MINUTES) -> int:
    """Planned duration of ``intervals`` back-to-back work intervals."""
    if intervals < 1:
        raise ValueError("at least one interval is required")
    if interval_minutes < 1:
        raise ValueError("interval length must be at least one minute")
    return intervals * interval_minutes * SECONDS_PER_MINUTE


@dataclass
class Session:
    """One timed work period.

    ``phase`` is read by the countdown, the input listener and the reminder
    from different threads, so every transition goes through ``_lock``.
    """

    planned_seconds: int
    start: datetime
    end: datetime | None = None
    _phase: Phase = field(default=Phase.COUNTING, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def phase(self) -> Phase:
        with self._lock:
            return self._phase

    @property
    def is_stopped(self) -> bool:
        return self.phase is Phase.STOPPED

    def elapsed(self, at: datetime) -> float:
        """Seconds since start, as observed at ``at``."""
        return max(0.0, (at - self.start).total_seconds())

    def enter_overrun(self) -> bool:
        """Move COUNTING -> OVERRUN. Returns True only for the call that made the move."""
        with self._lock:
            if self._phase is not Phase.COUNTING:
                return False
            self._phase = Phase.OVERRUN
            return True

    def finish(self, at: datetime) -> SessionRecord:
        """Stop the session and produce its record.

        An ``at`` earlier than ``start`` (wall clock stepped back) is clamped
        to ``start``.

        Raises:
            RuntimeError: if the session was already finished
        """
        with self._lock:
            if self._phase is Phase.STOPPED:
                raise RuntimeError("session already finished")
            self._phase = Phase.STOPPED
            self.end = max(at, self.start)
            return SessionRecord.from_datetimes(self.start, self.end)
