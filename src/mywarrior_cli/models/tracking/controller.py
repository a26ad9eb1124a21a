"""Session controller: runs one tracked session from start to log record."""

from __future__ import annotations

import signal
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from mywarrior_cli.services.session_log import SessionLog, SessionLogError
from mywarrior_cli.utils.clock import format_status, now
from mywarrior_cli.utils.logger import get_child_logger

from .arbiter import TerminationArbiter
from .countdown import DEFAULT_TICK_SECONDS, Countdown
from .display import Display, NullDisplay
from .listener import InputListener, KeySource
from .notify import Notifier, NullNotifier
from .reminder import DEFAULT_REMINDER_SECONDS, ReminderTicker
from .session import Phase, Session, SessionRecord, StopReason


class ControllerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass(frozen=True)
class SessionOutcome:
    """What a finished session produced."""

    record: SessionRecord
    reason: StopReason
    log_error: SessionLogError | None = None

    @property
    def worked_seconds(self) -> int:
        return self.record.duration_seconds

    @property
    def logged(self) -> bool:
        return self.log_error is None


class SessionController:
    """
    Run a single session: IDLE -> RUNNING -> FINALIZING -> DONE.

    While RUNNING the countdown ticks on the calling thread, the input
    listener reads keys on its own thread and SIGINT is routed to the
    arbiter. Whichever stop arrives first ends the session; the reminder is
    disarmed, the display closed and exactly one record appended to the log.
    """

    def __init__(
        self,
        planned_seconds: int,
        log: SessionLog,
        *,
        display: Display | None = None,
        notifier: Notifier | None = None,
        reminder_seconds: float = DEFAULT_REMINDER_SECONDS,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        quit_keys: str = "",
        read_key: KeySource | None = None,
        clock: Callable[[], datetime] = now,
        handle_sigint: bool = True,
    ):
        if planned_seconds < 1:
            raise ValueError("planned duration must be at least one second")
        self.planned_seconds = planned_seconds
        self.log = log
        self.display = display or NullDisplay()
        self.notifier = notifier or NullNotifier()
        self.reminder_seconds = reminder_seconds
        self.tick_seconds = tick_seconds
        self.quit_keys = quit_keys
        self.read_key = read_key or self.display.poll_key
        self.clock = clock
        self.handle_sigint = handle_sigint

        self.state = ControllerState.IDLE
        self.arbiter = TerminationArbiter()
        self.session: Session | None = None
        self._previous_sigint = None
        self._logger = get_child_logger("tracking.controller")

    def stop(self, reason: StopReason = StopReason.USER_STOPPED_EARLY) -> bool:
        """Request the session to end from outside (another thread, a test)."""
        return self.arbiter.signal_stop(reason)

    def run(self) -> SessionOutcome:
        """Track one session and return its outcome. Can only be called once.

        SIGINT stays routed to the arbiter from before the start time is
        taken until the record has been appended, so a second Ctrl-C while
        finalizing cannot lose the record.
        """
        if self.state is not ControllerState.IDLE:
            raise RuntimeError("a controller runs exactly one session")

        sigint_installed = self._install_sigint_handler()
        try:
            return self._run_session()
        finally:
            self._restore_sigint_handler(sigint_installed)

    def _run_session(self) -> SessionOutcome:
        session = Session(planned_seconds=self.planned_seconds, start=self.clock())
        self.session = session
        reminder = ReminderTicker(self.notifier, period=self.reminder_seconds)
        listener = InputListener(self.arbiter, session, self.read_key, self.quit_keys)
        countdown = Countdown(
            session,
            self.arbiter.stopped,
            clock=self.clock,
            tick_seconds=self.tick_seconds,
            on_overrun=reminder.arm,
        )

        self.state = ControllerState.RUNNING
        self._logger.info(
            "session started at %s, planned %ss", session.start, self.planned_seconds
        )

        self.display.open()
        try:
            listener.start()
            countdown.run(
                lambda elapsed, phase: self._refresh(elapsed, phase, listener.last_input)
            )
            reason = self.arbiter.await_stop()
        finally:
            self.state = ControllerState.FINALIZING
            reminder.disarm()
            self.display.close()

        record = session.finish(self.clock())
        self._logger.info(
            "session stopped (%s) after %ss, %d reminder(s)",
            reason.value,
            record.duration_seconds,
            reminder.fired,
        )

        log_error = None
        try:
            self.log.append(record)
        except SessionLogError as e:
            log_error = e

        self.state = ControllerState.DONE
        return SessionOutcome(record=record, reason=reason, log_error=log_error)

    def _refresh(self, elapsed: float, phase: Phase, last_input: str) -> None:
        progress = min(1.0, elapsed / self.planned_seconds)
        self.display.refresh(
            format_status(elapsed, self.planned_seconds),
            last_input,
            phase=phase,
            progress=progress,
        )

    def _on_sigint(self, signum, frame) -> None:
        self.arbiter.signal_stop(StopReason.PROCESS_INTERRUPTED)

    def _install_sigint_handler(self) -> bool:
        # signal.signal only works on the main thread
        if not self.handle_sigint or threading.current_thread() is not threading.main_thread():
            return False
        self._previous_sigint = signal.signal(signal.SIGINT, self._on_sigint)
        return True

    def _restore_sigint_handler(self, installed: bool) -> None:
        if installed:
            previous = self._previous_sigint
            signal.signal(
                signal.SIGINT,
                previous if previous is not None else signal.default_int_handler,
            )
