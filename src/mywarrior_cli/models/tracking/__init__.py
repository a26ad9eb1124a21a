"""Session tracking - timer, stop arbitration and reminders."""

from .session import Phase, Session, SessionRecord, StopReason, planned_seconds_for
from .arbiter import TerminationArbiter
from .reminder import ReminderTicker
from .countdown import Countdown
from .listener import InputListener, LineSource
from .display import Display, LiveDisplay, NullDisplay, PlainDisplay
from .notify import BellNotifier, CommandNotifier, NullNotifier, build_notifier
from .controller import ControllerState, SessionController, SessionOutcome

__all__ = [
    "Phase",
    "Session",
    "SessionRecord",
    "StopReason",
    "planned_seconds_for",
    "TerminationArbiter",
    "ReminderTicker",
    "Countdown",
    "InputListener",
    "LineSource",
    "Display",
    "LiveDisplay",
    "NullDisplay",
    "PlainDisplay",
    "BellNotifier",
    "CommandNotifier",
    "NullNotifier",
    "build_notifier",
    "ControllerState",
    "SessionController",
    "SessionOutcome",
]
