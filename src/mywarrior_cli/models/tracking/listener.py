"""Background listener turning the stop gesture into a stop signal."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import TextIO

from mywarrior_cli.utils.logger import get_child_logger

from .arbiter import TerminationArbiter
from .session import Phase, Session, StopReason

ENTER_KEYS = ("\n", "\r")

# Returns a key, None when nothing arrived yet, raises EOFError when the source is exhausted
KeySource = Callable[[], "str | None"]


class LineSource:
    """Blocking line reader: every line read counts as an Enter press."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def __call__(self) -> str | None:
        line = self.stream.readline()
        if line == "":
            raise EOFError
        return "\n"


class InputListener:
    """Reads keys on a daemon thread and signals the arbiter on a stop key.

    Enter always stops; ``quit_keys`` adds more (``q`` in the live display).
    The listener is never joined: once the arbiter is resolved through some
    other path it is abandoned, and it only ever touches the arbiter and its
    own ``last_input``.
    """

    def __init__(
        self,
        arbiter: TerminationArbiter,
        session: Session,
        read_key: KeySource,
        quit_keys: Iterable[str] = (),
    ):
        self.arbiter = arbiter
        self.session = session
        self.read_key = read_key
        self.stop_keys = frozenset(ENTER_KEYS) | {k.lower() for k in quit_keys}
        self._last_input = ""
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._logger = get_child_logger("tracking.listener")

    @property
    def last_input(self) -> str:
        """Printable form of the last key read, for the display echo."""
        with self._lock:
            return self._last_input

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="input-listener", daemon=True)
        self._thread.start()

    def reason_for_phase(self) -> StopReason:
        if self.session.phase is Phase.OVERRUN:
            return StopReason.TIMER_ELAPSED_ACKNOWLEDGED
        return StopReason.USER_STOPPED_EARLY

    def _run(self) -> None:
        while not self.arbiter.resolved:
            try:
                key = self.read_key()
            except EOFError:
                self._logger.debug("input source closed")
                return
            if key is None:
                continue
            with self._lock:
                self._last_input = repr(key)
            if key.lower() in self.stop_keys:
                self.arbiter.signal_stop(self.reason_for_phase())
                return
