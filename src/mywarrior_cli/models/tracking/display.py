"""Timer displays: full-screen, single line and headless."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.text import Text

from .keyboard import KeyboardHandler
from .listener import LineSource
from .session import Phase


class Display(ABC):
    """What the session controller needs from a terminal.

    ``open`` and ``close`` bracket a session; the controller guarantees
    ``close`` runs on every exit path. ``poll_key`` is the input source handed
    to the input listener.
    """

    def open(self) -> None:
        """Prepare the terminal."""

    def close(self) -> None:
        """Restore the terminal."""

    @abstractmethod
    def refresh(
        self,
        status: str,
        last_input: str,
        *,
        phase: Phase = Phase.COUNTING,
        progress: float = 0.0,
    ) -> None:
        """Show the current status line and the echo of the last key."""

    @abstractmethod
    def poll_key(self) -> str | None:
        """Return the next key, None if none yet; raise EOFError when input is gone."""

    @property
    def stop_hint(self) -> str:
        return "Press Enter to stop"


@dataclass
class Frame:
    status: str
    last_input: str
    phase: Phase
    progress: float


class NullDisplay(Display):
    """Headless display that keeps every frame; input comes from ``keys``."""

    def __init__(self, keys: list[str] | None = None):
        self.frames: list[Frame] = []
        self.opened = False
        self.closed = False
        self._keys = list(keys or [])

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def refresh(self, status, last_input, *, phase=Phase.COUNTING, progress=0.0) -> None:
        self.frames.append(Frame(status, last_input, phase, progress))

    def poll_key(self) -> str | None:
        if not self._keys:
            raise EOFError
        return self._keys.pop(0)


class PlainDisplay(Display):
    """Rewrites a single console line; Enter on stdin stops the session."""

    def __init__(self, console: Console, stream: TextIO | None = None):
        self.console = console
        self._read_line = LineSource(stream or sys.stdin)
        self._width = 0

    def close(self) -> None:
        self.console.file.write("\n")
        self.console.file.flush()

    def refresh(self, status, last_input, *, phase=Phase.COUNTING, progress=0.0) -> None:
        line = status.ljust(self._width)
        self._width = len(status)
        self.console.file.write(f"\r{line}")
        self.console.file.flush()

    def poll_key(self) -> str | None:
        return self._read_line()


class LiveDisplay(Display):
    """Full-screen rich display with single-key controls."""

    KEY_TIMEOUT = 0.25

    def __init__(self, console: Console | None = None, quit_keys: str = "q"):
        self.console = console or Console()
        self.quit_keys = quit_keys
        self._live: Live | None = None
        self._keyboard: KeyboardHandler | None = None

    @property
    def stop_hint(self) -> str:
        keys = " or ".join(f"'{k}'" for k in self.quit_keys)
        return f"Press {keys} or Enter to stop" if keys else super().stop_hint

    def open(self) -> None:
        self._keyboard = KeyboardHandler()
        try:
            self._live = Live(
                self.create_layout("", "", Phase.COUNTING, 0.0),
                console=self.console,
                auto_refresh=False,
                screen=True,
            )
            self._live.start()
        except Exception:
            self._keyboard.stop()
            raise

    def close(self) -> None:
        try:
            if self._live is not None:
                self._live.stop()
        finally:
            self._live = None
            if self._keyboard is not None:
                self._keyboard.stop()
                self._keyboard = None

    def refresh(self, status, last_input, *, phase=Phase.COUNTING, progress=0.0) -> None:
        if self._live is None:
            return
        self._live.update(self.create_layout(status, last_input, phase, progress), refresh=True)

    def poll_key(self) -> str | None:
        # close() may clear the handler while the listener thread is polling
        keyboard = self._keyboard
        if keyboard is None:
            raise EOFError
        return keyboard.get_key(self.KEY_TIMEOUT)

    def create_layout(self, status: str, last_input: str, phase: Phase, progress: float) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        if phase is Phase.OVERRUN:
            title, color = "TIME IS UP", "red"
        else:
            title, color = "mywarrior", "cyan"

        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(
            Align.center(self._create_body_content(status, color, progress), vertical="middle")
        )

        footer = Text(self.stop_hint, style="dim", justify="center")
        if last_input:
            footer.append(f"  •  last input {last_input}", style="dim")
        layout["footer"].update(Align.center(footer, vertical="middle"))

        return layout

    def _create_body_content(self, status: str, color: str, progress: float) -> Group:
        timer_text = Text(status, style=f"bold {color}", justify="center")

        bar_width = 40
        pct = min(100, max(0, int(progress * 100)))
        filled = int(bar_width * pct / 100)
        progress_text = Text(justify="center")
        progress_text.append("▓" * filled + "░" * (bar_width - filled) + f"  {pct}%", style="dim")

        return Group(timer_text, Text(""), progress_text)
