"""Unit tests for the timer displays."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from rich.layout import Layout

from mywarrior_cli.models.tracking.display import LiveDisplay, NullDisplay, PlainDisplay
from mywarrior_cli.models.tracking.session import Phase


def _console(width=80):
    return Console(file=io.StringIO(), width=width, height=20, force_terminal=False, color_system=None)


class TestNullDisplay:
    def test_records_frames(self):
        display = NullDisplay()
        display.open()
        display.refresh("Time remaining: 00:03", "", progress=0.0)
        display.refresh("Time over since 00:01", "'x'", phase=Phase.OVERRUN, progress=1.0)
        display.close()

        assert display.opened and display.closed
        assert [f.status for f in display.frames] == [
            "Time remaining: 00:03",
            "Time over since 00:01",
        ]
        assert display.frames[1].phase is Phase.OVERRUN
        assert display.frames[1].last_input == "'x'"

    def test_poll_key_replays_then_eof(self):
        display = NullDisplay(keys=["a", "\n"])
        assert display.poll_key() == "a"
        assert display.poll_key() == "\n"
        with pytest.raises(EOFError):
            display.poll_key()

    def test_default_stop_hint(self):
        assert NullDisplay().stop_hint == "Press Enter to stop"


class TestPlainDisplay:
    def test_refresh_rewrites_the_line(self):
        console = _console()
        display = PlainDisplay(console, stream=io.StringIO())
        display.refresh("Time remaining: 25:00", "")
        display.refresh("Time over since 00:01", "", phase=Phase.OVERRUN)
        display.close()

        assert console.file.getvalue() == (
            "\rTime remaining: 25:00" "\rTime over since 00:01" "\n"
        )

    def test_shorter_status_is_padded(self):
        console = _console()
        display = PlainDisplay(console, stream=io.StringIO())
        display.refresh("Time remaining: 1:00:00", "")
        display.refresh("Time remaining: 59:59", "")

        assert console.file.getvalue().endswith("\rTime remaining: 59:59  ")

    def test_poll_key_reads_lines(self):
        display = PlainDisplay(_console(), stream=io.StringIO("\n"))
        assert display.poll_key() == "\n"
        with pytest.raises(EOFError):
            display.poll_key()


class TestLiveDisplay:
    def test_stop_hint_names_quit_keys(self):
        assert LiveDisplay(_console()).stop_hint == "Press 'q' or Enter to stop"

    def test_stop_hint_without_quit_keys(self):
        assert LiveDisplay(_console(), quit_keys="").stop_hint == "Press Enter to stop"

    def test_create_layout_has_sections(self):
        layout = LiveDisplay(_console()).create_layout("Time remaining: 24:59", "", Phase.COUNTING, 0.0)
        assert isinstance(layout, Layout)
        for name in ("header", "body", "footer"):
            assert layout[name] is not None

    def test_overrun_layout_says_time_is_up(self):
        console = _console()
        display = LiveDisplay(console)
        console.print(display.create_layout("Time over since 00:05", "'x'", Phase.OVERRUN, 1.0))
        rendered = console.file.getvalue()

        assert "TIME IS UP" in rendered
        assert "Time over since 00:05" in rendered
        assert "100%" in rendered
        assert "last input 'x'" in rendered

    def test_refresh_and_poll_before_open(self):
        display = LiveDisplay(_console())
        display.refresh("Time remaining: 25:00", "")  # no-op
        with pytest.raises(EOFError):
            display.poll_key()

    def test_open_and_close_manage_terminal(self, mocker):
        keyboard_cls = mocker.patch("mywarrior_cli.models.tracking.display.KeyboardHandler")
        live_cls = mocker.patch("mywarrior_cli.models.tracking.display.Live")
        keyboard_cls.return_value.get_key.return_value = "q"

        display = LiveDisplay(_console())
        display.open()
        live_cls.return_value.start.assert_called_once()

        display.refresh("Time remaining: 24:00", "")
        live_cls.return_value.update.assert_called_once()
        assert display.poll_key() == "q"
        keyboard_cls.return_value.get_key.assert_called_once_with(LiveDisplay.KEY_TIMEOUT)

        display.close()
        live_cls.return_value.stop.assert_called_once()
        keyboard_cls.return_value.stop.assert_called_once()

    def test_keyboard_restored_when_live_fails_to_start(self, mocker):
        keyboard_cls = mocker.patch("mywarrior_cli.models.tracking.display.KeyboardHandler")
        live = MagicMock()
        live.start.side_effect = RuntimeError("no screen")
        mocker.patch("mywarrior_cli.models.tracking.display.Live", return_value=live)

        with pytest.raises(RuntimeError):
            LiveDisplay(_console()).open()
        keyboard_cls.return_value.stop.assert_called_once()

    def test_keyboard_restored_when_live_stop_fails(self, mocker):
        keyboard_cls = mocker.patch("mywarrior_cli.models.tracking.display.KeyboardHandler")
        live_cls = mocker.patch("mywarrior_cli.models.tracking.display.Live")
        live_cls.return_value.stop.side_effect = RuntimeError("broken")

        display = LiveDisplay(_console())
        display.open()
        with pytest.raises(RuntimeError):
            display.close()
        keyboard_cls.return_value.stop.assert_called_once()
