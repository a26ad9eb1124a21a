"""Track command - time a run of pomodori and log it."""

import sys
from pathlib import Path

import typer

from mywarrior_cli.config import Config, get_config_manager
from mywarrior_cli.models.tracking import (
    Display,
    LiveDisplay,
    PlainDisplay,
    SessionController,
    StopReason,
    build_notifier,
    planned_seconds_for,
)
from mywarrior_cli.services.session_log import SessionLog
from mywarrior_cli.ui.formatters import format_warning
from mywarrior_cli.utils.clock import format_seconds
from mywarrior_cli.utils.exit_codes import ERROR_GENERAL
from mywarrior_cli.utils.ui.console import get_console

from .decorators import command_wrapper

console = get_console()

_REASON_TEXT = {
    StopReason.USER_STOPPED_EARLY: "stopped early",
    StopReason.TIMER_ELAPSED_ACKNOWLEDGED: "time was up",
    StopReason.PROCESS_INTERRUPTED: "interrupted",
}


def choose_display(config: Config, plain: bool) -> Display:
    """Full-screen display on an interactive terminal, a single line otherwise."""
    wants_live = not plain and config.tracker.display == "live"
    if wants_live and console.is_terminal and sys.stdin.isatty():
        return LiveDisplay(console, quit_keys=config.tracker.quit_keys)
    return PlainDisplay(console)


@command_wrapper
def track(
    pomodori: int = typer.Argument(
        ..., min=1, help="The amount of pomodori (25min) done in a row"
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Single-line display instead of full screen"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="No audible reminder once time is up"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Session log to append to"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Track pomodori; stop with Enter (or 'q') and the session is logged."""
    config_manager = get_config_manager(profile)
    config = config_manager.config
    planned = planned_seconds_for(pomodori, config.tracker.interval_minutes)
    log = SessionLog(log_file or config_manager.log_path())

    display = choose_display(config, plain)
    quit_keys = config.tracker.quit_keys if isinstance(display, LiveDisplay) else ""

    console.print(
        f"[bold]Tracking {pomodori} pomodor{'o' if pomodori == 1 else 'i'}[/bold] "
        f"({format_seconds(planned)})"
    )
    console.print(f"[dim]{display.stop_hint}[/dim]")

    controller = SessionController(
        planned,
        log,
        display=display,
        notifier=build_notifier(config.notify, console, quiet=quiet),
        reminder_seconds=config.tracker.reminder_seconds,
        tick_seconds=config.tracker.tick_seconds,
        quit_keys=quit_keys,
    )
    outcome = controller.run()

    console.print(
        f"[bold green]Successfully worked for {outcome.worked_seconds} seconds![/bold green] "
        f"[dim]({format_seconds(outcome.worked_seconds)}, {_REASON_TEXT[outcome.reason]})[/dim]"
    )

    if outcome.log_error is not None:
        format_warning(f"Session was not logged: {outcome.log_error}")
        raise typer.Exit(ERROR_GENERAL)

    console.print(f"[dim]Logged to {log.path}[/dim]")
