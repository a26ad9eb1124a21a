"""Add command - log a session that was tracked by hand."""

from datetime import date
from pathlib import Path

import typer
from rich.prompt import Confirm, Prompt

from mywarrior_cli.config import get_config_manager
from mywarrior_cli.services.manual_entry import EntryValidationError, build_manual_record
from mywarrior_cli.services.session_log import SessionLog, SessionLogError
from mywarrior_cli.ui.formatters import format_success
from mywarrior_cli.utils.clock import is_valid_date, is_valid_time
from mywarrior_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_STORAGE
from mywarrior_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper

console = get_console()


def _ask(label: str, is_valid, hint: str, default: str | None = None) -> str:
    """Prompt until the answer passes ``is_valid``."""
    while True:
        if default is None:
            answer = Prompt.ask(label, console=console)
        else:
            answer = Prompt.ask(label, default=default, console=console)
        if is_valid(answer):
            return answer.strip()
        console.print(f"[red]Please use the {hint} format with a real date/time.[/red]")


def _prompt_entry() -> tuple[str, str, str, str]:
    today = date.today().isoformat()
    if Confirm.ask("Was it today?", default=True, console=console):
        start_date = end_date = today
    else:
        start_date = _ask("Enter start date (YYYY-MM-DD)", is_valid_date, "YYYY-MM-DD")
        end_date = _ask(
            "Enter end date (YYYY-MM-DD)", is_valid_date, "YYYY-MM-DD", default=start_date
        )
    start_time = _ask("Enter start time (HH:MM)", is_valid_time, "HH:MM")
    end_time = _ask("Enter end time (HH:MM)", is_valid_time, "HH:MM")
    return start_date, start_time, end_date, end_time


@command_wrapper
def add(
    day: str | None = typer.Option(
        None, "--date", "-d", help="Start date (YYYY-MM-DD), defaults to today"
    ),
    start: str | None = typer.Option(None, "--start", "-s", help="Start time (HH:MM)"),
    end: str | None = typer.Option(None, "--end", "-e", help="End time (HH:MM)"),
    end_day: str | None = typer.Option(
        None, "--end-date", help="End date (YYYY-MM-DD), defaults to the start date"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Session log to append to"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Add manually tracked time.

    Without --start/--end the details are asked for interactively.

    Examples:
      mywarrior add
      mywarrior add --start 09:00 --end 09:25
      mywarrior add --date 2024-01-01 --start 23:40 --end 00:05 --end-date 2024-01-02
    """
    if start is None or end is None:
        if start is not None or end is not None:
            raise AppError("--start and --end must be given together", ERROR_INVALID_ARGS)
        try:
            start_date, start_time, end_date, end_time = _prompt_entry()
        except EOFError as e:
            raise AppError("input ended before the entry was complete", ERROR_INVALID_ARGS) from e
    else:
        start_date = day or date.today().isoformat()
        end_date = end_day or start_date
        start_time, end_time = start, end

    try:
        record = build_manual_record(start_date, start_time, end_time, end_date=end_date)
    except EntryValidationError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e

    log = SessionLog(log_file or get_config_manager(profile).log_path())
    try:
        log.append(record)
    except SessionLogError as e:
        raise AppError(str(e), ERROR_STORAGE) from e

    format_success(
        f"Logged {record.start} → {record.end} ({record.duration_seconds // 60} minutes)"
    )
