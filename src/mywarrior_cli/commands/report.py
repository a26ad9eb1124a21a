"""Report command - summarise the session log."""

from collections import defaultdict
from datetime import date, timedelta
from pathlib import Path

import typer
from rich.table import Table

from mywarrior_cli.config import get_config_manager
from mywarrior_cli.models.record import SessionRecord
from mywarrior_cli.services.session_log import SessionLog, SessionLogError
from mywarrior_cli.ui.formatters import format_output, format_warning
from mywarrior_cli.utils.clock import format_seconds
from mywarrior_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_STORAGE
from mywarrior_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper

console = get_console()

OUTPUT_FORMATS = ("table", "json", "yaml")


def filter_recent(records: list[SessionRecord], days: int | None, today: date | None = None) -> list[SessionRecord]:
    """Keep records that started within the last ``days`` days (today included)."""
    if days is None:
        return list(records)
    first_day = (today or date.today()) - timedelta(days=days - 1)
    return [r for r in records if r.start_datetime.date() >= first_day]


def daily_totals(records: list[SessionRecord]) -> dict[date, int]:
    """Worked seconds per start day, oldest day first."""
    totals: dict[date, int] = defaultdict(int)
    for record in records:
        totals[record.start_datetime.date()] += record.duration_seconds
    return dict(sorted(totals.items()))


def _print_tables(records: list[SessionRecord]) -> None:
    sessions = Table(title=f"Sessions ({len(records)})", show_header=True)
    sessions.add_column("Start", style="cyan")
    sessions.add_column("End", style="cyan")
    sessions.add_column("Worked", justify="right")
    for record in records:
        sessions.add_row(
            record.start.replace("T", " "),
            record.end.replace("T", " "),
            format_seconds(record.duration_seconds),
        )
    console.print(sessions)

    per_day = Table(title="Per day", show_header=True)
    per_day.add_column("Date", style="cyan")
    per_day.add_column("Worked", justify="right")
    per_day.add_column("Pomodori", justify="right")
    for day, seconds in daily_totals(records).items():
        per_day.add_row(day.isoformat(), format_seconds(seconds), f"{seconds / 1500:.1f}")
    console.print(per_day)

    total = sum(r.duration_seconds for r in records)
    console.print(f"\n[bold]Total worked:[/bold] {format_seconds(total)}")


@command_wrapper
def report(
    days: int | None = typer.Option(
        None, "--days", min=1, help="Only sessions from the last N days"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format (table, json, yaml)"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Session log to read"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Provide a report of recent work."""
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"unknown output format '{output}' (use {', '.join(OUTPUT_FORMATS)})",
            ERROR_INVALID_ARGS,
        )

    log = SessionLog(log_file or get_config_manager(profile).log_path())
    try:
        result = log.read()
    except SessionLogError as e:
        raise AppError(str(e), ERROR_STORAGE) from e

    records = filter_recent(result.records, days)

    if output != "table":
        format_output(
            [dict(r.to_dict(), seconds=r.duration_seconds) for r in records], output
        )
    elif not records:
        console.print("[yellow]No sessions found[/yellow]")
    else:
        _print_tables(records)

    if result.skipped:
        lines = ", ".join(str(s.line_number) for s in result.skipped)
        format_warning(f"Skipped {len(result.skipped)} malformed line(s) in {log.path}: {lines}")
