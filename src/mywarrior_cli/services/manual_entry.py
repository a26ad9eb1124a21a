"""Validation for manually entered (back-dated) sessions."""

from datetime import date

from mywarrior_cli.models.record import SessionRecord
from mywarrior_cli.utils.clock import combine, parse_date, parse_time


class EntryValidationError(ValueError):
    """A manually entered session is not acceptable."""


def build_manual_record(
    start_date: str | date,
    start_time: str,
    end_time: str,
    end_date: str | date | None = None,
) -> SessionRecord:
    """
    Build a record from user-typed dates (``YYYY-MM-DD``) and times (``HH:MM``).

    Args:
        start_date: Day the session started
        start_time: Wall-clock start time
        end_time: Wall-clock end time
        end_date: Day the session ended, defaults to ``start_date``

    Raises:
        EntryValidationError: if any field is malformed or the session ends
            before it starts
    """
    try:
        start_day = start_date if isinstance(start_date, date) else parse_date(start_date)
        if end_date is None:
            end_day = start_day
        elif isinstance(end_date, date):
            end_day = end_date
        else:
            end_day = parse_date(end_date)
        start = combine(start_day, parse_time(start_time))
        end = combine(end_day, parse_time(end_time))
    except ValueError as e:
        raise EntryValidationError(str(e)) from e

    if end < start:
        raise EntryValidationError(
            f"session would end ({end:%Y-%m-%d %H:%M}) before it starts ({start:%Y-%m-%d %H:%M})"
        )
    return SessionRecord.from_datetimes(start, end)
