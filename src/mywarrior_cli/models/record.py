"""The persisted form of a finished session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from mywarrior_cli.utils.clock import parse_timestamp, to_timestamp


@dataclass(frozen=True)
class SessionRecord:
    """The persisted start/end pair of one finished session."""

    start: str  # YYYY-MM-DDTHH:MM:SS, local time
    end: str

    @property
    def start_datetime(self) -> datetime:
        return parse_timestamp(self.start)

    @property
    def end_datetime(self) -> datetime:
        return parse_timestamp(self.end)

    @property
    def duration_seconds(self) -> int:
        """Worked seconds between start and end."""
        return int((self.end_datetime - self.start_datetime).total_seconds())

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: Any) -> "SessionRecord":
        """Build a record from a decoded log line.

        Raises:
            ValueError: if a field is missing, not a string, not a valid
                timestamp, or end precedes start
        """
        if not isinstance(data, dict):
            raise ValueError("record must be a JSON object")
        try:
            start, end = data["start"], data["end"]
        except KeyError as e:
            raise ValueError(f"record is missing '{e.args[0]}'") from e
        if not isinstance(start, str) or not isinstance(end, str):
            raise ValueError("start and end must be strings")
        if parse_timestamp(end) < parse_timestamp(start):
            raise ValueError("record ends before it starts")
        return cls(start=start, end=end)

    @classmethod
    def from_datetimes(cls, start: datetime, end: datetime) -> "SessionRecord":
        if end < start:
            raise ValueError("end must not be before start")
        return cls(start=to_timestamp(start), end=to_timestamp(end))

