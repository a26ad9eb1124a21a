"""Append-only newline-delimited JSON log of finished sessions."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from mywarrior_cli.models.record import SessionRecord
from mywarrior_cli.utils.logger import get_logger


class SessionLogError(Exception):
    """The session log could not be read or written."""


@dataclass
class SkippedLine:
    """A log line that could not be parsed as a record."""

    line_number: int
    content: str
    error: str


@dataclass
class LogReadResult:
    """Records parsed from the log plus the lines that were skipped."""

    records: list[SessionRecord] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)


class SessionLog:
    """The session store: one ``{"start": ..., "end": ...}`` object per line.

    Records are only ever appended. Nothing here rewrites or deletes a
    line that is already in the file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def append(self, record: SessionRecord) -> None:
        """
        Append one record and close the file before returning.

        Args:
            record: The finished session to persist

        Raises:
            SessionLogError: if the log file cannot be opened or written
        """
        line = json.dumps(record.to_dict(), separators=(",", ":"))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
                f.flush()
        except OSError as e:
            get_logger().error("could not append session to %s: %s", self.path, e)
            raise SessionLogError(f"could not write to {self.path}: {e}") from e

        get_logger().info("session logged to %s: %s", self.path, line)

    def read(self) -> LogReadResult:
        """
        Parse every line of the log independently.

        Blank lines are ignored. A malformed line is recorded in
        ``skipped`` and reading carries on with the next one.

        Raises:
            SessionLogError: if the file exists but cannot be read
        """
        result = LogReadResult()
        if not self.path.exists():
            return result

        try:
            with open(self.path, encoding="utf-8", errors="replace") as f:
                for line_number, line in enumerate(f, start=1):
                    stripped = line.strip()
                    if not stripped:
                        continue
                    try:
                        record = SessionRecord.from_dict(json.loads(stripped))
                    except (json.JSONDecodeError, ValueError, RecursionError) as e:
                        get_logger().warning(
                            "skipping malformed line %d in %s: %s",
                            line_number,
                            self.path,
                            e,
                        )
                        result.skipped.append(SkippedLine(line_number, stripped, str(e)))
                        continue
                    result.records.append(record)
        except OSError as e:
            raise SessionLogError(f"could not read {self.path}: {e}") from e

        return result
