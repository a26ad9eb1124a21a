"""Tests for the report command and its helpers."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta

import yaml
from typer.testing import CliRunner

from mywarrior_cli.commands.report import daily_totals, filter_recent
from mywarrior_cli.main import app
from mywarrior_cli.models.record import SessionRecord

runner = CliRunner()

MORNING = SessionRecord(start="2024-01-01T09:00:00", end="2024-01-01T09:25:00")
AFTERNOON = SessionRecord(start="2024-01-01T14:00:00", end="2024-01-01T14:50:00")
NEXT_DAY = SessionRecord(start="2024-01-02T09:00:00", end="2024-01-02T09:25:00")


def _write(path, *lines):
    path.write_text("".join(line + "\n" for line in lines))


def _line(record):
    return json.dumps(record.to_dict())


class TestHelpers:
    def test_daily_totals(self):
        totals = daily_totals([NEXT_DAY, MORNING, AFTERNOON])
        assert list(totals.items()) == [
            (date(2024, 1, 1), 1500 + 3000),
            (date(2024, 1, 2), 1500),
        ]

    def test_filter_recent_includes_today(self):
        records = [MORNING, AFTERNOON, NEXT_DAY]
        assert filter_recent(records, 1, today=date(2024, 1, 2)) == [NEXT_DAY]
        assert filter_recent(records, 2, today=date(2024, 1, 2)) == records

    def test_filter_recent_without_days_keeps_everything(self):
        assert filter_recent([MORNING], None) == [MORNING]


class TestReportCommand:
    def test_table_report(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        _write(log_file, _line(MORNING), _line(AFTERNOON), _line(NEXT_DAY))

        result = runner.invoke(app, ["report", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "Sessions (3)" in result.output
        assert "Per day" in result.output
        assert "2024-01-02" in result.output
        assert "Total worked" in result.output
        assert "01:40:00" in result.output

    def test_json_report(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        _write(log_file, _line(MORNING))

        result = runner.invoke(app, ["report", "-o", "json", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"start": "2024-01-01T09:00:00", "end": "2024-01-01T09:25:00", "seconds": 1500}
        ]

    def test_yaml_report(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        _write(log_file, _line(AFTERNOON))

        result = runner.invoke(app, ["report", "--output", "yaml", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output)[0]["seconds"] == 3000

    def test_days_filter(self, config_dirs, tmp_path):
        today = datetime.combine(date.today(), datetime.min.time()).replace(hour=8)
        recent = SessionRecord.from_datetimes(today, today + timedelta(minutes=25))
        log_file = tmp_path / "log.ndjson"
        _write(log_file, _line(MORNING), _line(recent))

        result = runner.invoke(app, ["report", "--days", "1", "-o", "json", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert [r["start"] for r in json.loads(result.output)] == [recent.start]

    def test_empty_log(self, config_dirs, tmp_path):
        result = runner.invoke(app, ["report", "--log-file", str(tmp_path / "missing.ndjson")])
        assert result.exit_code == 0
        assert "No sessions found" in result.output

    def test_malformed_lines_are_reported(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        _write(log_file, _line(MORNING), "{oops", _line(NEXT_DAY))

        result = runner.invoke(app, ["report", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "Sessions (2)" in result.output
        assert "Skipped 1 malformed line" in result.output

    def test_unknown_output_format(self, config_dirs, tmp_path):
        result = runner.invoke(app, ["report", "-o", "xml", "--log-file", str(tmp_path / "l")])
        assert result.exit_code == 2
        assert "unknown output format" in result.output

    def test_unreadable_log(self, config_dirs, tmp_path):
        result = runner.invoke(app, ["report", "--log-file", str(tmp_path)])
        assert result.exit_code == 3

    def test_days_must_be_positive(self, config_dirs):
        result = runner.invoke(app, ["report", "--days", "0"])
        assert result.exit_code == 2
