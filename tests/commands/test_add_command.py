"""Tests for the add command (manual entries)."""

from __future__ import annotations

from datetime import date

from typer.testing import CliRunner

from mywarrior_cli.main import app
from mywarrior_cli.services.session_log import SessionLog

runner = CliRunner()


def _records(path):
    return SessionLog(path).read().records


class TestAddWithOptions:
    def test_logs_entry(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(
            app,
            ["add", "--date", "2024-01-01", "--start", "09:00", "--end", "09:25", "--log-file", str(log_file)],
        )

        assert result.exit_code == 0, result.output
        assert "25 minutes" in result.output
        [record] = _records(log_file)
        assert record.start == "2024-01-01T09:00:00"
        assert record.duration_seconds == 1500

    def test_defaults_to_today(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(app, ["add", "-s", "08:00", "-e", "08:30", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert _records(log_file)[0].start_datetime.date() == date.today()

    def test_end_date_crosses_midnight(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(
            app,
            [
                "add", "-d", "2024-01-01", "-s", "23:40", "-e", "00:05",
                "--end-date", "2024-01-02", "--log-file", str(log_file),
            ],
        )

        assert result.exit_code == 0, result.output
        assert _records(log_file)[0].end == "2024-01-02T00:05:00"

    def test_end_before_start(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(app, ["add", "-s", "10:00", "-e", "09:00", "--log-file", str(log_file)])

        assert result.exit_code == 2
        assert "before it starts" in result.output
        assert not log_file.exists()

    def test_invalid_time(self, config_dirs, tmp_path):
        result = runner.invoke(
            app, ["add", "-s", "25:00", "-e", "26:00", "--log-file", str(tmp_path / "l")]
        )
        assert result.exit_code == 2

    def test_start_without_end(self, config_dirs, tmp_path):
        result = runner.invoke(app, ["add", "--start", "09:00", "--log-file", str(tmp_path / "l")])
        assert result.exit_code == 2
        assert "must be given together" in result.output

    def test_unwritable_log(self, config_dirs, tmp_path):
        result = runner.invoke(app, ["add", "-s", "09:00", "-e", "09:25", "--log-file", str(tmp_path)])
        assert result.exit_code == 3


class TestAddInteractive:
    def test_today(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(app, ["add", "--log-file", str(log_file)], input="y\n09:00\n09:25\n")

        assert result.exit_code == 0, result.output
        [record] = _records(log_file)
        assert record.start_datetime.date() == date.today()
        assert record.duration_seconds == 1500

    def test_other_day_reasks_bad_input(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        answers = "n\n2024-02-30\n2024-01-01\n2024-01-02\n23:40\n7pm\n00:05\n"
        result = runner.invoke(app, ["add", "--log-file", str(log_file)], input=answers)

        assert result.exit_code == 0, result.output
        assert result.output.count("Please use the") == 2
        [record] = _records(log_file)
        assert (record.start, record.end) == ("2024-01-01T23:40:00", "2024-01-02T00:05:00")

    def test_end_date_defaults_to_start_date(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(
            app, ["add", "--log-file", str(log_file)], input="n\n2024-01-01\n\n09:00\n09:25\n"
        )

        assert result.exit_code == 0, result.output
        assert _records(log_file)[0].end == "2024-01-01T09:25:00"

    def test_input_ends_early(self, config_dirs, tmp_path):
        log_file = tmp_path / "log.ndjson"
        result = runner.invoke(app, ["add", "--log-file", str(log_file)], input="y\n09:00\n")

        assert result.exit_code == 2
        assert not log_file.exists()
