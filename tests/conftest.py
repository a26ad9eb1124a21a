"""Shared test fixtures and configuration.

Keeps the application logger, config files and session logs inside
``tmp_path`` so tests never touch the real platform directories.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from mywarrior_cli.services.session_log import SessionLog


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Route the application logger into a per-test directory."""
    import mywarrior_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("mywarrior_cli").handlers.clear()
    with patch("mywarrior_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    logging.getLogger("mywarrior_cli").handlers.clear()


@pytest.fixture()
def config_dirs(tmp_path):
    """Point ConfigManager at tmp dirs and reset the cached manager."""
    import mywarrior_cli.config as config_mod

    config_mod._config_manager = None
    with patch("mywarrior_cli.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("mywarrior_cli.config.user_data_dir", return_value=str(tmp_path / "data")):
            yield tmp_path
    config_mod._config_manager = None


@pytest.fixture()
def session_log(tmp_path) -> SessionLog:
    return SessionLog(tmp_path / "sessions.ndjson")


# ---------------------------------------------------------------------------
# Fake time
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock returning naive datetimes."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
