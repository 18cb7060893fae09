"""Fixtures for end-to-end CLI tests.

Provides a test-only `log-demo` command that emits log messages at every
level, a CliRunner, and an environment pointing the CLI at a migrated
temporary SQLite database with the flight recorder writing under tmp_path.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from capable.entrypoints.cli.main import capable

# pylint: disable=redefined-outer-name


@click.command()
def log_demo() -> None:
    """Emit representative log messages for CLI/flight-recorder tests."""
    logger = logging.getLogger("capable.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")


def _remove_command_everywhere(group: click.Group, name: str) -> None:
    """Remove a command from a Click group and any click-extra sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command on `capable` for one test."""
    capable.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(capable, "log-demo")


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root-logger configuration each CLI invocation installs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    levels = {name: logging.getLogger(name).level for name in ("sqlalchemy", "alembic")}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in levels.items():
        logging.getLogger(name).setLevel(lvl)


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Flight-recorder file for this test."""
    return tmp_path / "latest.log"


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch, log_path: Path) -> CliRunner:
    """Return a CliRunner whose flight recorder writes under tmp_path."""
    monkeypatch.setenv("CAPABLE_LOG_PATH", str(log_path))
    monkeypatch.setenv("COLUMNS", "200")  # keep Rich from wrapping log lines
    for name in ("CAPABLE_DB_URL", "CAPABLE_LOGGER_LEVELS", "CAPABLE_FLIGHT_RECORDER"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def db_env(monkeypatch: pytest.MonkeyPatch, sqlite_url_file: str) -> str:
    """Point CAPABLE_DB_URL at a migrated temp SQLite database."""
    monkeypatch.setenv("CAPABLE_DB_URL", sqlite_url_file)
    return sqlite_url_file
