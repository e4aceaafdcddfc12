"""Shared test fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from recon_runner.runner.models import Command

_ENV_KEYS = (
    "RECON_RUNNER_CONFIG_PATH",
    "RECON_RUNNER_DOMAINS_PATH",
    "RECON_RUNNER_OUTPUT_DIR",
    "RECON_RUNNER_CONCURRENCY",
    "RECON_RUNNER_CLEAN",
    "RECON_RUNNER_SORT_RESULTS",
    "RECON_RUNNER_SHELL",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI replaces root handlers; put back the ones pytest installed."""

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture()
def domains_file(tmp_path: Path) -> Path:
    path = tmp_path / "domains.txt"
    path.write_text("example.com\nexample.org\n", encoding="utf-8")
    return path


@pytest.fixture()
def write_command_file(tmp_path: Path):
    """Write a YAML command file from ``Command`` objects and return its path."""

    def _write(commands: list[Command], name: str = "command.yml") -> Path:
        lines = ["commands:"]
        for command in commands:
            lines.append(f"  - name: {_quote(command.name)}")
            lines.append(f"    cmd: {_quote(command.template)}")
            lines.append(f"    output: {_quote(command.output)}")
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"
