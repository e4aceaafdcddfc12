from __future__ import annotations

from pathlib import Path

import allure
import pytest

from recon_runner.config import ConfigError
from recon_runner.runner.consolidate import CONSOLIDATED_FILE_NAME
from recon_runner.runner.controllers import RunCommandsCommand, RunnerCliController
from recon_runner.runner.models import Command

pytestmark = [
    allure.epic("Command Runner"),
    allure.feature("Run Controller"),
]


def test_run_report_carries_summary_and_consolidated_path(
    tmp_path: Path,
    domains_file: Path,
    write_command_file,
) -> None:
    config_path = write_command_file(
        [
            Command(name="good", template="echo a > {output}", output="good.txt"),
            Command(name="bad", template="exit 4", output="bad.txt"),
            Command(name="also-good", template="echo b > {output}", output="also.txt"),
        ],
    )
    output_dir = tmp_path / "results"

    report = RunnerCliController().run(
        RunCommandsCommand(
            config_path=config_path,
            domains_path=domains_file,
            output_dir=output_dir,
            concurrency=2,
        ),
    )

    assert report.summary.total == 3
    assert report.summary.succeeded == 2
    assert report.summary.failed == 1
    assert [failure.command.name for failure in report.summary.failures] == ["bad"]
    assert report.consolidated_path == output_dir / CONSOLIDATED_FILE_NAME
    assert f"Consolidated results: {report.consolidated_path}" in report.lines


def test_run_reports_consolidation_failure_without_raising(
    tmp_path: Path,
    domains_file: Path,
    write_command_file,
) -> None:
    config_path = write_command_file(
        [Command(name="one", template="echo a > {output}", output="one.txt")],
    )
    output_dir = tmp_path / "results"
    (output_dir / CONSOLIDATED_FILE_NAME).mkdir(parents=True)

    report = RunnerCliController().run(
        RunCommandsCommand(
            config_path=config_path,
            domains_path=domains_file,
            output_dir=output_dir,
        ),
    )

    assert report.consolidated_path is None
    assert report.summary.succeeded == 1
    assert any(line.startswith("Consolidation failed:") for line in report.lines)


def test_explicit_values_skip_env_parsing(
    tmp_path: Path,
    domains_file: Path,
    write_command_file,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config_path = write_command_file(
        [Command(name="one", template="echo a > {output}", output="one.txt")],
    )
    monkeypatch.setenv("RECON_RUNNER_CLEAN", "maybe")
    monkeypatch.setenv("RECON_RUNNER_CONCURRENCY", "lots")

    report = RunnerCliController().run(
        RunCommandsCommand(
            config_path=config_path,
            domains_path=domains_file,
            output_dir=tmp_path / "results",
            concurrency=1,
            clean=False,
        ),
    )

    assert report.summary.succeeded == 1


def test_invalid_env_value_fails_when_not_overridden(
    tmp_path: Path,
    write_command_file,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config_path = write_command_file([])
    monkeypatch.setenv("RECON_RUNNER_CLEAN", "maybe")

    with pytest.raises(ConfigError, match="Invalid boolean value for RECON_RUNNER_CLEAN"):
        RunnerCliController().run(
            RunCommandsCommand(config_path=config_path, output_dir=tmp_path / "results"),
        )
