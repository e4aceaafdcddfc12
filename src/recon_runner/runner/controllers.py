"""Controllers for runner CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from recon_runner.config import Settings, load_commands
from recon_runner.runner.consolidate import ConsolidationError, consolidate
from recon_runner.runner.executor import ShellCommandExecutor
from recon_runner.runner.models import RunSummary
from recon_runner.runner.pool import WorkerPool
from recon_runner.runner.summary import collect_results, render_summary_lines
from recon_runner.runner.workspace import prepare_output_dir

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunCommandsCommand:
    """CLI input for a full run; ``None`` falls back to the env settings."""

    config_path: Path | None = None
    domains_path: Path | None = None
    output_dir: Path | None = None
    concurrency: int | None = None
    clean: bool | None = None
    sort_results: bool | None = None


@dataclass(slots=True)
class ListCommandsCommand:
    """CLI input for printing the loaded command file."""

    config_path: Path | None = None


@dataclass(slots=True)
class RunReport:
    """Run outcome to render in CLI."""

    lines: list[str]
    summary: RunSummary
    consolidated_path: Path | None


class RunnerCliController:
    """Coordinates config loading, worker pool, and consolidation."""

    def run(self, command: RunCommandsCommand) -> RunReport:
        """Execute every configured command, then consolidate outputs.

        ``ConfigError`` and ``WorkspaceError`` propagate before any command
        starts. Command and consolidation failures end up in the report.
        """

        settings = _resolve_settings(command)
        settings.validate()
        commands = load_commands(settings.config_path)
        prepare_output_dir(settings.output_dir, clean=settings.clean)

        executor = ShellCommandExecutor(
            domains_path=settings.domains_path,
            output_dir=settings.output_dir,
            shell=settings.shell,
        )
        pool = WorkerPool(executor=executor, concurrency=settings.concurrency, reporter=logger)
        summary = collect_results(pool.run(commands))
        logger.info("All commands finished.")

        lines: list[str] = []
        consolidated_path: Path | None = None
        try:
            consolidated_path = consolidate(
                settings.output_dir,
                commands,
                sort_lines=settings.sort_results,
                reporter=logger,
            )
            lines.append(f"Consolidated results: {consolidated_path}")
        except ConsolidationError as error:
            logger.error("Consolidation failed: %s", error)
            lines.append(f"Consolidation failed: {error}")

        lines.extend(render_summary_lines(summary))
        return RunReport(lines=lines, summary=summary, consolidated_path=consolidated_path)

    def list_commands(self, command: ListCommandsCommand) -> list[str]:
        config_path = command.config_path
        if config_path is None:
            config_path = Settings.from_env().config_path
        commands = load_commands(config_path)
        if not commands:
            return [f"No commands in {config_path}."]

        lines = [f"{len(commands)} commands in {config_path}:"]
        for item in commands:
            lines.append(f"  - {item.name} -> {item.output}")
            lines.append(f"      {item.template}")
        return lines


def _resolve_settings(command: RunCommandsCommand) -> Settings:
    return Settings.from_env(
        config_path=command.config_path,
        domains_path=command.domains_path,
        output_dir=command.output_dir,
        concurrency=command.concurrency,
        clean=command.clean,
        sort_results=command.sort_results,
    )
