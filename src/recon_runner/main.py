"""CLI entrypoint for recon-runner."""

from pathlib import Path

import rich_click as click

from recon_runner import __version__
from recon_runner.config import ConfigError
from recon_runner.logging_utils import configure_logging
from recon_runner.runner.controllers import (
    ListCommandsCommand,
    RunCommandsCommand,
    RunnerCliController,
)
from recon_runner.runner.pool import DEFAULT_CONCURRENCY
from recon_runner.runner.workspace import WorkspaceError

click.rich_click.USE_MARKDOWN = True
RUNNER_CONTROLLER = RunnerCliController()


@click.group()
@click.version_option(version=__version__, prog_name="recon-runner")
def recon_runner() -> None:
    """Run shell commands concurrently and merge their outputs."""


@recon_runner.command("run")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=Path("command.yml"),
    show_default=True,
    envvar="RECON_RUNNER_CONFIG_PATH",
    help="YAML command file.",
)
@click.option(
    "--domains",
    "domains_path",
    type=click.Path(path_type=Path),
    default=Path("domains.txt"),
    show_default=True,
    envvar="RECON_RUNNER_DOMAINS_PATH",
    help="Input file substituted for {domains} in command templates.",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("results"),
    show_default=True,
    envvar="RECON_RUNNER_OUTPUT_DIR",
    help="Directory for per-command output files and all_results.txt.",
)
@click.option(
    "-c",
    "--concurrency",
    type=click.IntRange(min=1),
    default=DEFAULT_CONCURRENCY,
    show_default=True,
    envvar="RECON_RUNNER_CONCURRENCY",
    help="Number of commands run at the same time.",
)
@click.option(
    "--clean/--no-clean",
    default=False,
    show_default=True,
    envvar="RECON_RUNNER_CLEAN",
    help="Remove the output directory before running.",
)
@click.option(
    "--sort/--no-sort",
    "sort_results",
    default=False,
    show_default=True,
    envvar="RECON_RUNNER_SORT_RESULTS",
    help="Write consolidated lines in sorted order.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging verbosity.",
)
def run(  # noqa: PLR0913
    config_path: Path,
    domains_path: Path,
    output_dir: Path,
    concurrency: int,
    clean: bool,
    sort_results: bool,
    log_level: str,
) -> None:
    """Run every configured command and consolidate the results."""

    configure_logging(log_level.upper())
    try:
        report = RUNNER_CONTROLLER.run(
            RunCommandsCommand(
                config_path=config_path,
                domains_path=domains_path,
                output_dir=output_dir,
                concurrency=concurrency,
                clean=clean,
                sort_results=sort_results,
            ),
        )
    except (ConfigError, WorkspaceError) as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(report.lines)


@recon_runner.command("commands")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML command file. Defaults to RECON_RUNNER_CONFIG_PATH or command.yml.",
)
def list_commands(config_path: Path | None) -> None:
    """Print the commands from the command file without running them."""

    try:
        lines = RUNNER_CONTROLLER.list_commands(ListCommandsCommand(config_path=config_path))
    except ConfigError as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    recon_runner()
