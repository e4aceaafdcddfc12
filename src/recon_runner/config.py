"""Runtime configuration and command file loading."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import yaml

from recon_runner.runner.models import Command

_COMMAND_FIELDS: tuple[str, ...] = ("name", "cmd", "output")


class ConfigError(ValueError):
    """Invalid settings or command file."""


@dataclass(slots=True)
class Settings:
    """Application settings for one runner invocation."""

    config_path: Path = Path("command.yml")
    domains_path: Path = Path("domains.txt")
    output_dir: Path = Path("results")
    concurrency: int = 10
    clean: bool = False
    sort_results: bool = False
    shell: str = "bash"

    @classmethod
    def from_env(cls, **overrides: object) -> Settings:
        """Load settings from environment with defaults matching the CLI.

        Non-``None`` overrides win, and their env variables are not read at all.
        """

        values = {
            field_name: read_env()
            for field_name, read_env in _ENV_READERS.items()
            if overrides.get(field_name) is None
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def validate(self) -> None:
        """Raise configuration error if values are out of range."""

        if self.concurrency < 1:
            raise ConfigError(f"Concurrency must be >= 1, got {self.concurrency}.")
        if not self.shell.strip():
            raise ConfigError("RECON_RUNNER_SHELL must not be empty.")


def load_commands(path: Path) -> tuple[Command, ...]:
    """Read the YAML command file and return commands in file order."""

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise ConfigError(f"Cannot read command file {str(path)!r}: {error}") from error

    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as error:
        raise ConfigError(f"Invalid YAML in command file {str(path)!r}: {error}") from error

    if payload is None:
        return ()
    if not isinstance(payload, dict):
        raise ConfigError(
            f"Command file {str(path)!r} must contain a mapping with a 'commands' list.",
        )

    entries = payload.get("commands")
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise ConfigError(f"Invalid commands list in {str(path)!r}: expected a list.")

    return tuple(_parse_command(entry, index=index) for index, entry in enumerate(entries))


def _parse_command(entry: object, *, index: int) -> Command:
    if not isinstance(entry, dict):
        raise ConfigError(f"commands[{index}] must be a mapping, got {type(entry).__name__}.")

    values: dict[str, str] = {}
    for field_name in _COMMAND_FIELDS:
        value = entry.get(field_name)
        if not isinstance(value, str):
            raise ConfigError(
                f"commands[{index}].{field_name} must be a string, got {value!r}.",
            )
        values[field_name] = value

    return Command(name=values["name"], template=values["cmd"], output=values["output"])


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value!r}")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as error:
        raise ConfigError(f"{name} must be an integer: {value!r}") from error


_ENV_READERS: dict[str, Callable[[], object]] = {
    "config_path": lambda: Path(os.getenv("RECON_RUNNER_CONFIG_PATH", "command.yml")),
    "domains_path": lambda: Path(os.getenv("RECON_RUNNER_DOMAINS_PATH", "domains.txt")),
    "output_dir": lambda: Path(os.getenv("RECON_RUNNER_OUTPUT_DIR", "results")),
    "concurrency": lambda: _env_int("RECON_RUNNER_CONCURRENCY", default=10),
    "clean": lambda: _env_bool("RECON_RUNNER_CLEAN", default=False),
    "sort_results": lambda: _env_bool("RECON_RUNNER_SORT_RESULTS", default=False),
    "shell": lambda: os.getenv("RECON_RUNNER_SHELL", "bash"),
}
