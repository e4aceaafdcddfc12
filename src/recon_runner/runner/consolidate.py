"""Merge per-command output files into one deduplicated result file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from recon_runner.runner.models import Command

logger = logging.getLogger(__name__)

CONSOLIDATED_FILE_NAME = "all_results.txt"
CONSOLIDATED_HEADER = "--- deduplicated results ---"


class ConsolidationError(RuntimeError):
    """Consolidated output file could not be written."""


def consolidate(
    output_dir: Path,
    commands: Iterable[Command],
    *,
    sort_lines: bool = False,
    reporter: logging.Logger | None = None,
) -> Path:
    """Collect unique non-empty lines from every command output into one file.

    Missing or unreadable source files are logged and skipped. Line order in
    the result is unspecified unless ``sort_lines`` is set.
    """

    log = reporter or logger
    target_path = output_dir / CONSOLIDATED_FILE_NAME
    log.info("Consolidating results into %s", target_path)

    unique_lines: set[str] = set()
    for command in commands:
        source_path = command.output_path(output_dir)
        content = _read_source(source_path, command_name=command.name, log=log)
        if content is None:
            continue
        unique_lines.update(_clean_lines(content))

    ordered: Iterable[str] = sorted(unique_lines) if sort_lines else unique_lines
    try:
        with target_path.open("w", encoding="utf-8") as handle:
            handle.write(f"{CONSOLIDATED_HEADER}\n\n")
            for line in ordered:
                handle.write(f"{line}\n")
    except OSError as error:
        raise ConsolidationError(
            f"Cannot write consolidated file {str(target_path)!r}: {error}",
        ) from error

    log.info("Wrote %d unique lines to %s", len(unique_lines), target_path)
    return target_path


def _read_source(path: Path, *, command_name: str, log: logging.Logger) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        log.warning("No result file for '%s' at %s, skipped.", command_name, path)
        return None
    except OSError as error:
        log.warning("Cannot read result file %s for '%s': %s", path, command_name, error)
        return None


def _clean_lines(content: str) -> Iterable[str]:
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if line:
            yield line
