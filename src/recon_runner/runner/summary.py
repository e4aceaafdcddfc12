"""Result collection and summary rendering."""

from __future__ import annotations

from collections.abc import Iterable

from recon_runner.runner.models import JobResult, RunSummary


def collect_results(results: Iterable[JobResult]) -> RunSummary:
    """Partition job results into success and failure counters."""

    summary = RunSummary()
    for result in results:
        summary.total += 1
        if result.succeeded:
            summary.succeeded += 1
        else:
            summary.failed += 1
            summary.failures.append(result)
    return summary


def render_summary_lines(summary: RunSummary) -> list[str]:
    lines = [
        "--- Run summary ---",
        f"Total commands: {summary.total}",
        f"Succeeded: {summary.succeeded}",
        f"Failed: {summary.failed}",
    ]
    if summary.failures:
        lines.append("Failed commands:")
        lines.extend(
            f"  - name: {failure.command.name}, error: {failure.error}"
            for failure in summary.failures
        )
    lines.append("-------------------")
    return lines
