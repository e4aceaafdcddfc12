"""Worker-pool execution and result consolidation pipeline."""

from recon_runner.runner.consolidate import (
    CONSOLIDATED_FILE_NAME,
    ConsolidationError,
    consolidate,
)
from recon_runner.runner.executor import ShellCommandExecutor, render_command_line
from recon_runner.runner.models import Command, ErrorInfo, JobResult, RunSummary
from recon_runner.runner.pool import DEFAULT_CONCURRENCY, WorkerPool
from recon_runner.runner.summary import collect_results, render_summary_lines
from recon_runner.runner.workspace import WorkspaceError, prepare_output_dir

__all__ = [
    "CONSOLIDATED_FILE_NAME",
    "DEFAULT_CONCURRENCY",
    "Command",
    "ConsolidationError",
    "ErrorInfo",
    "JobResult",
    "RunSummary",
    "ShellCommandExecutor",
    "WorkerPool",
    "WorkspaceError",
    "collect_results",
    "consolidate",
    "prepare_output_dir",
    "render_command_line",
    "render_summary_lines",
]
