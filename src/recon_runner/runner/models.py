"""Domain models for command execution and result collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePath


@dataclass(frozen=True, slots=True)
class Command:
    """One named shell command template with its declared output file."""

    name: str
    template: str
    output: str

    def output_path(self, output_dir: Path) -> Path:
        """Join ``output`` under ``output_dir``; a leading root or drive is dropped."""

        declared = PurePath(self.output)
        if declared.anchor:
            declared = PurePath(*declared.parts[1:])
        return output_dir / declared


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Diagnostic detail for a failed command: message plus captured stderr."""

    message: str
    stderr: str = ""

    def __str__(self) -> str:
        if not self.stderr.strip():
            return self.message
        return f"{self.message}\n--- stderr ---\n{self.stderr.rstrip()}"


@dataclass(frozen=True, slots=True)
class JobResult:
    """Outcome of running one command on one worker."""

    command: Command
    error: ErrorInfo | None = None
    worker_id: int = 0

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RunSummary:
    """Aggregate counters over all job results for CLI reporting."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: list[JobResult] = field(default_factory=list)
