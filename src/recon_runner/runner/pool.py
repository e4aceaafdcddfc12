"""Fixed-size worker pool over a shared command queue."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Sequence
from typing import Protocol

from recon_runner.runner.models import Command, ErrorInfo, JobResult

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10

_CLOSED = object()


class CommandExecutor(Protocol):
    """Protocol implemented by command executors."""

    def execute(self, command: Command) -> ErrorInfo | None:
        """Run one command and return failure detail, or ``None`` on success."""


class WorkerPool:
    """Runs every command exactly once on ``concurrency`` worker threads.

    Commands are enqueued up front, followed by one close marker per worker.
    Workers compete for the next queued command, so a slow command only holds
    its own worker. ``run`` joins all workers before reading any result.
    """

    def __init__(
        self,
        *,
        executor: CommandExecutor,
        concurrency: int = DEFAULT_CONCURRENCY,
        reporter: logging.Logger | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self._executor = executor
        self._concurrency = concurrency
        self._logger = reporter or logger

    def run(self, commands: Sequence[Command]) -> list[JobResult]:
        jobs: queue.Queue[Command | object] = queue.Queue()
        results: queue.Queue[JobResult] = queue.Queue()

        self._logger.info(
            "Starting %d workers for %d commands.",
            self._concurrency,
            len(commands),
        )
        workers = [
            threading.Thread(
                target=self._worker_loop,
                args=(worker_id, jobs, results),
                name=f"recon-worker-{worker_id}",
                daemon=True,
            )
            for worker_id in range(1, self._concurrency + 1)
        ]
        for worker in workers:
            worker.start()

        for command in commands:
            jobs.put(command)
        for _ in workers:
            jobs.put(_CLOSED)

        for worker in workers:
            worker.join()

        collected: list[JobResult] = []
        while True:
            try:
                collected.append(results.get_nowait())
            except queue.Empty:
                break
        return collected

    def _worker_loop(
        self,
        worker_id: int,
        jobs: queue.Queue[Command | object],
        results: queue.Queue[JobResult],
    ) -> None:
        while True:
            item = jobs.get()
            if item is _CLOSED:
                return
            command: Command = item  # type: ignore[assignment]
            results.put(self._run_one(worker_id, command))

    def _run_one(self, worker_id: int, command: Command) -> JobResult:
        self._logger.info("worker %d: starting '%s'", worker_id, command.name)
        try:
            error = self._executor.execute(command)
        except Exception as exc:  # noqa: BLE001
            self._logger.exception("worker %d: unexpected error in '%s'", worker_id, command.name)
            error = ErrorInfo(message=f"unexpected executor error: {exc!r}")

        if error is None:
            self._logger.info("worker %d: finished '%s'", worker_id, command.name)
        else:
            self._logger.warning("worker %d: '%s' failed: %s", worker_id, command.name, error)
        return JobResult(command=command, error=error, worker_id=worker_id)
