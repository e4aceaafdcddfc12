"""Subprocess-based shell execution for configured commands.

Command templates come from the trusted command file. Only the literal tokens
``{domains}`` and ``{output}`` are substituted; nothing is quoted or escaped,
so a template can use any shell syntax (pipes, redirects, ``&&``).
"""

from __future__ import annotations

import codecs
import subprocess
import sys
from pathlib import Path
from typing import TextIO

from recon_runner.runner.models import Command, ErrorInfo

DOMAINS_TOKEN = "{domains}"
OUTPUT_TOKEN = "{output}"
_STDERR_CHUNK_SIZE = 4096


def render_command_line(template: str, *, domains_path: Path | str, output_path: Path | str) -> str:
    """Replace every ``{domains}`` and ``{output}`` token in the template."""

    rendered = template.replace(DOMAINS_TOKEN, str(domains_path))
    return rendered.replace(OUTPUT_TOKEN, str(output_path))


class ShellCommandExecutor:
    """Run one command through ``<shell> -c`` and report failure as a value."""

    def __init__(
        self,
        *,
        domains_path: Path,
        output_dir: Path,
        shell: str = "bash",
        stderr_stream: TextIO | None = None,
    ) -> None:
        self.domains_path = domains_path
        self.output_dir = output_dir
        self.shell = shell
        self._stderr_stream = stderr_stream

    def output_path(self, command: Command) -> Path:
        return command.output_path(self.output_dir)

    def build_command_line(self, command: Command) -> str:
        return render_command_line(
            command.template,
            domains_path=self.domains_path,
            output_path=self.output_path(command),
        )

    def execute(self, command: Command) -> ErrorInfo | None:
        """Run the command; return ``None`` on exit status 0, else an ``ErrorInfo``."""

        command_line = self.build_command_line(command)
        captured: list[str] = []
        try:
            process = subprocess.Popen(  # noqa: S603
                [self.shell, "-c", command_line],
                stdout=None,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as error:
            return ErrorInfo(message=f"shell not found: {self.shell} ({error})")
        except OSError as error:
            return ErrorInfo(message=f"failed to start command: {error}")

        with process:
            if process.stderr is not None:
                self._pump_stderr(process.stderr, captured)
            returncode = process.wait()

        if returncode != 0:
            return ErrorInfo(
                message=f"command exited with status {returncode}",
                stderr="".join(captured),
            )
        return None

    def _pump_stderr(self, pipe, captured: list[str]) -> None:
        # read1 returns as soon as any bytes arrive; partial lines are forwarded as-is.
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while chunk := pipe.read1(_STDERR_CHUNK_SIZE):
            self._forward_stderr(decoder.decode(chunk), captured)
        self._forward_stderr(decoder.decode(b"", final=True), captured)

    def _forward_stderr(self, text: str, captured: list[str]) -> None:
        if not text:
            return
        captured.append(text)
        self._echo_stderr(text)

    def _echo_stderr(self, chunk: str) -> None:
        stream = self._stderr_stream or sys.stderr
        stream.write(chunk)
        stream.flush()
