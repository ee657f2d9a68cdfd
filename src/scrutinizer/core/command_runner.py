"""Run shell commands with live output streaming and a hard timeout.

Used for the project's before/after commands and by analyzers that wrap
external tools. Output lines are forwarded to the logger as the child
produces them, so long-running commands show progress in CI logs.
"""

import logging
import os
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from ..constants import DEFAULT_COMMAND_TIMEOUT, DRAIN_GRACE_PERIOD, KILL_GRACE_PERIOD
from .errors import CommandFailure, CommandTimeout

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"


@dataclass
class CommandResult:
    """Outcome of one external command."""

    command: str
    exit_code: int | None
    output: str = ""
    duration: float = 0.0
    timed_out: bool = False

    @property
    def successful(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "exit_code": self.exit_code,
            "duration": round(self.duration, 3),
            "timed_out": self.timed_out,
            "successful": self.successful,
        }


class CommandRunner:
    """
    Executes a shell command rooted at a working directory.

    Example:
        runner = CommandRunner()
        result = runner.run("pip install -e .", project_dir, timeout=300)
        print(result.output)

    Raises CommandTimeout when the command outlives its timeout (the whole
    process group is killed) and CommandFailure on a non-zero exit code.
    """

    def __init__(self, default_timeout: float = DEFAULT_COMMAND_TIMEOUT):
        self.default_timeout = default_timeout

    def run(
        self,
        command: str,
        cwd: Path | str,
        timeout: float | None = None,
        log: logging.Logger | None = None,
    ) -> CommandResult:
        """
        Run a command and stream its output.

        Args:
            command: Shell command string
            cwd: Working directory
            timeout: Wall-clock limit in seconds (defaults to default_timeout)
            log: Logger receiving each output line (defaults to module logger)

        Returns:
            CommandResult with captured output

        Raises:
            CommandTimeout: If the command exceeded its timeout
            CommandFailure: If the command exited non-zero or couldn't start
        """
        log = log or logger
        if timeout is None:
            timeout = self.default_timeout

        start = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                shell=True,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise CommandFailure(command, -1, str(e)) from e

        lines: list[str] = []
        lock = threading.Lock()
        readers = [
            threading.Thread(
                target=self._pump, args=(stream, log, lines, lock), daemon=True
            )
            for stream in (process.stdout, process.stderr)
        ]
        for reader in readers:
            reader.start()

        try:
            exit_code = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            self._kill(process)
            self._join(readers)
            raise CommandTimeout(command, timeout, self._collect(lines, lock)) from None

        self._drain(process, readers)
        output = self._collect(lines, lock)
        duration = time.monotonic() - start

        if exit_code != 0:
            raise CommandFailure(command, exit_code, output)

        log.debug(f'Command "{command}" finished in {duration:.2f}s')
        return CommandResult(command=command, exit_code=exit_code, output=output, duration=duration)

    @staticmethod
    def _pump(stream: IO[str], log: logging.Logger, lines: list[str], lock: threading.Lock) -> None:
        """Forward lines from a pipe to the logger until EOF."""
        try:
            for line in iter(stream.readline, ""):
                with lock:
                    lines.append(line)
                log.info(line.rstrip("\r\n"))
        finally:
            stream.close()

    @staticmethod
    def _kill(process: subprocess.Popen) -> None:
        """Kill the process and everything it spawned."""
        try:
            if _POSIX:
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass
        try:
            process.wait(timeout=KILL_GRACE_PERIOD)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {process.pid} did not exit after being killed")

    @classmethod
    def _drain(cls, process: subprocess.Popen, readers: list[threading.Thread]) -> None:
        """
        Wait for the output pipes to close after the command exited.

        Background children (`server &`) inherit the pipes and keep them open.
        Once the grace period is over the rest of the process group is killed
        so the readers reach EOF.
        """
        cls._join(readers, DRAIN_GRACE_PERIOD)
        if not any(reader.is_alive() for reader in readers):
            return

        logger.debug(f"Killing processes left behind by {process.pid}")
        if _POSIX:
            try:
                os.killpg(process.pid, signal.SIGKILL)
            except ProcessLookupError:
                pass
        cls._join(readers)

    @staticmethod
    def _join(readers: list[threading.Thread], timeout: float = KILL_GRACE_PERIOD) -> None:
        deadline = time.monotonic() + timeout
        for reader in readers:
            reader.join(timeout=max(0.0, deadline - time.monotonic()))

    @staticmethod
    def _collect(lines: list[str], lock: threading.Lock) -> str:
        with lock:
            return "".join(lines)
