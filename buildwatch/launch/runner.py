"""
Process runners.

A runner starts a build command and hands back its two output streams
and a way to wait for its exit code.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from buildwatch.core.exceptions.errors import SpawnError
from buildwatch.core.logger.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ProcessHandle:
    """A running build process.

    Attributes:
        stdout: Reader for the standard output stream.
        stderr: Reader for the standard error stream.
        wait: Coroutine function resolving to the exit code.
        pid: Process id, when the runner has one.
        kill: Stops the process, when the runner can.
    """

    stdout: asyncio.StreamReader
    stderr: asyncio.StreamReader
    wait: Callable[[], Awaitable[int]]
    pid: int | None = None
    kill: Callable[[], None] | None = None


class ProcessRunner(ABC):
    """Starts build processes."""

    @abstractmethod
    async def spawn(
        self,
        command: str,
        arguments: tuple[str, ...] | list[str],
        working_directory: str | Path,
    ) -> ProcessHandle:
        """
        Start a process.

        Args:
            command: Executable to run.
            arguments: Arguments, in order.
            working_directory: Directory to run in.

        Returns:
            Handle on the running process.

        Raises:
            SpawnError: If the process could not be started.
        """
        pass


class AsyncioProcessRunner(ProcessRunner):
    """Runs commands with ``asyncio.create_subprocess_exec``."""

    def __init__(self, env: dict[str, str] | None = None):
        """
        Initialize the runner.

        Args:
            env: Environment for the child. Inherits the current one if None.
        """
        self.env = env

    async def spawn(
        self,
        command: str,
        arguments: tuple[str, ...] | list[str],
        working_directory: str | Path,
    ) -> ProcessHandle:
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *arguments,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=working_directory,
                env=self.env,
            )
        except OSError as e:
            logger.error(f"Could not start {command!r} in {working_directory}: {e}")
            raise SpawnError(
                f"Could not start {command}: {e.strerror or e}",
                command=command,
                working_directory=str(working_directory),
            ) from e

        logger.debug(f"Started {command!r} (pid {process.pid})")
        return ProcessHandle(
            stdout=process.stdout,
            stderr=process.stderr,
            wait=process.wait,
            pid=process.pid,
            kill=lambda: _kill(process),
        )


def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    logger.warning(f"Killing build process {process.pid}")
    try:
        process.kill()
    except ProcessLookupError:
        # Exited in the meantime
        pass
