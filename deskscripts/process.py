"""Running external commands.

Every utility shells out through :class:`CommandRunner`. Functions that run
commands accept a ``runner`` argument so tests can pass a fake with the same
``run`` signature.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from .exceptions import CommandError, ToolNotFoundError

_LOGGER = logging.getLogger("deskscripts.process")


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of an external command."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Runner(Protocol):
    """Anything that can run a command and return a :class:`CommandResult`."""

    def run(
        self, command: Sequence[str], *, check: bool = True, log_output: bool = True
    ) -> CommandResult:
        ...


class CommandRunner:
    """Run commands with :func:`subprocess.run`, capturing text output."""

    def which(self, executable: str) -> str | None:
        return shutil.which(executable)

    def run(
        self, command: Sequence[str], *, check: bool = True, log_output: bool = True
    ) -> CommandResult:
        """Run *command* and return its captured result.

        With *log_output* unset, stdout is left out of the debug log.

        Raises:
            ToolNotFoundError: If the executable is not on ``PATH``.
            CommandError: If the process cannot be spawned, or exits non-zero
                while *check* is set.
        """

        argv = [str(part) for part in command]
        if not argv:
            raise CommandError("Empty command")

        if self.which(argv[0]) is None:
            _LOGGER.error("Executable not found on PATH: %s", argv[0])
            raise ToolNotFoundError(
                f"Required tool '{argv[0]}' was not found on PATH",
                command=argv,
            )

        _LOGGER.debug("Executing command: %s", " ".join(argv))
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as exc:
            _LOGGER.error("Failed to execute %s: %s", argv[0], exc)
            raise CommandError(f"Failed to execute {argv[0]}: {exc}", command=argv) from exc

        _LOGGER.debug(
            "Command finished with exit code %s\nstdout: %s\nstderr: %s",
            completed.returncode,
            completed.stdout if log_output else "<hidden>",
            completed.stderr,
        )
        result = CommandResult(
            command=tuple(argv),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if check and not result.ok:
            stderr = result.stderr.strip()
            message = f"'{' '.join(argv)}' failed with exit code {result.returncode}"
            if stderr:
                message = f"{message}: {stderr}"
            _LOGGER.error(message)
            raise CommandError(
                message,
                command=argv,
                returncode=result.returncode,
                stderr=stderr,
            )
        return result


def run_success(
    command: Sequence[str],
    *,
    runner: Runner | None = None,
    log_output: bool = True,
) -> CommandResult:
    """Run *command* and raise unless it exits successfully."""

    return (runner or CommandRunner()).run(command, check=True, log_output=log_output)


__all__ = ["CommandResult", "CommandRunner", "Runner", "run_success"]
