"""Custom exceptions for :mod:`deskscripts`."""

from __future__ import annotations

from typing import Sequence


class ScriptsError(RuntimeError):
    """Base class for all deskscripts exceptions."""


class CommandError(ScriptsError):
    """Raised when an external command cannot be run or exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class ToolNotFoundError(CommandError):
    """Raised when the executable of a command is not on ``PATH``."""


class DeviceDumpError(ScriptsError):
    """Raised when the audio server state dump has an unexpected shape."""


class ConfigError(ScriptsError):
    """Raised when the configuration file is missing or invalid."""


class MailError(ScriptsError):
    """Raised when the SMTP transport cannot be built or used."""


class PdfValidationError(ScriptsError):
    """Raised when a PDF input fails validation."""


class HandleAssignmentError(ScriptsError):
    """Raised when input files cannot be given handles."""


class HandleInvariantError(ScriptsError):
    """Raised when a file reaches handle resolution without a handle.

    This signals a bug rather than bad input.
    """
