"""
Custom exception types used across lintforge.

Defining explicit error classes lets the CLI tell a broken installation or a
failed package manager run apart from unexpected bugs.
"""

from __future__ import annotations

from pathlib import Path


class LintforgeError(Exception):
    """Base class for all lintforge specific errors."""


class PresetNotFoundError(LintforgeError):
    """Raised when a bundled preset file is missing from the installation."""

    def __init__(self, path: Path | str) -> None:
        self.path = path
        super().__init__(f"Preset file not found: {path}")


class ManifestError(LintforgeError):
    """Raised when package.json cannot be read as a JSON object."""


class InstallError(LintforgeError):
    """
    Raised when an external process fails.

    Attributes
    ----------
    command : list[str]
        The command that was run.

    returncode : int | None
        Exit status of the process, or None if it never started.
    """

    def __init__(self, command: list[str], returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        joined = " ".join(command)
        if returncode is None:
            message = f"Could not run '{joined}' (command not found)"
        else:
            message = f"'{joined}' exited with status {returncode}"
        super().__init__(message)
