"""
reactstarter.errors - Exception Hierarchy
=========================================

All fatal conditions raised by the scaffolding pipeline derive from
``StarterError`` so the CLI can catch a single type and exit with status 1.

Hierarchy
---------
    StarterError
    ├── InvalidNameError            (also ValueError)
    ├── InvalidPackageManagerError  (also ValueError)
    ├── DirectoryExistsError        (also FileExistsError)
    ├── FetchError
    ├── InstallError
    └── CommandError

``PatchError`` is outside the hierarchy: it is raised by
``SourceDocument`` edits and is always converted into a warning by the
composers, never shown to the user as a failure.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class StarterError(Exception):
    """Base class for errors that abort project creation."""

    # Partial ScaffoldResult, attached by the pipeline when a run aborts.
    result: Any = None


class InvalidNameError(StarterError, ValueError):
    """Project name is empty or contains characters other than a-z, 0-9 and '-'."""


class InvalidPackageManagerError(StarterError, ValueError):
    """Package manager is not one of npm, pnpm, yarn or bun."""


class DirectoryExistsError(StarterError, FileExistsError):
    """Target project directory is already present on disk."""


class FetchError(StarterError):
    """Template clone or package manifest rewrite failed."""


class InstallError(StarterError):
    """Package manager exited with a nonzero status."""


class CommandError(StarterError):
    """
    An external command failed.

    Attributes
    ----------
    command : list[str]
        The argument vector that was executed.

    returncode : int | None
        Exit status, or None if the executable could not be started.

    output : str
        Captured stderr (empty when output was not captured).
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        output: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output

        if returncode is None:
            message = f"'{self.command[0]}' could not be executed (is it installed?)"
        else:
            message = f"'{' '.join(self.command)}' exited with status {returncode}"
        if output:
            message = f"{message}\n{output}"

        super().__init__(message)


class PatchError(Exception):
    """An anchor needed to patch a source file was not found."""
