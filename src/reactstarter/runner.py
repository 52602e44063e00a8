"""
reactstarter.runner - External Process Invocation
=================================================

Every call to git or a package manager goes through ``run_command``. The
working directory is always passed explicitly; the process-wide current
directory is never changed.

Output handling
---------------
By default stdout/stderr are captured so the user only sees the tool's own
progress messages; stderr is attached to ``CommandError`` when a command
fails. With ``quiet=False`` the child inherits the terminal, which is what
``--verbose`` uses.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from reactstarter.errors import CommandError


def run_command(
    args: Sequence[str],
    *,
    cwd: Path,
    quiet: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run an external command and wait for it to finish.

    Parameters
    ----------
    args : Sequence[str]
        Argument vector; ``args[0]`` is resolved on PATH so that ``.cmd``
        shims (npm, pnpm on Windows) work without a shell.

    cwd : Path
        Directory to run the command in.

    quiet : bool, default=True
        Capture output instead of streaming it to the terminal.

    env : Mapping[str, str] | None
        Full environment for the child. Inherits the parent's if omitted.

    Returns
    -------
    subprocess.CompletedProcess[str]
        The finished process (exit status 0).

    Raises
    ------
    CommandError
        If the executable is missing or exits with a nonzero status.

    Notes
    -----
    There is no timeout: a hung git or package manager hangs the tool, and
    Ctrl-C is the only way out.
    """
    argv = list(args)
    executable = shutil.which(argv[0]) or argv[0]

    try:
        completed = subprocess.run(
            [executable, *argv[1:]],
            cwd=cwd,
            capture_output=quiet,
            text=True,
            check=False,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        raise CommandError(argv, None) from e

    if completed.returncode != 0:
        stderr = completed.stderr.strip() if quiet and completed.stderr else ""
        raise CommandError(argv, completed.returncode, stderr)

    return completed
