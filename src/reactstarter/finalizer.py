"""
reactstarter.finalizer - Clean-up and Git Initialization
========================================================

The cloned template carries things that do not belong in a new project:
its own CLI (``bin/``), lockfiles for package managers the user did not
pick, and the template's git history. They are removed here, and a fresh
repository with a single commit is created on request.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from reactstarter import runner
from reactstarter.errors import CommandError
from reactstarter.models import PackageManager, ProjectOptions


CLI_ASSET_DIR = "bin"
GIT_DIR = ".git"
INITIAL_COMMIT_MESSAGE = "Initial commit"


def stale_lockfiles(package_manager: PackageManager) -> list[str]:
    """Lockfile names of every package manager except ``package_manager``."""
    return [
        lockfile
        for other in PackageManager
        if other is not package_manager
        for lockfile in other.lockfiles
    ]


def clean_project(project_dir: Path, package_manager: PackageManager) -> list[Path]:
    """
    Delete template leftovers from the project.

    Parameters
    ----------
    project_dir : Path
        Root of the generated project.

    package_manager : PackageManager
        The selected manager; its own lockfile is kept.

    Returns
    -------
    list[Path]
        Paths that were removed.
    """
    removed: list[Path] = []

    for directory in (CLI_ASSET_DIR, GIT_DIR):
        path = project_dir / directory
        if path.is_dir():
            shutil.rmtree(path)
            removed.append(path)

    for lockfile in stale_lockfiles(package_manager):
        path = project_dir / lockfile
        if path.is_file():
            path.unlink()
            removed.append(path)

    return removed


def init_git_repository(project_dir: Path, *, verbose: bool = False) -> bool:
    """
    Initialize a git repository with one commit containing the whole tree.

    Returns
    -------
    bool
        True if all three git commands succeeded. Failure (including git
        not being installed, or no commit identity configured) is not
        fatal; the user can initialize the repository by hand.
    """
    commands = [
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
    ]

    try:
        for command in commands:
            runner.run_command(command, cwd=project_dir, quiet=not verbose)
    except CommandError:
        return False

    return True


def finalize_project(options: ProjectOptions) -> tuple[list[Path], bool | None]:
    """
    Clean the project and optionally reinitialize git.

    Returns
    -------
    tuple[list[Path], bool | None]
        Removed paths, and the git result (None when git init was not
        requested).
    """
    removed = clean_project(options.project_dir, options.package_manager)

    git_ok: bool | None = None
    if options.init_git:
        git_ok = init_git_repository(options.project_dir, verbose=options.verbose)

    return removed, git_ok
