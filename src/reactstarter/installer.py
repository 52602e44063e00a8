"""
reactstarter.installer - Dependency Installation
================================================

Thin wrappers that run the selected package manager inside the project
directory. Any failure is fatal: the caller aborts the pipeline rather than
retrying, so a flaky network has to be dealt with by re-running the tool.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from reactstarter import runner
from reactstarter.errors import CommandError, InstallError
from reactstarter.models import PackageManager


def install_dependencies(
    project_dir: Path,
    package_manager: PackageManager,
    *,
    verbose: bool = False,
) -> None:
    """
    Install the dependencies declared in the template's package.json.

    Raises
    ------
    InstallError
        If the package manager is missing or exits nonzero.
    """
    try:
        runner.run_command(
            package_manager.install_command(),
            cwd=project_dir,
            quiet=not verbose,
        )
    except CommandError as e:
        raise InstallError(f"Failed to install dependencies: {e}") from e


def add_dependencies(
    project_dir: Path,
    package_manager: PackageManager,
    packages: Sequence[str],
    *,
    dev: bool = False,
    verbose: bool = False,
) -> None:
    """
    Add packages to the project.

    Parameters
    ----------
    project_dir : Path
        Root of the generated project.

    package_manager : PackageManager
        Manager to invoke.

    packages : Sequence[str]
        Package names. Nothing is run when empty.

    dev : bool, default=False
        Save as development dependencies.

    verbose : bool, default=False
        Stream the package manager's output.

    Raises
    ------
    InstallError
        If the package manager is missing or exits nonzero.
    """
    if not packages:
        return

    try:
        runner.run_command(
            package_manager.add_command(packages, dev=dev),
            cwd=project_dir,
            quiet=not verbose,
        )
    except CommandError as e:
        raise InstallError(f"Failed to install {', '.join(packages)}: {e}") from e
