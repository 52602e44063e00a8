"""
reactstarter.fetcher - Template Fetching
========================================

Obtains a copy of the template with a shallow ``git clone`` into a directory
named after the project, then rewrites the package.json metadata so the new
project does not carry the template's name and version.
"""

from __future__ import annotations

import json
from pathlib import Path

from reactstarter import runner
from reactstarter.errors import CommandError, DirectoryExistsError, FetchError
from reactstarter.models import ProjectOptions


PROJECT_VERSION = "1.0.0"


def clone_command(template_url: str, name: str) -> list[str]:
    """Shallow clone of ``template_url`` into ``name``."""
    return ["git", "clone", "--depth", "1", template_url, name]


def fetch_template(options: ProjectOptions) -> Path:
    """
    Clone the template into ``options.project_dir``.

    The existence check happens before any subprocess runs, so an existing
    directory is never touched.

    Parameters
    ----------
    options : ProjectOptions
        Resolved options; ``output_dir`` and ``name`` pick the target.

    Returns
    -------
    Path
        The new project directory.

    Raises
    ------
    DirectoryExistsError
        If the target directory already exists.
    FetchError
        If git is missing or the clone fails.
    """
    project_dir = options.project_dir

    if project_dir.exists():
        raise DirectoryExistsError(f"The directory {project_dir} already exists.")

    options.output_dir.mkdir(parents=True, exist_ok=True)

    try:
        runner.run_command(
            clone_command(options.template_url, options.name),
            cwd=options.output_dir,
            quiet=not options.verbose,
        )
    except CommandError as e:
        raise FetchError(f"Failed to clone template: {e}") from e

    if not project_dir.is_dir():
        raise FetchError(f"Clone finished but {project_dir} was not created.")

    return project_dir


def update_package_manifest(
    project_dir: Path,
    name: str,
    version: str = PROJECT_VERSION,
) -> None:
    """
    Set the ``name`` and ``version`` fields of package.json.

    Key order is preserved; the file is written with two-space indentation
    and a trailing newline.

    Raises
    ------
    FetchError
        If package.json is missing or is not a JSON object.
    """
    manifest_path = project_dir / "package.json"

    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise FetchError(f"Failed to update package.json: {e}") from e

    if not isinstance(manifest, dict):
        raise FetchError("Failed to update package.json: top level is not an object")

    manifest["name"] = name
    manifest["version"] = version

    manifest_path.write_text(
        json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
