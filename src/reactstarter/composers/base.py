"""
reactstarter.composers.base - Composer Building Blocks
======================================================

A composer applies one optional feature to a freshly cloned project. It is
described by a ``Composer`` record (dependencies plus an ``apply`` function)
and reports what it did in a ``ComposeResult``.

File operations
---------------
``write_new_file``   create a file unless it already exists
``write_file``       create or replace a file (no-op if content is equal)
``patch_document``   load a ``SourceDocument``, run an edit function, save

None of them raise on I/O problems or missing anchors: the problem is
appended to ``ComposeResult.warnings`` and the pipeline continues. Only the
dependency install in ``compose_feature`` is fatal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from reactstarter.documents import SourceDocument
from reactstarter.errors import PatchError
from reactstarter.installer import add_dependencies
from reactstarter.models import Feature, PackageManager


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class ComposeResult:
    """
    Outcome of applying one composer.

    Attributes
    ----------
    feature : Feature
        The feature that was applied.

    files_created : list[Path]
        Files written that did not exist before.

    files_patched : list[Path]
        Existing files that were modified.

    files_skipped : list[Path]
        Files left untouched because the edit was already present or the
        file already existed.

    warnings : list[str]
        Steps the user has to complete by hand.
    """

    feature: Feature
    files_created: list[Path] = field(default_factory=list)
    files_patched: list[Path] = field(default_factory=list)
    files_skipped: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.files_created or self.files_patched)


@dataclass(frozen=True)
class Composer:
    """
    Definition of a feature composer.

    Attributes
    ----------
    feature : Feature
        Feature enabled by this composer.

    title : str
        Step title shown while the composer runs.

    apply : Callable[[Path], ComposeResult]
        Performs the file edits for a project directory.

    dependencies : tuple[str, ...]
        Runtime npm packages to add.

    dev_dependencies : tuple[str, ...]
        Development npm packages to add.
    """

    feature: Feature
    title: str
    apply: Callable[[Path], ComposeResult]
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()


# =============================================================================
# Template Engine
# =============================================================================


def create_jinja_env() -> Environment:
    """
    Jinja2 environment for the generated TypeScript sources.

    Autoescaping is disabled because the output is code, not HTML, and
    undefined variables fail loudly instead of rendering as empty strings.
    """
    return Environment(
        loader=PackageLoader("reactstarter", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_template(template_name: str, **context: Any) -> str:
    """Render one of the package templates with ``context``."""
    return create_jinja_env().get_template(template_name).render(**context)


# =============================================================================
# File Operations
# =============================================================================


def write_new_file(
    project_dir: Path,
    relative_path: str,
    content: str,
    result: ComposeResult,
) -> None:
    """Create ``relative_path`` unless it exists; existing files are kept."""
    full_path = project_dir / relative_path

    if full_path.exists():
        result.files_skipped.append(full_path)
        return

    try:
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    except OSError as e:
        result.warnings.append(f"Could not write {relative_path}: {e}")
        return

    result.files_created.append(full_path)


def write_file(
    project_dir: Path,
    relative_path: str,
    content: str,
    result: ComposeResult,
) -> None:
    """Create or replace ``relative_path`` with ``content``."""
    full_path = project_dir / relative_path
    existed = full_path.exists()

    try:
        if existed and full_path.read_text(encoding="utf-8") == content:
            result.files_skipped.append(full_path)
            return
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    except OSError as e:
        result.warnings.append(f"Could not write {relative_path}: {e}")
        return

    if existed:
        result.files_patched.append(full_path)
    else:
        result.files_created.append(full_path)


def patch_document(
    project_dir: Path,
    relative_path: str,
    result: ComposeResult,
    edit: Callable[[SourceDocument], None],
) -> None:
    """
    Apply ``edit`` to a source file.

    If the file is missing or ``edit`` raises ``PatchError`` the file is
    left exactly as it was and a warning is recorded, so a half-applied
    edit never reaches disk.
    """
    full_path = project_dir / relative_path

    try:
        document = SourceDocument.load(full_path)
    except FileNotFoundError:
        result.warnings.append(f"{relative_path} not found, skipping {result.feature.value} setup for it")
        return
    except OSError as e:
        result.warnings.append(f"Could not read {relative_path}: {e}")
        return

    try:
        edit(document)
    except PatchError as e:
        result.warnings.append(f"{e}; update {relative_path} manually")
        return

    try:
        written = document.save()
    except OSError as e:
        result.warnings.append(f"Could not write {relative_path}: {e}")
        return

    if written:
        result.files_patched.append(full_path)
    else:
        result.files_skipped.append(full_path)


# =============================================================================
# Composition
# =============================================================================


def compose_feature(
    project_dir: Path,
    composer: Composer,
    package_manager: PackageManager,
    *,
    verbose: bool = False,
    install: bool = True,
) -> ComposeResult:
    """
    Install a composer's dependencies, then apply its file edits.

    Parameters
    ----------
    project_dir : Path
        Root of the generated project.

    composer : Composer
        The composer to run.

    package_manager : PackageManager
        Manager used for the install step.

    verbose : bool, default=False
        Stream package manager output.

    install : bool, default=True
        Skip the install step when False (used by tests and dry runs).

    Returns
    -------
    ComposeResult
        What was created, patched or skipped, plus warnings.

    Raises
    ------
    InstallError
        If adding the dependencies fails. No file edits are made then.
    """
    if install:
        add_dependencies(
            project_dir, package_manager, composer.dependencies, verbose=verbose
        )
        add_dependencies(
            project_dir, package_manager, composer.dev_dependencies, dev=True, verbose=verbose
        )

    return composer.apply(project_dir)
