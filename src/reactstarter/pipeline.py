"""
reactstarter.pipeline - Project Creation Pipeline
=================================================

This module orchestrates a scaffolding run from validated options to a
ready-to-use project directory.

Architecture
------------
The pipeline runs its stages strictly in order, each one blocking on its
subprocesses before the next begins:

    INIT → RESOLVING → FETCHING → INSTALLING → COMPOSING → FINALIZING → DONE
                                                     ↘ ABORTED (any stage)

- RESOLVING:  announces the resolved options (no I/O)
- FETCHING:   shallow clone of the template, package.json rewrite
- INSTALLING: base ``<pm> install``
- COMPOSING:  one composer per enabled feature, each with its own install
- FINALIZING: remove template leftovers, optional ``git init``

A fatal error (``StarterError``) moves the run to ABORTED and is re-raised;
whatever was already written to disk stays there. Non-fatal problems
(missing anchors, git init failing) are collected in
``ScaffoldResult.warnings``.

Option resolution itself happens before the pipeline starts:
``resolver.resolve_options`` builds the ``ProjectOptions`` passed in, so an
invalid name or package manager raises from the resolver and never produces
a ``ScaffoldResult``. RESOLVING only reports what was resolved.

Usage Example
-------------
>>> from reactstarter.models import Feature, ProjectOptions
>>> from reactstarter.pipeline import create_project
>>> result = create_project(ProjectOptions(name="my-app", features={Feature.TAILWIND}))
>>> result.stage
<Stage.DONE: 'done'>
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from reactstarter.composers import ComposeResult, compose_feature, composers_for
from reactstarter.errors import StarterError
from reactstarter.fetcher import fetch_template, update_package_manifest
from reactstarter.finalizer import finalize_project
from reactstarter.installer import install_dependencies
from reactstarter.models import ProjectOptions
from reactstarter.reporter import Reporter


class Stage(str, Enum):
    """
    Pipeline states. Stages are never re-entered.

    RESOLVING is entered with options that ``resolve_options`` already
    validated; resolution errors are raised before INIT.
    """

    INIT = "init"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    INSTALLING = "installing"
    COMPOSING = "composing"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORTED = "aborted"


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class ScaffoldResult:
    """
    Outcome of a scaffolding run.

    Attributes
    ----------
    project_path : Path
        The project directory.

    stage : Stage
        DONE on success, ABORTED after a fatal error.

    failed_stage : Stage | None
        The stage that was running when the run aborted.

    compose_results : list[ComposeResult]
        One entry per composer that ran, in composition order.

    removed_paths : list[Path]
        Template leftovers deleted by the finalizer.

    git_initialized : bool | None
        Result of git init; None if it was not requested.

    warnings : list[str]
        Non-fatal problems for the user to resolve by hand.

    elapsed : float
        Wall-clock seconds.
    """

    project_path: Path
    stage: Stage = Stage.INIT
    failed_stage: Stage | None = None
    compose_results: list[ComposeResult] = field(default_factory=list)
    removed_paths: list[Path] = field(default_factory=list)
    git_initialized: bool | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        return self.stage is Stage.DONE

    def advance(self, stage: Stage) -> None:
        """Move to the next stage."""
        self.stage = stage


# =============================================================================
# Main Pipeline Function
# =============================================================================


def create_project(
    options: ProjectOptions,
    *,
    reporter: Reporter | None = None,
) -> ScaffoldResult:
    """
    Create a new project from the template.

    Parameters
    ----------
    options : ProjectOptions
        Validated options (built by ``resolver.resolve_options``).

    reporter : Reporter | None
        Progress output. Defaults to a quiet reporter so library use prints
        nothing.

    Returns
    -------
    ScaffoldResult
        Result with stage DONE.

    Raises
    ------
    StarterError
        Any fatal error (existing directory, clone failure, install
        failure). The partial ``ScaffoldResult`` (stage ABORTED) is attached
        to the exception as ``result``. No rollback is attempted.
    """
    reporter = reporter or Reporter(quiet=True)
    result = ScaffoldResult(project_path=options.project_dir)
    start = time.perf_counter()

    try:
        _run_stages(options, result, reporter)
    except StarterError as e:
        result.failed_stage = result.stage
        result.advance(Stage.ABORTED)
        e.result = result
        raise
    finally:
        result.elapsed = time.perf_counter() - start

    _report_next_steps(options, result, reporter)
    return result


def _report_next_steps(options: ProjectOptions, result: ScaffoldResult, reporter: Reporter) -> None:
    pm = options.package_manager
    reporter.success(f"Total execution time: {result.elapsed:.2f} seconds")
    reporter.panel(
        f"[bold green]✨ Project created successfully![/]\n\n"
        f"[dim]Location:[/] {options.project_dir}\n\n"
        f"[bold]Next steps:[/]\n"
        f"  cd {options.name}\n"
        f"  {pm.run_command('dev')}\n\n"
        f"[dim]Build for production with[/] {pm.run_command('build')}",
        title="Success",
    )
    if result.warnings:
        reporter.warning(f"Finished with {len(result.warnings)} warning(s); see above.")


def _run_stages(options: ProjectOptions, result: ScaffoldResult, reporter: Reporter) -> None:
    pm = options.package_manager

    result.advance(Stage.RESOLVING)
    reporter.title("React Starter")
    reporter.step(f"Creating a new React app in {options.project_dir}")
    features = ", ".join(feature.value for feature in options.ordered_features) or "none"
    reporter.info(f"Package manager: {pm.value}; features: {features}")

    result.advance(Stage.FETCHING)
    reporter.info("Downloading files...")
    fetch_template(options)
    reporter.info("Updating package.json...")
    update_package_manifest(options.project_dir, options.name)

    result.advance(Stage.INSTALLING)
    reporter.info(f"Installing dependencies with {pm.value}...")
    install_dependencies(options.project_dir, pm, verbose=options.verbose)

    result.advance(Stage.COMPOSING)
    for composer in composers_for(options.features):
        reporter.step(f"{composer.title}...")
        compose_result = compose_feature(
            options.project_dir, composer, pm, verbose=options.verbose
        )
        result.compose_results.append(compose_result)

        for path in compose_result.files_created:
            reporter.info(f"Created {path.relative_to(options.project_dir)}")
        for path in compose_result.files_patched:
            reporter.info(f"Updated {path.relative_to(options.project_dir)}")
        for warning in compose_result.warnings:
            reporter.warning(warning)
            result.warnings.append(warning)

        reporter.success(f"{composer.feature.description} configured.")

    result.advance(Stage.FINALIZING)
    if options.init_git:
        reporter.step("Initializing Git repository")
    removed, git_ok = finalize_project(options)
    result.removed_paths = removed
    result.git_initialized = git_ok

    if git_ok is False:
        message = "Git initialization failed. You may need to initialize it manually."
        reporter.warning(message)
        result.warnings.append(message)
    elif git_ok:
        reporter.success("Git repository initialized with initial commit")

    result.advance(Stage.DONE)
