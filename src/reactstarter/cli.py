"""
reactstarter.cli - Command Line Interface
=========================================

This module provides the ``react-starter`` command using Typer, with
questionary for the interactive prompts and rich for output.

Modes
-----
Flag-based (a project name is given):
    $ react-starter my-app --pm bun --tailwind --i18n
    $ react-starter my-app --all

Interactive (no project name): prompts for the package manager, the
features, the project name (validated inline) and whether to initialize
git, then shows a summary to confirm.
    $ react-starter

Exit Status
-----------
0 on success, 1 on any fatal error (invalid name or package manager,
existing directory, clone or install failure).

See Also
--------
- resolver.py: Validation of the raw values collected here
- pipeline.py: The scaffolding run itself
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from reactstarter import __version__
from reactstarter.errors import InvalidNameError, StarterError
from reactstarter.models import Feature, PackageManager, ProjectOptions, validate_project_name
from reactstarter.pipeline import create_project
from reactstarter.reporter import Reporter
from reactstarter.resolver import resolve_features, resolve_options
from reactstarter.settings import StarterSettings, load_settings


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="react-starter",
    help="Create a new React project from the custom React starter template.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]react-starter[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Vite + React + TanStack Router project scaffolding[/]",
            border_style="green",
        ))
        raise typer.Exit()


def fail(message: str) -> typer.Exit:
    """Print an error and return the exit exception to raise."""
    console.print(f"[red]Error:[/] {escape(message)}")
    return typer.Exit(1)


# =============================================================================
# Interactive Prompts
# =============================================================================

def prompt_package_manager(default: PackageManager) -> PackageManager:
    """
    Ask which package manager to use.

    Returns
    -------
    PackageManager
        The selected manager.
    """
    result = questionary.select(
        "Which package manager do you use?",
        choices=[questionary.Choice(title=pm.value, value=pm) for pm in PackageManager],
        default=default,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_features(defaults: frozenset[Feature]) -> frozenset[Feature]:
    """
    Ask which optional features to add.

    Returns
    -------
    frozenset[Feature]
        Selected features (possibly empty).
    """
    result = questionary.checkbox(
        "What options do you want to add?",
        choices=[
            questionary.Choice(feature.description, value=feature, checked=feature in defaults)
            for feature in Feature
        ],
    ).ask()

    if result is None:
        raise typer.Abort()

    return frozenset(result)


def _validate_name_answer(answer: str) -> bool | str:
    try:
        validate_project_name(answer)
    except InvalidNameError as e:
        return str(e)
    return True


def prompt_project_name() -> str:
    """Ask for the project name, rejecting invalid names inline."""
    result = questionary.text(
        "What is the name of the project?",
        validate=_validate_name_answer,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_init_git(default: bool) -> bool:
    """Ask whether to initialize a fresh git repository."""
    result = questionary.confirm(
        "Initialize a git repository?",
        default=default,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def show_summary(options: ProjectOptions) -> None:
    """Print the resolved options as a table."""
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", options.name)
    table.add_row("Location", str(options.project_dir))
    table.add_row("Package manager", options.package_manager.value)
    table.add_row(
        "Features",
        ", ".join(feature.value for feature in options.ordered_features) or "none",
    )
    table.add_row("Git", "yes" if options.init_git else "no")

    console.print()
    console.print(table)
    console.print()


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main(
    name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the project to create (prompts interactively if omitted)",
            show_default=False,
        ),
    ] = None,
    pm: Annotated[
        str | None,
        typer.Option(
            "--pm",
            help="Package manager: npm, pnpm, yarn, bun [default: pnpm]",
            show_default=False,
        ),
    ] = None,
    tailwind: Annotated[
        bool,
        typer.Option("--tailwind", help="Add Tailwind CSS"),
    ] = False,
    i18n: Annotated[
        bool,
        typer.Option("--i18n", help="Add i18next with English and Turkish resources"),
    ] = False,
    auth_pages: Annotated[
        bool,
        typer.Option("--auth-pages", help="Add login and register page stubs"),
    ] = False,
    query: Annotated[
        bool,
        typer.Option("--query", "--data-fetching", help="Add TanStack Query"),
    ] = False,
    all_features: Annotated[
        bool,
        typer.Option("--all", "-a", help="Enable every feature"),
    ] = False,
    no_git: Annotated[
        bool,
        typer.Option("--no-git", help="Skip git initialization"),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
        ),
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", help="Git URL of the template repository"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ./react-starter.toml)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show git and package manager output"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Create a new React project.

    Clones the template, installs its dependencies and adds the optional
    features you ask for:

    - [cyan]--tailwind[/]     Tailwind CSS v4
    - [cyan]--i18n[/]         i18next (en, tr)
    - [cyan]--auth-pages[/]   login / register routes
    - [cyan]--query[/]        TanStack Query

    [bold]Examples:[/]

        react-starter my-app --tailwind
        react-starter my-app --pm bun --all
        react-starter
    """
    try:
        settings: StarterSettings = load_settings(config)
    except StarterError as e:
        raise fail(str(e)) from None

    # Explicit feature flags replace the settings defaults instead of adding to them.
    features: frozenset[Feature] | None = None
    if tailwind or i18n or auth_pages or query or all_features:
        features = resolve_features(
            tailwind=tailwind,
            i18n=i18n,
            auth_pages=auth_pages,
            data_fetching=query,
            all_features=all_features,
        )
    init_git: bool | None = False if no_git else None
    interactive = name is None

    if interactive:
        if pm is None:
            pm = prompt_package_manager(settings.package_manager).value
        if features is None:
            features = prompt_features(frozenset(settings.features))
        name = prompt_project_name()
        if not no_git:
            init_git = prompt_init_git(settings.init_git)

    try:
        options = resolve_options(
            name,
            package_manager=pm,
            features=features,
            init_git=init_git,
            output_dir=output_dir,
            template_url=template,
            verbose=verbose,
            settings=settings,
        )
    except StarterError as e:
        raise fail(str(e)) from None

    if interactive:
        show_summary(options)
        if not questionary.confirm("Create project with these settings?", default=True).ask():
            raise typer.Abort()

    try:
        create_project(options, reporter=Reporter(console))
    except StarterError as e:
        raise fail(str(e)) from None


if __name__ == "__main__":
    app()
