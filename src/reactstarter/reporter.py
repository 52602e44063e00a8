"""
reactstarter.reporter - Terminal Output
=======================================

All progress messages go through a ``Reporter`` wrapping a rich
``Console``. Each pipeline stage receives the reporter explicitly instead of
printing to a module-level console, which lets the library API and the tests
run silently with ``Reporter(quiet=True)``.

Message kinds
-------------
- title:   bold magenta heading (start of the run)
- step:    a pipeline stage starts
- info:    neutral progress line
- success: a step finished
- warning: non-fatal problem, the user may need to finish a step manually
- error:   fatal problem (always printed, even when quiet)
- command: a shell command the user can run
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel


class Reporter:
    """
    Rich-formatted progress output.

    Parameters
    ----------
    console : Console | None
        Console to print to. A new one is created if omitted.

    quiet : bool, default=False
        Suppress everything except errors.
    """

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        self.console = console or Console()
        self.quiet = quiet

    def _print(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message)

    def title(self, message: str) -> None:
        self._print(f"\n[magenta]🚀[/] [bold bright_magenta]{escape(message)}[/]")

    def step(self, message: str) -> None:
        self._print(f"\n[blue]📌[/] [bright_blue]{escape(message)}[/]")

    def info(self, message: str) -> None:
        self._print(f"[blue]ℹ[/] [cyan]{escape(message)}[/]")

    def success(self, message: str) -> None:
        self._print(f"[green]✔[/] [bright_green]{escape(message)}[/]")

    def warning(self, message: str) -> None:
        self._print(f"[yellow]⚠[/] [bright_yellow]{escape(message)}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✖[/] [bright_red]{escape(message)}[/]")

    def command(self, command: str) -> None:
        self._print(f"  [dim]$[/] [bright_white]{escape(command)}[/]")

    def panel(self, body: str, *, title: str, style: str = "green") -> None:
        """Print a bordered panel; ``body`` may contain rich markup."""
        if not self.quiet:
            self.console.print(Panel(body, title=f"[bold]{title}[/]", border_style=style))
