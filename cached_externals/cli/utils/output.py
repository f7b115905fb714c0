# cached_externals/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import ExternalsResult, ExternalState

console = Console()


def format_externals_result(result: ExternalsResult) -> None:
    """Format and display a setup or update result"""
    if not result.externals:
        console.print(f"[yellow]{EMOJI_WARNING} No external modules defined[/yellow]")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("Path", style="cyan")
    table.add_column("Destination", style="green")
    table.add_column("Status")

    for entry in result.externals:
        state = entry.state
        table.add_row(
            state.module.path if state else "",
            str(state.destination) if state else "",
            entry.message
        )

    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] {result.operation.capitalize()} completed "
        f"({result.count} module(s), {result.stage} stage)",
    ]
    if result.duration is not None:
        lines.append(f"[dim]Duration: {result.duration:.2f}s[/dim]")

    console.print(table)
    console.print(Panel("\n".join(lines), title="Externals", border_style="green"))


def format_plan(states: List[ExternalState], stage: str) -> None:
    """Display manifest entries with their computed locations"""
    if not states:
        console.print(f"[yellow]{EMOJI_WARNING} No external modules defined[/yellow]")
        return

    table = Table(title=f"External Modules ({stage})", box=box.ROUNDED)
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Revision", style="yellow")
    table.add_column("Link")
    table.add_column("Checkout", style="green")

    for state in states:
        module = state.module
        table.add_row(
            module.path,
            module.scm_type or "[red]?[/red]",
            module.revision,
            str(state.target),
            str(state.destination)
        )

    console.print(table)


def format_errors(errors: List[str], warnings: List[str] = None) -> None:
    """Display errors and warnings collected by plugins"""
    for warning in warnings or []:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")
    for error in errors:
        console.print(f"[red]{EMOJI_ERROR} {escape(error)}[/red]")
