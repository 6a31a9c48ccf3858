"""Progress reporting utilities using Rich."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console(stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output."""
    global _verbose
    _verbose = enabled


def log(message: str, *, style: str = "bold") -> None:
    """Log a timestamped message."""
    ts = datetime.now().strftime("%H:%M:%S")
    console.print(f"[dim]\\[{ts}][/dim] {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a processing step."""
    ts = datetime.now().strftime("%H:%M:%S")
    console.print(
        f"[dim]\\[{ts}][/dim] [bold cyan]{step}[/bold cyan] {escape(message)}",
        highlight=False,
    )


def log_debug(step: str, message: str) -> None:
    """Log a diagnostic line (only when verbose)."""
    if not _verbose:
        return
    ts = datetime.now().strftime("%H:%M:%S")
    # Filter graphs are full of [labels]; print them verbatim
    console.print(
        f"[dim]\\[{ts}] {step}[/dim] ",
        end="",
        highlight=False,
    )
    console.print(message, markup=False, highlight=False)


def log_success(message: str) -> None:
    """Log a success message."""
    log(f"[green]✓[/green] {escape(message)}", style="")


def log_warning(message: str) -> None:
    """Log a warning message."""
    log(f"[yellow]⚠[/yellow] {escape(message)}", style="")


def log_error(message: str) -> None:
    """Log an error message."""
    log(f"[red]✗[/red] {escape(message)}", style="")


def show_summary(title: str, details: dict, *, duration_seconds: float | None = None) -> None:
    """Show a summary panel for a completed command."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in details.items():
        table.add_row(key, str(value))

    if duration_seconds is not None:
        mins = int(duration_seconds) // 60
        secs = int(duration_seconds) % 60
        table.add_row("Duration", f"{mins}m{secs:02d}s")

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="green"))
