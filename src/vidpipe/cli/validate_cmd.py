"""vidpipe validate — check an edit plan's timeline."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vidpipe.cli.plan_args import load_plan_or_exit, report_errors
from vidpipe.utils.progress import log_success

console = Console()

TYPE_STYLES = {
    "layout": "cyan",
    "transition": "magenta",
    "effect": "yellow",
}


@click.command()
@click.argument("plan", type=click.Path())
def validate_cmd(plan: str) -> None:
    """Replay PLAN through an accumulator and report problems."""
    edl, result = load_plan_or_exit(plan)

    table = Table(title=f"{len(edl.decisions)} decisions", show_lines=False)
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Tool", no_wrap=True)
    table.add_column("Start", justify="right", no_wrap=True)
    table.add_column("End", justify="right", no_wrap=True)
    table.add_column("Params", overflow="fold")

    for d in edl.decisions:
        style = TYPE_STYLES.get(d.type, "")
        table.add_row(
            d.id,
            f"[{style}]{d.type}[/{style}]",
            d.tool,
            f"{d.start_time:.3f}",
            "—" if d.end_time is None else f"{d.end_time:.3f}",
            escape(", ".join(f"{k}={v}" for k, v in d.params.items())),
        )

    console.print(table)

    if not result.valid:
        report_errors(result)
        raise SystemExit(1)

    log_success("Edit plan is valid")
