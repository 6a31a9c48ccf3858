"""vidpipe compile — lower an edit plan to a filter graph."""

from __future__ import annotations

import json

import click

from vidpipe.cli.plan_args import load_plan_or_exit, report_errors
from vidpipe.edl.compiler import compile_edl
from vidpipe.edl.optimizer import optimize_edl
from vidpipe.utils.io import write_json
from vidpipe.utils.progress import log_success, log_warning


@click.command()
@click.argument("plan", type=click.Path())
@click.option(
    "--optimize/--no-optimize",
    default=None,
    help="Merge redundant decisions first (default from config)",
)
@click.option("--out", "-o", default=None, type=click.Path(dir_okay=False), help="Write JSON here")
@click.option("--force", is_flag=True, help="Compile even when validation fails")
@click.pass_context
def compile_cmd(
    ctx: click.Context,
    plan: str,
    optimize: bool | None,
    out: str | None,
    force: bool,
) -> None:
    """Compile PLAN and print the result as JSON."""
    config = ctx.obj["config"]
    edl, result = load_plan_or_exit(plan)

    if not result.valid:
        report_errors(result)
        if not force:
            raise SystemExit(1)
        log_warning("Compiling an invalid plan (--force)")

    if config.render.optimize if optimize is None else optimize:
        edl = optimize_edl(edl)

    compiled = compile_edl(edl, config.compiler)

    if out:
        write_json(out, compiled.to_dict())
        log_success(f"Wrote {out}")
    else:
        click.echo(json.dumps(compiled.to_dict(), indent=2))
