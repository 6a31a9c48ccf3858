"""vidpipe render — compile an edit plan and run FFmpeg once."""

from __future__ import annotations

import subprocess
import time

import click

from vidpipe.cli.plan_args import load_plan_or_exit
from vidpipe.render.single_pass import (
    EDLValidationError,
    build_ffmpeg_args,
    prepare_render,
    render_edl,
)
from vidpipe.utils.ffmpeg import FFMPEG_PREFIX, FFmpegError, format_command
from vidpipe.utils.progress import log_error, show_summary


@click.command()
@click.argument("plan", type=click.Path())
@click.option(
    "--optimize/--no-optimize",
    default=None,
    help="Merge redundant decisions first (default from config)",
)
@click.option(
    "--probe/--no-probe",
    default=None,
    help="Fill missing source metadata with ffprobe (default from config)",
)
@click.option("--dry-run", is_flag=True, help="Print the FFmpeg command instead of running it")
@click.pass_context
def render_cmd(
    ctx: click.Context,
    plan: str,
    optimize: bool | None,
    probe: bool | None,
    dry_run: bool,
) -> None:
    """Render PLAN to its output path."""
    config = ctx.obj["config"]
    overrides = {}
    if optimize is not None:
        overrides["optimize"] = optimize
    if probe is not None:
        overrides["probe_source"] = probe
    if overrides:
        config = config.model_copy(update={"render": config.render.model_copy(update=overrides)})

    edl, _ = load_plan_or_exit(plan)
    start = time.monotonic()

    try:
        if dry_run:
            edl, result = prepare_render(edl, config)
            click.echo(format_command(FFMPEG_PREFIX + build_ffmpeg_args(edl, result, config.render)))
            return
        result = render_edl(edl, config)
    except EDLValidationError as e:
        for error in e.errors:
            log_error(error)
        raise SystemExit(1)
    except (FFmpegError, FileNotFoundError, subprocess.CalledProcessError) as e:
        log_error(str(e))
        raise SystemExit(1)

    show_summary(
        "Render complete",
        {
            "Output": edl.output_path,
            "Decisions": len(edl.decisions),
            "Estimated length": (
                "unknown" if result.estimated_duration is None
                else f"{result.estimated_duration:.1f}s"
            ),
            "Warnings": len(result.warnings),
        },
        duration_seconds=time.monotonic() - start,
    )
