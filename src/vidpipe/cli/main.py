"""Root CLI group for vidpipe."""

from __future__ import annotations

import click
from pydantic import ValidationError

from vidpipe import __version__
from vidpipe.models.config import load_config
from vidpipe.utils.progress import log_error, set_verbose


@click.group()
@click.version_option(version=__version__, prog_name="vidpipe")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to vidpipe.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Print filter fragments and FFmpeg commands")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """vidpipe — compile edit decision lists into FFmpeg filter graphs."""
    set_verbose(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ValidationError as e:
        log_error(f"Invalid config {config_path}: {e}")
        raise SystemExit(1)


# Import and register subcommands
from vidpipe.cli.validate_cmd import validate_cmd  # noqa: E402
from vidpipe.cli.compile_cmd import compile_cmd  # noqa: E402
from vidpipe.cli.render_cmd import render_cmd  # noqa: E402

cli.add_command(validate_cmd, "validate")
cli.add_command(compile_cmd, "compile")
cli.add_command(render_cmd, "render")
