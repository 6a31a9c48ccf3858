"""Single-pass render — validate, optimize, compile, run FFmpeg once."""

from __future__ import annotations

import time
from pathlib import Path

from vidpipe.edl.accumulator import validate_decisions
from vidpipe.edl.compiler import CompileResult, compile_edl
from vidpipe.edl.optimizer import optimize_edl
from vidpipe.models.config import RenderConfig, VidpipeConfig
from vidpipe.models.edl import EditDecisionList
from vidpipe.utils.ffmpeg import run_ffmpeg
from vidpipe.utils.ffprobe import fill_metadata
from vidpipe.utils.progress import log_step, log_success, log_warning


class EDLValidationError(Exception):
    """Raised when an EDL fails structural validation before rendering."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"EDL is invalid ({len(errors)} error(s)): " + "; ".join(errors))


def validate_edl(edl: EditDecisionList) -> None:
    """Check an EDL's decisions. Raises EDLValidationError when invalid."""
    result = validate_decisions(edl.decisions)
    if not result.valid:
        raise EDLValidationError(result.errors)


def build_ffmpeg_args(
    edl: EditDecisionList,
    result: CompileResult,
    config: RenderConfig | None = None,
) -> list[str]:
    """FFmpeg arguments (without the ``ffmpeg`` prefix) for a compiled EDL."""
    config = config or RenderConfig()
    return [
        "-i", edl.source_video,
        *result.input_args,
        "-filter_complex", result.filter_complex,
        *result.output_args,
        "-threads", str(config.threads),
        edl.output_path,
    ]


def prepare_render(
    edl: EditDecisionList,
    config: VidpipeConfig | None = None,
) -> tuple[EditDecisionList, CompileResult]:
    """Validate, probe, optimize and compile. Returns the EDL actually compiled."""
    config = config or VidpipeConfig()

    validate_edl(edl)

    if config.render.probe_source:
        edl = fill_metadata(edl)
    if config.render.optimize:
        edl = optimize_edl(edl)

    result = compile_edl(edl, config.compiler)
    for warning in result.warnings:
        log_warning(warning)
    return edl, result


def render_edl(
    edl: EditDecisionList,
    config: VidpipeConfig | None = None,
) -> CompileResult:
    """Render an EDL to ``edl.output_path`` in one FFmpeg invocation.

    Raises EDLValidationError before touching FFmpeg when the EDL is
    invalid, FFmpegError when the encode fails. Failures are not retried.
    """
    config = config or VidpipeConfig()
    start = time.monotonic()

    edl, result = prepare_render(edl, config)

    Path(edl.output_path).parent.mkdir(parents=True, exist_ok=True)
    log_step("Render", f"{edl.source_video} → {edl.output_path}")
    run_ffmpeg(build_ffmpeg_args(edl, result, config.render))

    log_success(f"Rendered {edl.output_path} in {time.monotonic() - start:.1f}s")
    return result
