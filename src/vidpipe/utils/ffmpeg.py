"""FFmpeg command runner."""

from __future__ import annotations

import shlex
import subprocess

from vidpipe.utils.progress import log_debug

FFMPEG_PREFIX = ["ffmpeg", "-y", "-hide_banner", "-loglevel", "error"]


class FFmpegError(Exception):
    """Raised when an FFmpeg command fails."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"FFmpeg failed (rc={returncode}): {stderr[:500]}")


def format_command(cmd: list[str]) -> str:
    """Shell-quoted command line, for logs and dry runs."""
    return " ".join(shlex.quote(part) for part in cmd)


def run_ffmpeg(args: list[str], *, check: bool = True) -> subprocess.CompletedProcess:
    """Run an FFmpeg command with standard options."""
    cmd = FFMPEG_PREFIX + args
    log_debug("FFmpeg", format_command(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True)
    if check and result.returncode != 0:
        raise FFmpegError(cmd, result.returncode, result.stderr)
    return result
