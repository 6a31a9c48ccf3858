"""FFprobe wrapper for source video metadata."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path

from vidpipe.models.edl import EditDecisionList
from vidpipe.utils.progress import log_debug


@dataclass
class VideoInfo:
    """Video file metadata extracted via FFprobe."""

    path: str
    duration: float
    width: int
    height: int
    fps: float | None
    has_audio: bool


def _parse_rate(rate: str | None) -> float | None:
    """'30000/1001' -> 29.97; None for missing or 0/0 rates."""
    if not rate:
        return None
    num, _, den = rate.partition("/")
    try:
        value = float(num) / float(den or 1)
    except (ValueError, ZeroDivisionError):
        return None
    return round(value, 3) if value > 0 else None


def probe_video(path: Path | str) -> VideoInfo:
    """Probe a video file with FFprobe and return metadata."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Video file not found: {path}")

    result = subprocess.run(
        [
            "ffprobe",
            "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(path),
        ],
        capture_output=True,
        text=True,
        check=True,
    )

    data = json.loads(result.stdout)
    streams = data.get("streams", [])

    video_stream = next((s for s in streams if s.get("codec_type") == "video"), None)
    if video_stream is None:
        raise ValueError(f"No video stream found in: {path}")

    fmt = data.get("format", {})

    info = VideoInfo(
        path=str(path),
        duration=float(fmt.get("duration", video_stream.get("duration", 0))),
        width=int(video_stream.get("width", 0)),
        height=int(video_stream.get("height", 0)),
        fps=_parse_rate(video_stream.get("avg_frame_rate") or video_stream.get("r_frame_rate")),
        has_audio=any(s.get("codec_type") == "audio" for s in streams),
    )
    log_debug("Probe", f"{path.name}: {info.width}x{info.height} {info.duration:.3f}s fps={info.fps}")
    return info


def fill_metadata(edl: EditDecisionList) -> EditDecisionList:
    """Fill absent source duration/size from the source video.

    Values already present in the metadata are kept.
    """
    meta = edl.metadata
    if None not in (meta.source_duration, meta.source_width, meta.source_height):
        return edl

    info = probe_video(edl.source_video)
    filled = meta.model_copy(update={
        "source_duration": meta.source_duration or info.duration,
        "source_width": meta.source_width or info.width,
        "source_height": meta.source_height or info.height,
    })
    return edl.model_copy(update={"metadata": filled})
