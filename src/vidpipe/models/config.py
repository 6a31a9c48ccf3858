"""Configuration models for the EDL compiler and renderer."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from vidpipe.utils.io import read_yaml


class CompilerConfig(BaseModel):
    """Configuration for filter-graph lowering and encode settings."""

    frame_rate: float = Field(default=30, gt=0)
    default_output_width: int = Field(default=1920, gt=0)
    default_output_height: int = Field(default=1080, gt=0)
    default_source_width: int = Field(default=1920, gt=0)
    default_source_height: int = Field(default=1080, gt=0)
    fallback_source_duration: float = Field(default=3600.0, gt=0)
    video_codec: str = "libx264"
    pixel_format: str = "yuv420p"  # broad player compatibility
    preset: str = "ultrafast"
    crf: int = Field(default=23, ge=0, le=51)
    audio_codec: str = "aac"
    audio_bitrate: str = "128k"


class RenderConfig(BaseModel):
    """Configuration for single-pass rendering."""

    threads: int = Field(default=4, ge=0)  # 0 lets FFmpeg decide
    optimize: bool = True
    probe_source: bool = True


class VidpipeConfig(BaseModel):
    """Top-level configuration file (vidpipe.yaml)."""

    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def load_config(path: Path | str | None = None) -> VidpipeConfig:
    """Load configuration from YAML. Missing file or no path gives defaults."""
    if path is None:
        return VidpipeConfig()
    path = Path(path)
    if not path.exists():
        return VidpipeConfig()
    return VidpipeConfig(**read_yaml(path))
