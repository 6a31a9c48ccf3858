"""Layout lowering — one trimmed segment into an output-sized frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vidpipe.edl.labels import LabelAllocator, ref
from vidpipe.edl.zoom import webcam_on_right
from vidpipe.models.edl import (
    OnlyWebcamParams,
    SplitLayoutParams,
    WebcamRegion,
    ZoomScreenParams,
    ZoomWebcamParams,
)


@dataclass(frozen=True)
class LayoutContext:
    """Frame facts shared by every segment of one compilation."""

    out_w: int
    out_h: int
    webcam: WebcamRegion | None
    source_width: int
    target_aspect_ratio: str | None = None


def _fill(w: int, h: int) -> str:
    """Scale to cover w×h, then center-crop the overflow (no distortion)."""
    return f"scale={w}:{h}:force_original_aspect_ratio=increase,crop={w}:{h}"


def _screen_crop(webcam: WebcamRegion, source_width: int) -> str:
    """Crop that keeps every column except the webcam's."""
    if webcam_on_right(webcam, source_width):
        return f"crop={webcam.x}:ih:0:0"
    return f"crop=iw-{webcam.width}:ih:{webcam.width}:0"


def compile_layout(
    tool: str,
    params: dict[str, Any],
    ctx: LayoutContext,
    in_label: str,
    out_label: str,
    labels: LabelAllocator,
) -> str:
    """Lower one layout to a filter chain from ``in_label`` to ``out_label``."""
    src, dst = ref(in_label), ref(out_label)
    w, h = ctx.out_w, ctx.out_h
    webcam = ctx.webcam

    if tool == "only_webcam":
        if webcam is None:
            # Assume a top-right quarter webcam
            return f"{src}crop=iw/4:ih/4:3*iw/4:0,{_fill(w, h)}{dst}"
        p = OnlyWebcamParams.parse(params)
        crop_w = round(webcam.width / p.scale)
        crop_h = round(webcam.height / p.scale)
        crop_x = webcam.x + round((webcam.width - crop_w) / 2)
        crop_y = webcam.y + round((webcam.height - crop_h) / 2)
        return f"{src}crop={crop_w}:{crop_h}:{crop_x}:{crop_y},{_fill(w, h)}{dst}"

    if tool == "only_screen":
        if webcam is None:
            return f"{src}{_fill(w, h)}{dst}"
        return f"{src}{_screen_crop(webcam, ctx.source_width)},{_fill(w, h)}{dst}"

    if tool == "split_layout":
        return _compile_split(params, ctx, src, dst, labels)

    if tool == "zoom_webcam":
        if webcam is None:
            return f"{src}crop=iw/4:ih/4:3*iw/4:0,scale={w}:{h}{dst}"
        p = ZoomWebcamParams.parse(params)
        zoom_w = round(webcam.width / p.scale)
        zoom_h = round(webcam.height / p.scale)
        zoom_x = webcam.x + round((webcam.width - zoom_w) * p.center_x)
        zoom_y = webcam.y + round((webcam.height - zoom_h) * p.center_y)
        return f"{src}crop={zoom_w}:{zoom_h}:{zoom_x}:{zoom_y},scale={w}:{h}{dst}"

    if tool == "zoom_screen":
        return _compile_zoom_screen(params, ctx, src, dst)

    raise ValueError(f"Unknown layout tool: {tool}")


def _compile_split(
    params: dict[str, Any],
    ctx: LayoutContext,
    src: str,
    dst: str,
    labels: LabelAllocator,
) -> str:
    w, h = ctx.out_w, ctx.out_h

    # Landscape target: show the whole frame, letterboxed
    if ctx.target_aspect_ratio in (None, "16:9"):
        return (
            f"{src}scale={w}:{h}:force_original_aspect_ratio=decrease,"
            f"pad={w}:{h}:(ow-iw)/2:(oh-ih)/2:black{dst}"
        )

    p = SplitLayoutParams.parse(params)
    screen_h = round(h * p.screen_percent / 100)
    cam_h = h - screen_h

    scr, cam = ref(labels.new("scr")), ref(labels.new("cam"))
    screen, webcam_out = ref(labels.new("screen")), ref(labels.new("webcam"))

    webcam = ctx.webcam
    if webcam is None:
        screen_crop = "crop=iw:ih*0.7:0:0"
        cam_crop = "crop=iw/3:ih*0.3:2*iw/3:ih*0.7"
    else:
        screen_crop = _screen_crop(webcam, ctx.source_width)
        cam_crop = f"crop={webcam.width}:{webcam.height}:{webcam.x}:{webcam.y}"

    return (
        f"{src}split{scr}{cam};"
        f"{scr}{screen_crop},{_fill(w, screen_h)}{screen};"
        f"{cam}{cam_crop},{_fill(w, cam_h)}{webcam_out};"
        f"{screen}{webcam_out}vstack{dst}"
    )


def _compile_zoom_screen(
    params: dict[str, Any],
    ctx: LayoutContext,
    src: str,
    dst: str,
) -> str:
    w, h = ctx.out_w, ctx.out_h
    p = ZoomScreenParams.parse(params)

    if p.region is not None:
        r = p.region
        return (
            f"{src}crop=iw*{r.width:.3f}:ih*{r.height:.3f}:iw*{r.x:.3f}:ih*{r.y:.3f},"
            f"{_fill(w, h)}{dst}"
        )

    factor = 1 / p.scale
    offset = (1 - factor) / 2
    center_crop = f"crop=iw*{factor:.3f}:ih*{factor:.3f}:iw*{offset:.3f}:ih*{offset:.3f}"

    if ctx.webcam is not None:
        # Drop the webcam columns first, then zoom into the screen area
        return (
            f"{src}{_screen_crop(ctx.webcam, ctx.source_width)},"
            f"{center_crop},{_fill(w, h)}{dst}"
        )

    return f"{src}{center_crop},{_fill(w, h)}{dst}"
