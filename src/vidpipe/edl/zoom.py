"""Zoom-segment table and coordinate remapping for effects under zoom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vidpipe.models.edl import WebcamRegion, ZoomScreenParams


@dataclass(frozen=True)
class Rect:
    """Normalized (0-1) rectangle."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class ZoomSegment:
    """One segment's placement in the concatenated output timeline."""

    concat_start: float
    concat_end: float
    tool: str
    params: dict[str, Any]
    webcam_region: WebcamRegion | None
    source_width: int

    def contains(self, t: float) -> bool:
        return self.concat_start <= t < self.concat_end


def webcam_on_right(webcam: WebcamRegion, source_width: int) -> bool:
    return webcam.x > round(source_width / 2)


def zoom_crop_rect(
    tool: str,
    params: dict[str, Any],
    webcam: WebcamRegion | None,
    source_width: int,
) -> Rect | None:
    """Visible part of the source frame (normalized) under a zoom layout.

    Only ``zoom_screen`` maps back to source-frame coordinates; every other
    layout returns None.
    """
    if tool != "zoom_screen":
        return None

    p = ZoomScreenParams.parse(params)

    if p.region is not None:
        return Rect(p.region.x, p.region.y, p.region.width, p.region.height)

    factor = 1 / p.scale
    offset = (1 - factor) / 2

    if webcam is not None:
        # The zoom applies after the webcam columns are cropped away
        if webcam_on_right(webcam, source_width):
            screen_x, screen_w = 0.0, webcam.x / source_width
        else:
            screen_x, screen_w = webcam.width / source_width, 1 - webcam.width / source_width
        if screen_w <= 0:
            return Rect(offset, offset, factor, factor)
        return Rect(
            x=screen_x + screen_w * offset,
            y=offset,
            w=screen_w * factor,
            h=factor,
        )

    return Rect(offset, offset, factor, factor)


def remap_for_zoom(coords: Rect, crop: Rect) -> Rect | None:
    """Map source-frame coords into the output frame of a zoom crop.

    Clamped to the visible [0, 1] area; None when wholly outside the crop.
    """
    if crop.w <= 0 or crop.h <= 0:
        return None
    out_x = (coords.x - crop.x) / crop.w
    out_y = (coords.y - crop.y) / crop.h
    out_w = coords.w / crop.w
    out_h = coords.h / crop.h

    if out_x + out_w <= 0 or out_y + out_h <= 0 or out_x >= 1 or out_y >= 1:
        return None

    x = max(0.0, out_x)
    y = max(0.0, out_y)
    return Rect(
        x=x,
        y=y,
        w=min(out_x + out_w, 1.0) - x,
        h=min(out_y + out_h, 1.0) - y,
    )


def find_segment(table: list[ZoomSegment], t: float) -> ZoomSegment | None:
    """First segment whose output range contains ``t``."""
    return next((seg for seg in table if seg.contains(t)), None)
