"""Layout tools — which part of the frame is visible over a time range."""

from __future__ import annotations

from vidpipe.edl.accumulator import EdlAccumulator
from vidpipe.models.edl import ZoomRegion


def _layout(acc: EdlAccumulator, tool: str, start: float, end: float, params: dict) -> str:
    return acc.add({
        "type": "layout",
        "tool": tool,
        "startTime": start,
        "endTime": end,
        "params": params,
    })


def only_webcam(acc: EdlAccumulator, start: float, end: float) -> str:
    _layout(acc, "only_webcam", start, end, {})
    return f"Added only_webcam layout from {start:g}s to {end:g}s"


def only_screen(acc: EdlAccumulator, start: float, end: float) -> str:
    _layout(acc, "only_screen", start, end, {})
    return f"Added only_screen layout from {start:g}s to {end:g}s"


def split_layout(
    acc: EdlAccumulator,
    start: float,
    end: float,
    screen_percent: float = 65,
    webcam_position: str = "bottom-right",
) -> str:
    """Screen on top, webcam below (vertical targets) or letterboxed frame (16:9)."""
    _layout(acc, "split_layout", start, end, {
        "screenPercent": screen_percent,
        "webcamPosition": webcam_position,
    })
    return (
        f"Added split_layout from {start:g}s to {end:g}s "
        f"(screen {screen_percent:g}%, webcam {100 - screen_percent:g}%)"
    )


def zoom_webcam(acc: EdlAccumulator, start: float, end: float, scale: float = 1.2) -> str:
    _layout(acc, "zoom_webcam", start, end, {"scale": scale})
    return f"Added zoom_webcam layout from {start:g}s to {end:g}s (scale: {scale:g}x)"


def zoom_screen(
    acc: EdlAccumulator,
    start: float,
    end: float,
    region: ZoomRegion | dict | None = None,
    scale: float = 1.5,
) -> str:
    """Zoom into the screen area, optionally onto a normalized region."""
    params: dict = {"scale": scale}
    message = f"Added zoom_screen layout from {start:g}s to {end:g}s"
    if region is not None:
        r = region if isinstance(region, ZoomRegion) else ZoomRegion.model_validate(region)
        params["region"] = r.model_dump()
        message += f" on region ({r.x:g}, {r.y:g}, {r.width:g}x{r.height:g})"
    _layout(acc, "zoom_screen", start, end, params)
    return message
