"""Effect tools — overlays gated to a time window."""

from __future__ import annotations

from vidpipe.edl.accumulator import EdlAccumulator

# Agent-facing position names
TEXT_POSITION_MAP = {
    "top": "top-center",
    "center": "center",
    "bottom": "bottom-center",
}


def _effect(acc: EdlAccumulator, tool: str, start: float, end: float | None, params: dict) -> str:
    return acc.add({
        "type": "effect",
        "tool": tool,
        "startTime": start,
        "endTime": end,
        "params": params,
    })


def text_overlay(
    acc: EdlAccumulator,
    start: float,
    end: float,
    text: str,
    position: str = "bottom",
    animation: str = "none",
) -> str:
    _effect(acc, "text_overlay", start, end, {
        "text": text,
        "position": TEXT_POSITION_MAP.get(position, position),
        "animation": animation,
    })
    return f'Added text overlay "{text}" from {start:g}s to {end:g}s at {position}'


def highlight_region(
    acc: EdlAccumulator,
    start: float,
    end: float,
    x: float,
    y: float,
    width: float,
    height: float,
    color: str = "yellow",
) -> str:
    """Box a region (source pixels or normalized 0-1)."""
    _effect(acc, "highlight_region", start, end, {
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "color": color,
    })
    return (
        f"Added highlight box at ({x:g}, {y:g}) {width:g}x{height:g} "
        f"from {start:g}s to {end:g}s with color {color}"
    )


def slow_motion(acc: EdlAccumulator, start: float, end: float, speed: float = 0.5) -> str:
    # Below half speed the pitch shift artifacts outweigh the benefit
    _effect(acc, "slow_motion", start, end, {"speed": speed, "preservePitch": speed >= 0.5})
    if speed < 1:
        return f"Added {speed:g}x slow motion from {start:g}s to {end:g}s"
    return f"Added {speed:g}x speed from {start:g}s to {end:g}s"


def b_roll(
    acc: EdlAccumulator,
    start: float,
    end: float,
    image_path: str,
    display_mode: str = "fullscreen",
    pip_position: str = "bottom-right",
    pip_size: int = 25,
) -> str:
    params: dict = {"imagePath": image_path, "displayMode": display_mode}
    if display_mode == "picture-in-picture":
        params.update({"pipPosition": pip_position, "pipSize": pip_size})
    _effect(acc, "b_roll", start, end, params)
    return f"Added {display_mode} b-roll {image_path} from {start:g}s to {end:g}s"


def fade_to_black(acc: EdlAccumulator, start: float, duration: float = 1.0) -> str:
    _effect(acc, "fade_to_black", start, start + duration, {"duration": duration})
    return f"Added fade to black at {start:g}s ({duration:g}s)"
