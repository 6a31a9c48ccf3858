"""Transition lowering — xfade blends between two segments."""

from __future__ import annotations

from vidpipe.edl.escape import fmt_time
from vidpipe.edl.labels import ref
from vidpipe.models.edl import (
    EditDecision,
    FadeParams,
    SwipeParams,
    ZoomTransitionParams,
)

SWIPE_XFADE = {
    "left": "slideleft",
    "right": "slideright",
    "up": "slideup",
    "down": "slidedown",
}


def xfade_settings(transition: EditDecision) -> tuple[str, float] | None:
    """xfade transition name and duration, or None for a hard cut."""
    if transition.tool == "fade":
        return "fade", FadeParams.parse(transition.params).duration
    if transition.tool == "swipe":
        p = SwipeParams.parse(transition.params)
        return SWIPE_XFADE[p.direction], p.duration
    if transition.tool == "zoom_transition":
        # A radial wipe stands in for zoom blur (scale/blur are not rendered)
        return "radial", ZoomTransitionParams.parse(transition.params).duration
    return None


def compile_transition(
    transition: EditDecision,
    prev_label: str,
    next_label: str,
    out_label: str,
    offset: float,
) -> str | None:
    """Blend ``prev_label`` into ``next_label`` starting at ``offset`` (output time)."""
    settings = xfade_settings(transition)
    if settings is None:
        return None
    name, duration = settings
    return (
        f"{ref(prev_label)}{ref(next_label)}xfade=transition={name}"
        f":duration={fmt_time(duration)}:offset={fmt_time(offset)}{ref(out_label)}"
    )
