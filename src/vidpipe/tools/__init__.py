"""Semantic editing tools exposed to the planning agent.

Each tool appends one decision to an accumulator and returns a short
confirmation for the agent transcript.
"""

from vidpipe.tools.effect_tools import (
    b_roll,
    fade_to_black,
    highlight_region,
    slow_motion,
    text_overlay,
)
from vidpipe.tools.layout_tools import (
    only_screen,
    only_webcam,
    split_layout,
    zoom_screen,
    zoom_webcam,
)
from vidpipe.tools.transition_tools import cut, fade, swipe, zoom_transition

TOOLS = {
    "only_webcam": only_webcam,
    "only_screen": only_screen,
    "split_layout": split_layout,
    "zoom_webcam": zoom_webcam,
    "zoom_screen": zoom_screen,
    "cut": cut,
    "fade": fade,
    "swipe": swipe,
    "zoom_transition": zoom_transition,
    "text_overlay": text_overlay,
    "highlight_region": highlight_region,
    "slow_motion": slow_motion,
    "b_roll": b_roll,
    "fade_to_black": fade_to_black,
}

__all__ = ["TOOLS", *TOOLS]
