"""Transition tools — how one layout hands over to the next."""

from __future__ import annotations

from vidpipe.edl.accumulator import EdlAccumulator


def _transition(acc: EdlAccumulator, tool: str, at: float, params: dict) -> str:
    return acc.add({"type": "transition", "tool": tool, "startTime": at, "params": params})


def fade(acc: EdlAccumulator, at: float, duration: float = 0.5) -> str:
    _transition(acc, "fade", at, {"duration": duration})
    return f"Added fade transition at {at:g}s ({duration:g}s duration)"


def swipe(acc: EdlAccumulator, at: float, direction: str = "left", duration: float = 0.3) -> str:
    _transition(acc, "swipe", at, {"direction": direction, "duration": duration})
    return f"Added swipe transition at {at:g}s (direction: {direction})"


def zoom_transition(acc: EdlAccumulator, at: float, duration: float = 0.5) -> str:
    _transition(acc, "zoom_transition", at, {"duration": duration})
    return f"Added zoom transition at {at:g}s ({duration:g}s duration)"


def cut(acc: EdlAccumulator, at: float) -> str:
    _transition(acc, "cut", at, {})
    return f"Added hard cut at {at:g}s"
