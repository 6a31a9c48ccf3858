"""Decision dict builders (camelCase, as the planning agent sends them)."""

from __future__ import annotations

from typing import Any


def layout(tool: str, start: float, end: float | None, **params: Any) -> dict:
    return {"type": "layout", "tool": tool, "startTime": start, "endTime": end, "params": params}


def transition(tool: str, at: float, **params: Any) -> dict:
    return {"type": "transition", "tool": tool, "startTime": at, "params": params}


def effect(tool: str, start: float, end: float | None, **params: Any) -> dict:
    return {"type": "effect", "tool": tool, "startTime": start, "endTime": end, "params": params}
