"""EDL optimizer — merges redundant decisions before compilation."""

from __future__ import annotations

import math

from vidpipe.models.edl import (
    BOUNDARY_TOLERANCE,
    EditDecision,
    EditDecisionList,
    is_effect,
    is_layout,
    is_transition,
    sort_by_start,
)
from vidpipe.utils.progress import log_step


def optimize_edl(edl: EditDecisionList) -> EditDecisionList:
    """Shrink an EDL without changing what it renders.

    - Adjacent layouts with the same tool and params are merged
    - Transitions left inside a merged layout, or between two layouts that
      now share a tool, are dropped
    - Touching/overlapping effects with the same tool and params are merged

    Pure: returns a new EDL. Only ``end_time`` changes on surviving
    decisions, and ties on start time keep their input order.
    """
    ordered = sort_by_start(edl.decisions)
    rank = {d.id: i for i, d in enumerate(ordered)}

    layouts = _merge_adjacent_layouts([d for d in ordered if is_layout(d)])
    transitions = [
        t for t in ordered if is_transition(t) and _keeps_transition(t, layouts)
    ]
    effects = _merge_overlapping_effects([d for d in ordered if is_effect(d)])

    optimized = sorted(
        layouts + transitions + effects,
        key=lambda d: (d.start_time, rank[d.id]),
    )

    removed = len(ordered) - len(optimized)
    if removed:
        log_step("Optimize", f"{len(ordered)} → {len(optimized)} decisions ({removed} merged or dropped)")

    return edl.model_copy(update={"decisions": optimized})


def _merge_adjacent_layouts(layouts: list[EditDecision]) -> list[EditDecision]:
    if not layouts:
        return []

    merged: list[EditDecision] = []
    current = layouts[0]

    for nxt in layouts[1:]:
        adjacent = (
            current.end_time is not None
            and abs(current.end_time - nxt.start_time) < BOUNDARY_TOLERANCE
        )
        if adjacent and current.tool == nxt.tool and current.params == nxt.params:
            current = current.model_copy(update={"end_time": nxt.end_time})
        else:
            merged.append(current)
            current = nxt

    merged.append(current)
    return merged


def _keeps_transition(transition: EditDecision, layouts: list[EditDecision]) -> bool:
    t = transition.start_time

    inside = any(
        layout.start_time + BOUNDARY_TOLERANCE < t < layout.open_end - BOUNDARY_TOLERANCE
        for layout in layouts
    )
    if inside:
        return False

    before = next(
        (
            layout for layout in layouts
            if layout.end_time is not None
            and abs(layout.end_time - t) < BOUNDARY_TOLERANCE
        ),
        None,
    )
    after = next(
        (layout for layout in layouts if abs(layout.start_time - t) < BOUNDARY_TOLERANCE),
        None,
    )

    # Can't tell what the edge separates: keep it
    if before is None or after is None:
        return True
    return before.tool != after.tool


def _merge_overlapping_effects(effects: list[EditDecision]) -> list[EditDecision]:
    by_tool: dict[str, list[EditDecision]] = {}
    for effect in effects:
        by_tool.setdefault(effect.tool, []).append(effect)

    merged: list[EditDecision] = []
    for group in by_tool.values():
        group = sort_by_start(group)
        current = group[0]

        for nxt in group[1:]:
            touches = nxt.start_time <= current.open_end + BOUNDARY_TOLERANCE
            if touches and nxt.params == current.params:
                end = max(current.open_end, nxt.open_end)
                current = current.model_copy(
                    update={"end_time": None if math.isinf(end) else end}
                )
            else:
                merged.append(current)
                current = nxt

        merged.append(current)

    return merged
