"""Resolve open-ended layouts into closed time spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vidpipe.models.edl import EditDecision


@dataclass(frozen=True)
class Span:
    """A layout with its end time resolved (source clock)."""

    start: float
    end: float
    decision: EditDecision

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def tool(self) -> str:
        return self.decision.tool

    @property
    def params(self) -> dict[str, Any]:
        return self.decision.params


def resolve_layout_spans(layouts: list[EditDecision], source_duration: float) -> list[Span]:
    """Close every layout's interval.

    An open-ended layout runs until the next layout starts, or to the end
    of the source for the last one. ``layouts`` must already be time-sorted.
    """
    spans: list[Span] = []
    for i, layout in enumerate(layouts):
        if layout.end_time is not None:
            end = layout.end_time
        elif i + 1 < len(layouts):
            end = layouts[i + 1].start_time
        else:
            end = source_duration
        spans.append(Span(start=layout.start_time, end=end, decision=layout))
    return spans
