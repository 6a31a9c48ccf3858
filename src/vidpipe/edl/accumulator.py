"""EDL accumulator — collects edit decisions during agent execution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from vidpipe.models.edl import (
    BOUNDARY_TOLERANCE,
    EditDecision,
    EditDecisionList,
    EditMetadata,
    ValidationResult,
    WebcamRegion,
    is_layout,
    is_transition,
    sort_by_start,
)
from vidpipe.utils.progress import log_step


class EdlAccumulator:
    """Builds an EDL incrementally: assigns IDs, sorts, validates.

    Each agent session owns its own instance; nothing here is shared.

    Example::

        acc = EdlAccumulator()
        acc.add({"type": "layout", "tool": "split_layout", "startTime": 0, "endTime": 30})
        acc.add({"type": "layout", "tool": "zoom_webcam", "startTime": 30, "endTime": 45,
                 "params": {"scale": 1.5}})
        if acc.validate().valid:
            edl = acc.to_edl("in.mp4", "out.mp4")
    """

    def __init__(self) -> None:
        self._decisions: list[EditDecision] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._decisions)

    def add(self, decision: Mapping[str, Any] | EditDecision) -> str:
        """Add a decision (any ``id`` it carries is replaced). Returns the new ID.

        Raises pydantic.ValidationError for an unknown type/tool; no ID is
        consumed in that case.
        """
        if isinstance(decision, EditDecision):
            data = decision.model_dump()
        else:
            data = dict(decision)
        data.pop("id", None)

        decision_id = f"{data.get('type')}-{self._next_id}"
        added = EditDecision.model_validate({**data, "id": decision_id})
        self._decisions.append(added)
        self._next_id += 1
        return decision_id

    def get_decisions(self) -> list[EditDecision]:
        """All decisions sorted by start time (a copy)."""
        return sort_by_start(self._decisions)

    def to_edl(
        self,
        source_video: str,
        output_path: str,
        webcam_region: WebcamRegion | None = None,
        metadata: EditMetadata | None = None,
    ) -> EditDecisionList:
        """Snapshot the accumulated decisions into a finalized EDL."""
        edl = EditDecisionList(
            decisions=self.get_decisions(),
            source_video=source_video,
            output_path=output_path,
            webcam_region=webcam_region,
            metadata=metadata or EditMetadata(),
        )
        log_step("EDL", f"Finalized {len(edl.decisions)} decisions → {output_path}")
        return edl

    def clear(self) -> None:
        """Drop all decisions and restart ID numbering."""
        self._decisions = []
        self._next_id = 1

    def validate(self) -> ValidationResult:
        """Check structural consistency of the accumulated decisions."""
        return validate_decisions(self._decisions)


def validate_decisions(decisions: Iterable[EditDecision]) -> ValidationResult:
    """Check structural consistency of a set of decisions.

    - Layouts must not overlap (open-ended layouts extend to infinity)
    - Transitions must sit on a layout edge (when any layout exists)
    - Effects may overlap anything

    All problems are collected; nothing is raised.
    """
    errors: list[str] = []
    ordered = sort_by_start(decisions)
    layouts = [d for d in ordered if is_layout(d)]
    transitions = [d for d in ordered if is_transition(d)]

    for i, current in enumerate(layouts):
        for other in layouts[i + 1:]:
            if _overlaps(current, other):
                errors.append(
                    f"Layout decisions overlap: {current.id} ({current.describe_range()}) "
                    f"and {other.id} ({other.describe_range()})"
                )

    if layouts:
        for transition in transitions:
            if not any(_at_edge(layout, transition.start_time) for layout in layouts):
                errors.append(
                    f"Transition {transition.id} at {transition.start_time:g}s "
                    "is not at a layout boundary"
                )

    return ValidationResult(valid=not errors, errors=errors)


def _overlaps(a: EditDecision, b: EditDecision) -> bool:
    return a.start_time < b.open_end and b.start_time < a.open_end


def _at_edge(layout: EditDecision, time: float) -> bool:
    edges = [layout.start_time]
    if layout.end_time is not None:
        edges.append(layout.end_time)
    return any(abs(edge - time) < BOUNDARY_TOLERANCE for edge in edges)


def create_accumulator() -> EdlAccumulator:
    """Create a fresh accumulator for an agent session."""
    return EdlAccumulator()
