"""Edit plans — YAML/JSON documents replayed into an accumulator."""

from __future__ import annotations

from pathlib import Path

from vidpipe.edl.accumulator import EdlAccumulator, create_accumulator
from vidpipe.models.edl import EditDecisionList, EditPlan, ValidationResult
from vidpipe.utils.io import read_document
from vidpipe.utils.progress import log_step


def load_plan(path: Path | str) -> EditPlan:
    """Read an edit plan (YAML or JSON by suffix).

    Raises FileNotFoundError for a missing file and pydantic.ValidationError
    for a malformed document.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Edit plan not found: {path}")
    plan = EditPlan.model_validate(read_document(path))
    log_step("Plan", f"Loaded {len(plan.decisions)} decisions from {path.name}")
    return plan


def replay_plan(plan: EditPlan) -> EdlAccumulator:
    """Add every planned decision, in document order, to a fresh accumulator."""
    acc = create_accumulator()
    for decision in plan.decisions:
        acc.add(decision)
    return acc


def plan_to_edl(plan: EditPlan) -> tuple[EditDecisionList, ValidationResult]:
    """Replay a plan and snapshot it, with the validation outcome."""
    acc = replay_plan(plan)
    edl = acc.to_edl(
        plan.source_video,
        plan.output_path,
        webcam_region=plan.webcam_region,
        metadata=plan.metadata,
    )
    return edl, acc.validate()
