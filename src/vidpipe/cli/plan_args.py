"""Shared plan loading for CLI commands."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from vidpipe.edl.plan import load_plan, plan_to_edl
from vidpipe.models.edl import EditDecisionList, ValidationResult
from vidpipe.utils.progress import log_error


def load_plan_or_exit(plan_path: str) -> tuple[EditDecisionList, ValidationResult]:
    """Load and replay a plan; exit 1 with a logged error when unreadable."""
    try:
        plan = load_plan(Path(plan_path).resolve())
        return plan_to_edl(plan)
    except FileNotFoundError as e:
        log_error(str(e))
        raise SystemExit(1)
    except ValidationError as e:
        log_error(f"Malformed edit plan {plan_path}:\n{e}")
        raise SystemExit(1)


def report_errors(result: ValidationResult) -> None:
    for error in result.errors:
        log_error(error)
