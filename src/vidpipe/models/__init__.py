"""Pydantic data models for vidpipe."""

from vidpipe.models.config import (
    CompilerConfig,
    RenderConfig,
    VidpipeConfig,
)
from vidpipe.models.edl import (
    EditDecision,
    EditDecisionList,
    EditMetadata,
    EditPlan,
    ValidationResult,
    WebcamRegion,
)

__all__ = [
    "CompilerConfig",
    "RenderConfig",
    "VidpipeConfig",
    "EditDecision",
    "EditDecisionList",
    "EditMetadata",
    "EditPlan",
    "ValidationResult",
    "WebcamRegion",
]
