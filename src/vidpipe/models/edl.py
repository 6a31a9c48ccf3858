"""EDL (Edit Decision List) models — decisions, per-tool params, webcam region.

Decisions are declarative, timestamped edits produced by the planning agent.
Layouts control which part of the frame is visible, transitions describe how
one layout crosses into the next, and effects are time-gated overlays
independent of layout. All times are seconds on the source clock.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from vidpipe.utils.progress import log_warning

DecisionType = Literal["layout", "transition", "effect"]

LAYOUT_TOOLS = ("only_webcam", "only_screen", "split_layout", "zoom_webcam", "zoom_screen")
TRANSITION_TOOLS = ("cut", "fade", "swipe", "zoom_transition")
EFFECT_TOOLS = ("text_overlay", "highlight_region", "slow_motion", "b_roll", "fade_to_black")

TOOLS_BY_TYPE: dict[str, tuple[str, ...]] = {
    "layout": LAYOUT_TOOLS,
    "transition": TRANSITION_TOOLS,
    "effect": EFFECT_TOOLS,
}

# Max distance (seconds) between a transition and a layout edge
BOUNDARY_TOLERANCE = 0.01

TEXT_POSITIONS = (
    "top-left",
    "top-center",
    "top-right",
    "center",
    "bottom-left",
    "bottom-center",
    "bottom-right",
)


class _CamelModel(BaseModel):
    """Accepts both camelCase (agent JSON) and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Webcam region & metadata
# ---------------------------------------------------------------------------


class WebcamRegion(_CamelModel):
    """Detected webcam overlay within a screen recording (source pixels)."""

    x: int
    y: int
    width: int
    height: int
    position: str | None = None  # top-left | top-right | bottom-left | bottom-right
    confidence: float | None = None
    manual: bool = False

    @field_validator("x", "y", "width", "height", mode="before")
    @classmethod
    def _round_pixels(cls, value: Any) -> Any:
        if isinstance(value, float):
            return round(value)
        return value


class EditMetadata(_CamelModel):
    """Source/output facts the compiler needs beyond the decisions."""

    description: str | None = None
    created_at: datetime | None = None
    created_by: str | None = None
    schema_version: str = "1.0"
    source_duration: float | None = None
    source_width: int | None = None
    source_height: int | None = None
    output_width: int | None = None
    output_height: int | None = None
    output_fps: float | None = None
    target_aspect_ratio: Literal["16:9", "9:16", "1:1", "4:5"] | None = None
    font_path: str | None = None


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


class EditDecision(_CamelModel):
    """A single edit decision. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: DecisionType
    tool: str
    start_time: float = Field(ge=0)
    end_time: float | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_tool(self) -> EditDecision:
        if self.tool not in TOOLS_BY_TYPE[self.type]:
            raise ValueError(
                f"Unknown {self.type} tool '{self.tool}' "
                f"(expected one of: {', '.join(TOOLS_BY_TYPE[self.type])})"
            )
        return self

    @property
    def open_end(self) -> float:
        """End time with open-ended decisions treated as unbounded."""
        return self.end_time if self.end_time is not None else float("inf")

    def describe_range(self) -> str:
        end = "end" if self.end_time is None else f"{self.end_time:g}"
        return f"{self.start_time:g}-{end}"


def is_layout(decision: EditDecision) -> bool:
    return decision.type == "layout"


def is_transition(decision: EditDecision) -> bool:
    return decision.type == "transition"


def is_effect(decision: EditDecision) -> bool:
    return decision.type == "effect"


def sort_by_start(decisions: Iterable[EditDecision]) -> list[EditDecision]:
    """Sort decisions by start time. Ties keep their original order."""
    return sorted(decisions, key=lambda d: d.start_time)


class EditDecisionList(_CamelModel):
    """Complete, finalized edit decision list for one video."""

    model_config = ConfigDict(frozen=True)

    decisions: list[EditDecision] = Field(default_factory=list)
    source_video: str
    output_path: str
    webcam_region: WebcamRegion | None = None
    metadata: EditMetadata = Field(default_factory=EditMetadata)

    @property
    def layouts(self) -> list[EditDecision]:
        return [d for d in sort_by_start(self.decisions) if is_layout(d)]

    @property
    def transitions(self) -> list[EditDecision]:
        return [d for d in sort_by_start(self.decisions) if is_transition(d)]

    @property
    def effects(self) -> list[EditDecision]:
        return [d for d in sort_by_start(self.decisions) if is_effect(d)]


class ValidationResult(BaseModel):
    """Outcome of structural EDL validation."""

    valid: bool
    errors: list[str] = Field(default_factory=list)


class EditPlan(_CamelModel):
    """On-disk planning document: decisions without IDs plus destination info."""

    source_video: str
    output_path: str
    webcam_region: WebcamRegion | None = None
    metadata: EditMetadata = Field(default_factory=EditMetadata)
    decisions: list[dict[str, Any]] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-tool parameter shapes
# ---------------------------------------------------------------------------


class ToolParams(BaseModel):
    """Base for tool params. Unknown keys are kept, numeric fields defaulted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @classmethod
    def parse(cls, params: Mapping[str, Any]) -> Self:
        """Validate leniently: fields that fail validation are dropped and
        fall back to their defaults, so lowering always has something usable.
        """
        try:
            return cls.model_validate(dict(params))
        except ValidationError as exc:
            bad = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
            log_warning(f"Ignoring invalid {cls.__name__} fields: {', '.join(sorted(bad))}")
            kept = {k: v for k, v in params.items() if k not in bad and to_camel(k) not in bad}
            return cls.model_validate(kept)


class OnlyWebcamParams(ToolParams):
    scale: float = Field(default=1.0, gt=0)


class OnlyScreenParams(ToolParams):
    pass


class SplitLayoutParams(ToolParams):
    screen_percent: float = Field(default=65, gt=0, lt=100)
    webcam_position: str = "bottom-right"  # bottom-left | bottom-right | bottom-center


class ZoomWebcamParams(ToolParams):
    scale: float = Field(default=1.5, gt=0)
    center_x: float = Field(default=0.5, ge=0, le=1)
    center_y: float = Field(default=0.5, ge=0, le=1)


class ZoomRegion(BaseModel):
    """Normalized (0-1) rectangle of the source frame."""

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class ZoomScreenParams(ToolParams):
    scale: float = Field(default=1.5, gt=0)
    region: ZoomRegion | None = None


class CutParams(ToolParams):
    pass


class FadeParams(ToolParams):
    duration: float = Field(default=0.5, ge=0)


class SwipeParams(ToolParams):
    direction: Literal["left", "right", "up", "down"] = "left"
    duration: float = Field(default=0.3, ge=0)


class ZoomTransitionParams(ToolParams):
    scale: float = 1.5
    duration: float = Field(default=0.5, ge=0)
    blur: bool = True


class TextOverlayParams(ToolParams):
    text: str = ""
    position: str = "bottom-center"
    font_size: int = Field(default=48, gt=0)
    color: str = "#FFFFFF"
    background_color: str | None = None
    animation: str = "none"  # none | fade-in | slide-up | pop


class HighlightRegionParams(ToolParams):
    """Box around a region; normalized (<= 1) or source-pixel coordinates."""

    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    color: str = "#FF0000"
    border_width: int = Field(default=3, ge=1)
    dim_outside: bool = False
    animation: str = "none"  # none | pulse | draw

    @property
    def has_region(self) -> bool:
        return None not in (self.x, self.y, self.width, self.height)


class SlowMotionParams(ToolParams):
    speed: float = Field(default=0.5, gt=0)
    preserve_pitch: bool = True


class BRollParams(ToolParams):
    image_prompt: str | None = None
    image_path: str | None = None
    display_mode: str = "fullscreen"  # fullscreen | picture-in-picture | split
    pip_position: str = "bottom-right"
    pip_size: int = Field(default=25, gt=0, le=100)


class FadeToBlackParams(ToolParams):
    duration: float = Field(default=1.0, ge=0)


PARAMS_BY_TOOL: dict[str, type[ToolParams]] = {
    "only_webcam": OnlyWebcamParams,
    "only_screen": OnlyScreenParams,
    "split_layout": SplitLayoutParams,
    "zoom_webcam": ZoomWebcamParams,
    "zoom_screen": ZoomScreenParams,
    "cut": CutParams,
    "fade": FadeParams,
    "swipe": SwipeParams,
    "zoom_transition": ZoomTransitionParams,
    "text_overlay": TextOverlayParams,
    "highlight_region": HighlightRegionParams,
    "slow_motion": SlowMotionParams,
    "b_roll": BRollParams,
    "fade_to_black": FadeToBlackParams,
}


def parse_params(tool: str, params: Mapping[str, Any]) -> ToolParams:
    """Narrow a loosely-typed params dict into the model for ``tool``."""
    return PARAMS_BY_TOOL[tool].parse(params)


DEFAULT_LAYOUT_PARAMS: dict[str, dict[str, Any]] = {
    "only_webcam": {"scale": 1.0},
    "only_screen": {},
    "split_layout": {"screenPercent": 65, "webcamPosition": "bottom-right"},
    "zoom_webcam": {"scale": 1.5},
    "zoom_screen": {"scale": 1.5},
}

DEFAULT_TRANSITION_PARAMS: dict[str, dict[str, Any]] = {
    "fade": {"duration": 0.5},
    "swipe": {"direction": "left", "duration": 0.3},
    "zoom_transition": {"scale": 1.5, "duration": 0.5, "blur": True},
    "cut": {},
}

DEFAULT_EFFECT_PARAMS: dict[str, dict[str, Any]] = {
    "text_overlay": {"position": "bottom-center", "fontSize": 48, "color": "#FFFFFF"},
    "highlight_region": {"color": "#FF0000", "borderWidth": 3, "dimOutside": False},
    "slow_motion": {"speed": 0.5, "preservePitch": True},
    "b_roll": {"displayMode": "fullscreen"},
    "fade_to_black": {"duration": 1.0},
}
