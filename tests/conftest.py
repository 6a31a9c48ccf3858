"""Shared pytest fixtures for vidpipe tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from vidpipe.edl.accumulator import EdlAccumulator
from vidpipe.models.edl import EditDecisionList, EditMetadata, WebcamRegion
from vidpipe.utils.progress import set_verbose

# ============================================================================
# Global state
# ============================================================================


@pytest.fixture(autouse=True)
def quiet_logging():
    """Each test starts (and ends) with debug output off."""
    set_verbose(False)
    yield
    set_verbose(False)


# ============================================================================
# Decision Fixtures
# ============================================================================


@pytest.fixture
def acc() -> EdlAccumulator:
    """Fresh accumulator."""
    return EdlAccumulator()


@pytest.fixture
def webcam_right() -> WebcamRegion:
    """480x270 webcam in the top-right corner of a 1920x1080 recording."""
    return WebcamRegion(x=1440, y=0, width=480, height=270, position="top-right")


@pytest.fixture
def webcam_left() -> WebcamRegion:
    """480x270 webcam in the bottom-left corner of a 1920x1080 recording."""
    return WebcamRegion(x=0, y=810, width=480, height=270, position="bottom-left")


@pytest.fixture
def make_edl() -> Callable[..., EditDecisionList]:
    """Build an EDL by replaying decision dicts through an accumulator."""

    def _make(
        decisions: list[dict],
        *,
        webcam: WebcamRegion | None = None,
        **metadata: Any,
    ) -> EditDecisionList:
        builder = EdlAccumulator()
        for decision in decisions:
            builder.add(decision)
        return builder.to_edl(
            "input.mp4",
            "out/final.mp4",
            webcam_region=webcam,
            metadata=EditMetadata(**metadata),
        )

    return _make


# ============================================================================
# Plan Fixtures
# ============================================================================

VALID_PLAN_YAML = """\
sourceVideo: input.mp4
outputPath: out/final.mp4
metadata:
  sourceDuration: 30
decisions:
  - {type: layout, tool: only_screen, startTime: 0, endTime: 10}
  - {type: layout, tool: only_webcam, startTime: 10, endTime: 20}
  - {type: layout, tool: only_screen, startTime: 20, endTime: 30}
  - {type: transition, tool: fade, startTime: 10, params: {duration: 1}}
  - {type: effect, tool: text_overlay, startTime: 2, endTime: 6, params: {text: Welcome}}
"""

INVALID_PLAN_YAML = """\
sourceVideo: input.mp4
outputPath: out/final.mp4
decisions:
  - {type: layout, tool: only_screen, startTime: 0, endTime: 10}
  - {type: layout, tool: only_webcam, startTime: 5, endTime: 15}
"""


@pytest.fixture
def valid_plan(tmp_path: Path) -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(VALID_PLAN_YAML)
    return path


@pytest.fixture
def invalid_plan(tmp_path: Path) -> Path:
    path = tmp_path / "bad_plan.yaml"
    path.write_text(INVALID_PLAN_YAML)
    return path
