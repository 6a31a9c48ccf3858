"""Tests for EdlAccumulator."""

import pytest
from pydantic import ValidationError

from tests.helpers import effect, layout, transition
from vidpipe.edl.accumulator import create_accumulator, validate_decisions
from vidpipe.models.edl import EditDecision, WebcamRegion


class TestAdd:
    """Tests for adding decisions."""

    def test_ids_are_unique_and_increasing(self, acc):
        ids = [
            acc.add(layout("only_screen", 0, 10)),
            acc.add(transition("fade", 10)),
            acc.add(effect("text_overlay", 2, 4, text="hi")),
            acc.add(layout("only_webcam", 10, 20)),
        ]
        assert ids == ["layout-1", "transition-2", "effect-3", "layout-4"]

    def test_replaces_incoming_id(self, acc):
        decision = EditDecision(id="mine", type="layout", tool="only_screen", start_time=0)
        assert acc.add(decision) == "layout-1"
        assert acc.get_decisions()[0].id == "layout-1"

    def test_invalid_tool_consumes_no_id(self, acc):
        with pytest.raises(ValidationError):
            acc.add({"type": "layout", "tool": "wobble", "startTime": 0})
        assert acc.add(layout("only_screen", 0, 5)) == "layout-1"
        assert len(acc) == 1

    def test_accepts_snake_case(self, acc):
        acc.add({"type": "effect", "tool": "slow_motion", "start_time": 3, "end_time": 6})
        d = acc.get_decisions()[0]
        assert (d.start_time, d.end_time) == (3, 6)


class TestGetDecisions:
    """Tests for ordering."""

    def test_sorted_by_start(self, acc):
        for start in (20, 0, 15, 5):
            acc.add(effect("slow_motion", start, start + 1))
        starts = [d.start_time for d in acc.get_decisions()]
        assert starts == sorted(starts)

    def test_ties_keep_insertion_order(self, acc):
        acc.add(layout("only_screen", 10, 20))
        acc.add(transition("cut", 10))
        acc.add(effect("text_overlay", 10, 12, text="a"))
        assert [d.type for d in acc.get_decisions()] == ["layout", "transition", "effect"]

    def test_returns_copy(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.get_decisions().clear()
        assert len(acc.get_decisions()) == 1


class TestValidate:
    """Tests for structural validation."""

    def test_overlapping_layouts(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 5, 15))
        result = acc.validate()
        assert not result.valid
        assert len(result.errors) == 1
        assert "overlap" in result.errors[0]

    def test_touching_layouts(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        result = acc.validate()
        assert result.valid
        assert result.errors == []

    def test_open_ended_layout_overlaps_everything_after(self, acc):
        acc.add(layout("only_screen", 0, None))
        acc.add(layout("only_webcam", 30, 40))
        assert not acc.validate().valid

    def test_transition_at_boundary(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.add(transition("fade", 10))
        assert acc.validate().valid

    def test_transition_within_tolerance(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.add(transition("fade", 10.005))
        assert acc.validate().valid

    def test_transition_at_closed_layout_start(self, acc):
        # Start edges count even when the layout also has an end
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.add(transition("fade", 0))
        assert acc.validate().valid

    def test_transition_at_final_layout_end(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.add(transition("fade", 20))
        assert acc.validate().valid

    def test_transition_off_boundary(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.add(transition("fade", 7))
        result = acc.validate()
        assert not result.valid
        assert result.errors == ["Transition transition-3 at 7s is not at a layout boundary"]

    def test_transitions_unchecked_without_layouts(self, acc):
        acc.add(transition("fade", 7))
        assert acc.validate().valid

    def test_collects_all_errors(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 5, 15))
        acc.add(transition("swipe", 3))
        acc.add(transition("cut", 12))
        assert len(acc.validate().errors) == 3

    def test_effects_may_overlap(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(effect("text_overlay", 0, 10, text="a"))
        acc.add(effect("highlight_region", 2, 8, x=0.1, y=0.1, width=0.2, height=0.2))
        assert acc.validate().valid

    def test_validate_decisions_directly(self):
        decisions = [
            EditDecision(id="a", type="layout", tool="only_screen", start_time=0, end_time=10),
            EditDecision(id="b", type="layout", tool="only_screen", start_time=9, end_time=12),
        ]
        result = validate_decisions(decisions)
        assert "a (0-10)" in result.errors[0]


class TestLifecycle:
    """Tests for to_edl and clear."""

    def test_to_edl(self, acc):
        acc.add(layout("only_webcam", 10, 20))
        acc.add(layout("only_screen", 0, 10))
        region = WebcamRegion(x=1440, y=0, width=480, height=270)

        edl = acc.to_edl("in.mp4", "out.mp4", webcam_region=region)

        assert edl.source_video == "in.mp4"
        assert edl.output_path == "out.mp4"
        assert edl.webcam_region == region
        assert [d.start_time for d in edl.decisions] == [0, 10]

    def test_clear_resets_counter(self, acc):
        acc.add(layout("only_screen", 0, 10))
        acc.add(layout("only_webcam", 10, 20))
        acc.clear()
        assert len(acc) == 0
        assert acc.add(layout("only_screen", 0, 5)) == "layout-1"

    def test_instances_are_independent(self):
        first, second = create_accumulator(), create_accumulator()
        first.add(layout("only_screen", 0, 10))
        assert second.add(layout("only_screen", 0, 10)) == "layout-1"
        assert len(second) == 1
