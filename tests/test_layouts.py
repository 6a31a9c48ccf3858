"""Tests for layout and transition lowering."""

import pytest

from tests.helpers import transition
from vidpipe.edl.labels import LabelAllocator
from vidpipe.edl.layouts import LayoutContext, compile_layout
from vidpipe.edl.transitions import compile_transition, xfade_settings
from vidpipe.models.edl import EditDecision

FILL = "scale=1920:1080:force_original_aspect_ratio=increase,crop=1920:1080"


def _lower(tool, params=None, *, webcam=None, out=(1920, 1080), aspect=None, labels=None):
    ctx = LayoutContext(
        out_w=out[0],
        out_h=out[1],
        webcam=webcam,
        source_width=1920,
        target_aspect_ratio=aspect,
    )
    return compile_layout(tool, params or {}, ctx, "trim0", "v0", labels or LabelAllocator())


class TestOnlyScreen:
    """Tests for only_screen."""

    def test_without_webcam(self):
        assert _lower("only_screen") == f"[trim0]{FILL}[v0]"

    def test_webcam_on_right_keeps_left_columns(self, webcam_right):
        assert _lower("only_screen", webcam=webcam_right) == f"[trim0]crop=1440:ih:0:0,{FILL}[v0]"

    def test_webcam_on_left_keeps_right_columns(self, webcam_left):
        assert _lower("only_screen", webcam=webcam_left) == f"[trim0]crop=iw-480:ih:480:0,{FILL}[v0]"


class TestOnlyWebcam:
    """Tests for only_webcam."""

    def test_crops_webcam(self, webcam_right):
        assert _lower("only_webcam", webcam=webcam_right) == f"[trim0]crop=480:270:1440:0,{FILL}[v0]"

    def test_scale_tightens_crop(self, webcam_right):
        out = _lower("only_webcam", {"scale": 2}, webcam=webcam_right)
        assert "crop=240:135:1560:68," in out

    def test_fallback_without_region(self):
        assert _lower("only_webcam") == f"[trim0]crop=iw/4:ih/4:3*iw/4:0,{FILL}[v0]"


class TestSplitLayout:
    """Tests for split_layout."""

    def test_landscape_letterboxes(self, webcam_right):
        out = _lower("split_layout", webcam=webcam_right)
        assert out == (
            "[trim0]scale=1920:1080:force_original_aspect_ratio=decrease,"
            "pad=1920:1080:(ow-iw)/2:(oh-ih)/2:black[v0]"
        )

    def test_portrait_stacks_screen_over_webcam(self, webcam_right):
        out = _lower("split_layout", webcam=webcam_right, out=(1080, 1920), aspect="9:16")
        assert out.startswith("[trim0]split[scr0][cam0];")
        assert "[scr0]crop=1440:ih:0:0,scale=1080:1248:force_original_aspect_ratio=increase,crop=1080:1248[screen0]" in out
        assert "[cam0]crop=480:270:1440:0,scale=1080:672:force_original_aspect_ratio=increase,crop=1080:672[webcam0]" in out
        assert out.endswith("[screen0][webcam0]vstack[v0]")

    def test_screen_percent(self, webcam_right):
        out = _lower("split_layout", {"screenPercent": 50}, webcam=webcam_right, out=(1080, 1920), aspect="9:16")
        assert "crop=1080:960[screen0]" in out
        assert "crop=1080:960[webcam0]" in out

    def test_fallback_without_region(self):
        out = _lower("split_layout", out=(1080, 1080), aspect="1:1")
        assert "[scr0]crop=iw:ih*0.7:0:0," in out
        assert "[cam0]crop=iw/3:ih*0.3:2*iw/3:ih*0.7," in out

    def test_labels_unique_across_segments(self, webcam_right):
        labels = LabelAllocator()
        first = _lower("split_layout", webcam=webcam_right, out=(1080, 1920), aspect="9:16", labels=labels)
        second = _lower("split_layout", webcam=webcam_right, out=(1080, 1920), aspect="9:16", labels=labels)
        assert "[scr0]" in first
        assert "[scr1]" in second and "[scr0]" not in second


class TestZoom:
    """Tests for zoom_webcam and zoom_screen."""

    def test_zoom_webcam(self, webcam_right):
        out = _lower("zoom_webcam", {"scale": 1.5}, webcam=webcam_right)
        assert out == "[trim0]crop=320:180:1520:45,scale=1920:1080[v0]"

    def test_zoom_webcam_center(self, webcam_right):
        out = _lower("zoom_webcam", {"scale": 1.5, "centerX": 0, "centerY": 1}, webcam=webcam_right)
        assert "crop=320:180:1440:90," in out

    def test_zoom_webcam_fallback(self):
        assert _lower("zoom_webcam") == "[trim0]crop=iw/4:ih/4:3*iw/4:0,scale=1920:1080[v0]"

    def test_zoom_screen_center(self):
        out = _lower("zoom_screen", {"scale": 2})
        assert out == f"[trim0]crop=iw*0.500:ih*0.500:iw*0.250:ih*0.250,{FILL}[v0]"

    def test_zoom_screen_region(self, webcam_right):
        region = {"x": 0.5, "y": 0, "width": 0.5, "height": 1}
        out = _lower("zoom_screen", {"region": region}, webcam=webcam_right)
        assert out == f"[trim0]crop=iw*0.500:ih*1.000:iw*0.500:ih*0.000,{FILL}[v0]"

    def test_zoom_screen_excludes_webcam_first(self, webcam_right):
        out = _lower("zoom_screen", {"scale": 2}, webcam=webcam_right)
        assert out.startswith("[trim0]crop=1440:ih:0:0,crop=iw*0.500:")

    def test_unknown_tool(self):
        with pytest.raises(ValueError, match="Unknown layout tool"):
            _lower("picture_frame")


def _transition(tool, **params):
    return EditDecision(id="transition-1", **transition(tool, 10, **params))


class TestTransitions:
    """Tests for xfade lowering."""

    def test_fade(self):
        out = compile_transition(_transition("fade", duration=2), "v0", "v1", "vmerged", 8)
        assert out == "[v0][v1]xfade=transition=fade:duration=2.000:offset=8.000[vmerged]"

    @pytest.mark.parametrize(
        "direction,name",
        [("left", "slideleft"), ("right", "slideright"), ("up", "slideup"), ("down", "slidedown")],
    )
    def test_swipe_directions(self, direction, name):
        assert xfade_settings(_transition("swipe", direction=direction)) == (name, 0.3)

    def test_zoom_transition_is_radial(self):
        assert xfade_settings(_transition("zoom_transition")) == ("radial", 0.5)

    def test_default_durations(self):
        assert xfade_settings(_transition("fade"))[1] == 0.5
        assert xfade_settings(_transition("swipe"))[1] == 0.3

    def test_cut_is_not_blended(self):
        assert xfade_settings(_transition("cut")) is None
        assert compile_transition(_transition("cut"), "v0", "v1", "out", 0) is None
