"""Tests for edit plan loading and configuration."""

import json

import pytest
from pydantic import ValidationError

from vidpipe.edl.plan import load_plan, plan_to_edl, replay_plan
from vidpipe.models.config import CompilerConfig, load_config
from vidpipe.utils.io import read_document, write_json


class TestLoadPlan:
    """Tests for load_plan."""

    def test_yaml(self, valid_plan):
        plan = load_plan(valid_plan)
        assert plan.source_video == "input.mp4"
        assert plan.metadata.source_duration == 30
        assert len(plan.decisions) == 5

    def test_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({
            "sourceVideo": "in.mp4",
            "outputPath": "out.mp4",
            "webcamRegion": {"x": 1440, "y": 0, "width": 480, "height": 270},
            "decisions": [{"type": "layout", "tool": "only_webcam", "startTime": 0, "endTime": 5}],
        }))
        plan = load_plan(path)
        assert plan.webcam_region.x == 1440
        assert plan.decisions[0]["tool"] == "only_webcam"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_plan(tmp_path / "nope.yaml")

    def test_malformed(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text("decisions: []\n")
        with pytest.raises(ValidationError):
            load_plan(path)


class TestReplay:
    """Tests for replaying plans through an accumulator."""

    def test_replay_assigns_ids(self, valid_plan):
        acc = replay_plan(load_plan(valid_plan))
        assert len(acc) == 5
        assert acc.get_decisions()[0].id == "layout-1"

    def test_plan_to_edl(self, valid_plan):
        edl, result = plan_to_edl(load_plan(valid_plan))
        assert result.valid
        assert edl.output_path == "out/final.mp4"
        assert len(edl.layouts) == 3
        assert edl.metadata.source_duration == 30

    def test_invalid_plan(self, invalid_plan):
        _, result = plan_to_edl(load_plan(invalid_plan))
        assert not result.valid


class TestConfig:
    """Tests for load_config."""

    def test_defaults_without_path(self):
        config = load_config(None)
        assert config.compiler == CompilerConfig()
        assert config.render.threads == 4
        assert config.render.optimize is True

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "vidpipe.yaml").compiler.crf == 23

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "vidpipe.yaml"
        path.write_text("compiler:\n  crf: 18\n  preset: medium\nrender:\n  threads: 0\n")
        config = load_config(path)
        assert config.compiler.crf == 18
        assert config.compiler.preset == "medium"
        assert config.compiler.video_codec == "libx264"
        assert config.render.threads == 0

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "vidpipe.yaml"
        path.write_text("compiler:\n  crf: 99\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestIo:
    """Tests for document I/O."""

    def test_write_json_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "result.json"
        write_json(path, {"passes": 1})
        assert read_document(path) == {"passes": 1}
        assert not list(path.parent.glob("tmp*"))
