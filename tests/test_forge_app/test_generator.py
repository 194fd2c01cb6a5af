"""Tests for FilePlanGenerator (forge_app/generator.py)."""

from __future__ import annotations

import json

import pytest

from forge_app.exceptions import PlanGenerationError
from forge_app.generator import FilePlanGenerator
from forge_engine.models.plan import Exercise


@pytest.fixture
def plan_dir(tmp_path, plan_payload):
    (tmp_path / "plan.json").write_text(json.dumps(plan_payload))
    return tmp_path


class TestFilePlanGenerator:
    """Tests for serving pre-authored payloads."""

    def test_falls_back_to_plan_json(self, plan_dir, male_profile, plan_payload):
        assert FilePlanGenerator(plan_dir).generate(male_profile, 3, ()) == plan_payload

    def test_prefers_week_file(self, plan_dir, male_profile, plan_payload):
        week_two = dict(plan_payload, summary="Week two")
        (plan_dir / "week_2.json").write_text(json.dumps(week_two))
        generator = FilePlanGenerator(plan_dir)
        assert generator.generate(male_profile, 2, ())["summary"] == "Week two"
        assert generator.generate(male_profile, 1, ())["summary"] == plan_payload["summary"]

    def test_missing_plan(self, tmp_path, male_profile):
        with pytest.raises(PlanGenerationError):
            FilePlanGenerator(tmp_path).generate(male_profile, 1, ())

    def test_invalid_json(self, tmp_path, male_profile):
        (tmp_path / "plan.json").write_text("[1, 2")
        with pytest.raises(PlanGenerationError):
            FilePlanGenerator(tmp_path).generate(male_profile, 1, ())

    def test_alternative_from_file(self, plan_dir, male_profile):
        (plan_dir / "alternatives.json").write_text(
            json.dumps({"Back Squat": {"name": "Leg Press", "sets": "3", "reps": "12"}})
        )
        raw = FilePlanGenerator(plan_dir).alternative_exercise(Exercise(name="Back Squat"), male_profile)
        assert raw["name"] == "Leg Press"

    def test_no_alternative_keeps_original(self, plan_dir, male_profile):
        raw = FilePlanGenerator(plan_dir).alternative_exercise(
            Exercise(name="Plank", sets="3", reps="45s"), male_profile
        )
        assert raw["name"] == "Plank"
        assert raw["reps"] == "45s"
