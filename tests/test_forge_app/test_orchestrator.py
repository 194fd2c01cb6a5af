"""Tests for PlanOrchestrator (forge_app/orchestrator.py)."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime

import pytest

from forge_app.exceptions import NoPlanError, PlanGenerationError, WeekNotCompleteError
from forge_app.orchestrator import PlanOrchestrator
from forge_engine.models.enums import ExerciseSection, ProgressStatus
from forge_engine.models.forge_data import ForgeData
from forge_engine.models.progress import ProgressEntry


def _complete_whole_week(orchestrator, data):
    """Mark all seven slots of the aligned view, starting from today."""
    for slot in range(7):
        data = orchestrator.mark_workout_complete(data, slot)
    return data


# =========================================================================
# TestStartPlan
# =========================================================================


class TestStartPlan:
    """Tests for generating a brand-new plan."""

    def test_week_starts_today(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        assert data.current_week_start_date == "2024-01-03"
        assert data.week_number == 1
        assert data.completed_workouts == {}
        assert len(data.plan.workout_plan) == 7

    def test_profile_prepared(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        assert data.profile.current_composition.body_fat_pct == 21.0
        assert data.profile.targets.weight_kg == 72.0
        assert data.profile.targets.body_fat_pct == 16.0

    def test_persisted(self, orchestrator, store, male_profile):
        data = orchestrator.start_plan(male_profile)
        assert store.load("athlete", today=date(2024, 1, 3)) == data
        assert orchestrator.load() == data

    def test_new_plan_clears_completion(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        data = orchestrator.mark_workout_complete(data)
        assert data.completed_workouts
        assert orchestrator.start_plan(data.profile).completed_workouts == {}

    def test_retries_malformed_plan(
        self, store, clock, male_profile, plan_payload_factory, generator_factory
    ):
        generator = generator_factory([plan_payload_factory(6), plan_payload_factory(7)])
        orchestrator = PlanOrchestrator(generator, store, "athlete", clock=clock)
        data = orchestrator.start_plan(male_profile)
        assert len(data.plan.workout_plan) == 7
        assert generator.calls == [1, 1]

    def test_gives_up_after_max_attempts(
        self, store, clock, male_profile, plan_payload_factory, generator_factory, caplog
    ):
        generator = generator_factory([plan_payload_factory(6)])
        orchestrator = PlanOrchestrator(generator, store, "athlete", max_plan_attempts=3, clock=clock)
        with caplog.at_level(logging.WARNING, logger="forge_app.orchestrator"):
            with pytest.raises(PlanGenerationError) as exc_info:
                orchestrator.start_plan(male_profile)
        assert exc_info.value.attempts == 3
        assert generator.calls == [1, 1, 1]
        assert "Malformed plan" in caplog.text
        assert not store.exists("athlete")


# =========================================================================
# TestAlignedWeek
# =========================================================================


class TestAlignedWeek:
    """Tests for the today-first view."""

    def test_first_day_is_session_one(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        week = orchestrator.aligned_week(data)
        assert week[0].day == "Day 1"
        assert week[0].actual_day_name == "Wednesday"

    def test_rotates_as_days_pass(self, orchestrator, clock, male_profile):
        data = orchestrator.start_plan(male_profile)
        clock.now = datetime(2024, 1, 5, 7, 30)
        week = orchestrator.aligned_week(data)
        assert week[0].day == "Day 3"
        assert week[0].actual_day_name == "Friday"
        assert week[0].session_number == 3

    def test_no_plan(self, orchestrator, male_profile):
        data = ForgeData(profile=male_profile, current_week_start_date="2024-01-03")
        assert orchestrator.aligned_week(data) == ()

    def test_malformed_plan_in_memory(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        broken = dataclasses.replace(data.plan, workout_plan=data.plan.workout_plan[:6])
        assert orchestrator.aligned_week(dataclasses.replace(data, plan=broken)) == ()


# =========================================================================
# TestCompletionAndAdvance
# =========================================================================


class TestCompletionAndAdvance:
    """Tests for marking days done and the weekly gate."""

    def test_marks_calendar_day_of_slot(self, orchestrator, clock, male_profile):
        data = orchestrator.start_plan(male_profile)
        clock.now = datetime(2024, 1, 5, 18, 0)
        data = orchestrator.mark_workout_complete(data)
        data = orchestrator.mark_workout_complete(data, 2)
        assert data.completed_workouts == {"2024-01-05": True, "2024-01-07": True}

    def test_marking_persists(self, orchestrator, store, male_profile):
        data = orchestrator.mark_workout_complete(orchestrator.start_plan(male_profile))
        stored = store.load("athlete", today=date(2024, 1, 3))
        assert stored.completed_workouts == data.completed_workouts

    def test_cannot_advance_before_week_end(self, orchestrator, male_profile):
        data = _complete_whole_week(orchestrator, orchestrator.start_plan(male_profile))
        assert orchestrator.can_advance_week(data) is False
        with pytest.raises(WeekNotCompleteError):
            orchestrator.advance_week(data)

    def test_cannot_advance_with_missing_day(self, orchestrator, clock, male_profile):
        data = orchestrator.start_plan(male_profile)
        for slot in range(6):
            data = orchestrator.mark_workout_complete(data, slot)
        clock.now = datetime(2024, 1, 9, 20, 0)
        assert orchestrator.can_advance_week(data) is False

    def test_advance_week(self, orchestrator, generator, clock, male_profile):
        data = _complete_whole_week(orchestrator, orchestrator.start_plan(male_profile))
        clock.now = datetime(2024, 1, 9, 20, 0)
        assert orchestrator.can_advance_week(data) is True

        advanced = orchestrator.advance_week(data)
        assert advanced.week_number == 2
        assert advanced.current_week_start_date == "2024-01-10"
        assert len(advanced.completed_workouts) == 7
        assert generator.calls == [1, 2]

    def test_no_plan_cannot_advance(self, orchestrator, male_profile):
        data = ForgeData(profile=male_profile, current_week_start_date="2024-01-03")
        assert orchestrator.can_advance_week(data) is False


# =========================================================================
# TestSwapExercise
# =========================================================================


class TestSwapExercise:
    """Swaps chosen in the aligned view land on the authored day."""

    def test_swap_uses_original_index(self, orchestrator, generator, clock, male_profile):
        data = orchestrator.start_plan(male_profile)
        clock.now = datetime(2024, 1, 5, 8, 0)
        swapped = orchestrator.swap_exercise(data, 0, ExerciseSection.MAIN, 0)

        day = swapped.plan.workout_plan[2]
        assert day.exercises[0].name == "Dumbbell Press"
        assert day.exercises[0].reps == "8-10"
        assert day.exercises[0].is_alternative is True
        assert generator.alternative_calls == ["Main 3A"]
        for i in (0, 1, 3, 4, 5, 6):
            assert swapped.plan.workout_plan[i] == data.plan.workout_plan[i]

    def test_swap_persisted(self, orchestrator, store, clock, male_profile):
        data = orchestrator.start_plan(male_profile)
        clock.now = datetime(2024, 1, 5, 8, 0)
        swapped = orchestrator.swap_exercise(data, 0, ExerciseSection.MAIN, 0)
        assert store.load("athlete", today=date(2024, 1, 5)).plan == swapped.plan

    def test_malformed_alternative(self, orchestrator, generator, male_profile):
        generator.alternatives["Main 1A"] = {"sets": 3}
        data = orchestrator.start_plan(male_profile)
        with pytest.raises(PlanGenerationError):
            orchestrator.swap_exercise(data, 0, ExerciseSection.MAIN, 0)

    @pytest.mark.parametrize("exercise_index", [-1, 2])
    def test_bad_exercise_index_skips_generator(
        self, orchestrator, generator, male_profile, exercise_index
    ):
        data = orchestrator.start_plan(male_profile)
        with pytest.raises(IndexError):
            orchestrator.swap_exercise(data, 0, ExerciseSection.MAIN, exercise_index)
        assert generator.alternative_calls == []

    def test_no_plan(self, orchestrator, male_profile):
        data = ForgeData(profile=male_profile, current_week_start_date="2024-01-03")
        with pytest.raises(NoPlanError):
            orchestrator.swap_exercise(data, 0, ExerciseSection.MAIN, 0)


# =========================================================================
# TestProfileAndProgress
# =========================================================================


class TestProfileAndProgress:
    """Tests for profile edits and check-ins."""

    def test_unchanged_profile_is_a_no_op(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        assert orchestrator.update_profile(data, data.profile) is data

    def test_weight_change_reprojects_targets(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        heavier = dataclasses.replace(data.profile, weight_kg=90.0)
        updated = orchestrator.update_profile(data, heavier)
        assert updated.profile.targets.weight_kg == 81.0
        assert orchestrator.load().profile == updated.profile

    def test_single_check_in_is_pending(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        entry = ProgressEntry(entry_date=date(2024, 1, 9), week_number=99, weight_kg=79.5)
        data = orchestrator.add_progress(data, entry)
        assert data.progress_history[0].week_number == 1
        assert data.plan.progress_status == ProgressStatus.PENDING

    def test_losing_weight_is_on_track(self, orchestrator, male_profile):
        data = orchestrator.start_plan(male_profile)
        for day, weight in ((7, 80.0), (14, 79.0), (21, 78.0)):
            entry = ProgressEntry(entry_date=date(2024, 1, day), week_number=1, weight_kg=weight)
            data = orchestrator.add_progress(data, entry)
        assert len(data.progress_history) == 3
        assert data.plan.progress_status == ProgressStatus.ON_TRACK
