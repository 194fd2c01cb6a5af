"""PlanOrchestrator — wires the generator, the forge engine and the store.

Every date computation goes through an injected clock so the whole flow is
deterministic under test. The orchestrator is the only place that advances
the week start, clears the completion map or writes to the store.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from typing import Callable, Sequence

from forge_engine.exceptions import MalformedPlanError
from forge_engine.math.alignment import (
    advance_week_start,
    align_plan,
    original_index_of,
    replace_exercise,
    to_calendar_date,
    to_date_key,
    workout_date_key,
)
from forge_engine.math.body_composition import refresh_composition
from forge_engine.math.completion import is_week_fully_complete, mark_complete
from forge_engine.math.progress import progress_status, upsert_progress_entry
from forge_engine.math.targets import project_targets, targets_changed
from forge_engine.models.enums import ExerciseSection
from forge_engine.models.forge_data import ForgeData
from forge_engine.models.plan import AlignedWorkoutDay, TransformationPlan
from forge_engine.models.profile import UserProfile
from forge_engine.models.progress import ProgressEntry
from forge_engine.serialization.forge_json import exercise_from_dict, plan_from_dict

from forge_app.exceptions import (
    NoPlanError,
    PlanGenerationError,
    WeekNotCompleteError,
)
from forge_app.generator import PlanGenerator
from forge_app.store import ForgeStore

logger = logging.getLogger(__name__)

_DEFAULT_MAX_PLAN_ATTEMPTS = 3


class PlanOrchestrator:
    """Application facade for one user's plan lifecycle.

    Usage:
        orchestrator = PlanOrchestrator(generator, store, user_id="me")
        data = orchestrator.start_plan(profile)
        week = orchestrator.aligned_week(data)
    """

    def __init__(
        self,
        generator: PlanGenerator,
        store: ForgeStore,
        user_id: str,
        max_plan_attempts: int = _DEFAULT_MAX_PLAN_ATTEMPTS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._generator = generator
        self._store = store
        self._user_id = user_id
        self._max_plan_attempts = max(1, max_plan_attempts)
        self._clock = clock

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def load(self) -> ForgeData | None:
        return self._store.load(self._user_id, today=self._today())

    def prepare_profile(self, profile: UserProfile) -> UserProfile:
        """Recompute composition and targets; keep targets if unchanged."""
        profile = dataclasses.replace(
            profile, current_composition=refresh_composition(profile)
        )
        targets = project_targets(profile)
        if not targets_changed(profile.targets, targets):
            return profile
        return dataclasses.replace(profile, targets=targets)

    def update_profile(self, data: ForgeData, profile: UserProfile) -> ForgeData:
        """Store an edited profile with freshly projected targets.

        Skips the write when nothing changed.
        """
        prepared = self.prepare_profile(profile)
        if prepared == data.profile:
            return data
        if targets_changed(data.profile.targets, prepared.targets):
            logger.info(
                "Targets updated for %s (%s): weight %.1f kg, body fat %.1f%%",
                self._user_id,
                prepared.sculpting_target_category.value,
                prepared.targets.weight_kg,
                prepared.targets.body_fat_pct,
            )
        return self._persist(dataclasses.replace(data, profile=prepared))

    # ------------------------------------------------------------------
    # Plan lifecycle
    # ------------------------------------------------------------------

    def start_plan(
        self,
        profile: UserProfile,
        history: Sequence[ProgressEntry] = (),
    ) -> ForgeData:
        """Generate week 1 of a new plan starting today.

        A new plan replaces any previous one, so the completion map starts
        empty.
        """
        prepared = self.prepare_profile(profile)
        plan = self._generate_plan(prepared, 1, history)
        data = ForgeData(
            profile=prepared,
            current_week_start_date=to_date_key(self._today()),
            plan=plan,
            week_number=1,
            progress_history=tuple(history),
            completed_workouts={},
        )
        logger.info(
            "Started plan for %s: %d estimated weeks, week starts %s",
            self._user_id,
            plan.estimated_weeks,
            data.current_week_start_date,
        )
        return self._persist(data)

    def can_advance_week(self, data: ForgeData) -> bool:
        return data.has_plan and is_week_fully_complete(
            data.completed_workouts, data.current_week_start_date, self._today()
        )

    def advance_week(self, data: ForgeData) -> ForgeData:
        """Generate the next week and move the week start forward 7 days.

        The completion map is kept.

        Raises:
            WeekNotCompleteError: If the current week is not fully complete.
        """
        if not self.can_advance_week(data):
            raise WeekNotCompleteError(
                f"Week {data.week_number} starting {data.current_week_start_date} "
                "is not complete yet"
            )
        next_week = data.week_number + 1
        plan = self._generate_plan(data.profile, next_week, data.progress_history)
        advanced = dataclasses.replace(
            data,
            plan=plan,
            week_number=next_week,
            current_week_start_date=advance_week_start(data.current_week_start_date),
        )
        logger.info(
            "Advanced %s to week %d starting %s",
            self._user_id,
            next_week,
            advanced.current_week_start_date,
        )
        return self._persist(advanced)

    # ------------------------------------------------------------------
    # Weekly view and mutations
    # ------------------------------------------------------------------

    def aligned_week(self, data: ForgeData) -> tuple[AlignedWorkoutDay, ...]:
        """Today-first view of the current week.

        Returns an empty tuple when there is no usable plan; the caller
        should then request a new one.
        """
        if data.plan is None:
            return ()
        try:
            return align_plan(
                data.plan.workout_plan, data.current_week_start_date, self._today()
            )
        except MalformedPlanError as exc:
            logger.warning("Plan for %s cannot be aligned: %s", self._user_id, exc)
            return ()

    def mark_workout_complete(self, data: ForgeData, rotated_index: int = 0) -> ForgeData:
        """Mark the calendar day shown at *rotated_index* as done."""
        key = workout_date_key(rotated_index, self._today())
        completed = mark_complete(data.completed_workouts, key)
        if completed == data.completed_workouts:
            return data
        logger.info("Marked %s complete for %s", key, self._user_id)
        return self._persist(dataclasses.replace(data, completed_workouts=completed))

    def swap_exercise(
        self,
        data: ForgeData,
        rotated_index: int,
        section: ExerciseSection,
        exercise_index: int,
    ) -> ForgeData:
        """Replace one exercise of the aligned view with a generated alternative.

        Raises:
            NoPlanError: If no plan is stored.
            PlanGenerationError: If the generator's alternative is malformed.
            IndexError: If rotated_index or exercise_index is out of range.
        """
        plan = self._require_plan(data)
        today = self._today()
        original = original_index_of(rotated_index, data.current_week_start_date, today)
        exercises = plan.workout_plan[original].section(section)
        if not 0 <= exercise_index < len(exercises):
            raise IndexError(
                f"No exercise {exercise_index} in {section.value} of session {original + 1}"
            )
        current = exercises[exercise_index]

        payload = self._generator.alternative_exercise(current, data.profile)
        try:
            replacement = exercise_from_dict(payload)
        except MalformedPlanError as exc:
            raise PlanGenerationError(f"Alternative for {current.name!r} is malformed: {exc}") from exc

        workout_plan = replace_exercise(
            plan.workout_plan,
            rotated_index,
            section,
            exercise_index,
            replacement,
            data.current_week_start_date,
            today,
        )
        logger.info(
            "Swapped %r -> %r in session %d for %s",
            current.name,
            replacement.name,
            original + 1,
            self._user_id,
        )
        new_plan = dataclasses.replace(plan, workout_plan=workout_plan)
        return self._persist(dataclasses.replace(data, plan=new_plan))

    def add_progress(self, data: ForgeData, entry: ProgressEntry) -> ForgeData:
        """Record a check-in for the current week and refresh the plan status."""
        entry = dataclasses.replace(entry, week_number=data.week_number)
        history = upsert_progress_entry(data.progress_history, entry)
        updated = dataclasses.replace(data, progress_history=history)
        if data.plan is not None:
            status = progress_status(history, data.profile)
            updated = dataclasses.replace(
                updated, plan=dataclasses.replace(data.plan, progress_status=status)
            )
        return self._persist(updated)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _generate_plan(
        self,
        profile: UserProfile,
        week_number: int,
        history: Sequence[ProgressEntry],
    ) -> TransformationPlan:
        """Ask the generator for a plan, re-requesting on malformed payloads."""
        last_error: MalformedPlanError | None = None
        for attempt in range(1, self._max_plan_attempts + 1):
            payload = self._generator.generate(profile, week_number, history)
            try:
                return plan_from_dict(payload)
            except MalformedPlanError as exc:
                last_error = exc
                logger.warning(
                    "Malformed plan for week %d (attempt %d/%d): %s",
                    week_number,
                    attempt,
                    self._max_plan_attempts,
                    exc,
                )
        raise PlanGenerationError(
            f"No well-formed plan for week {week_number} after "
            f"{self._max_plan_attempts} attempts: {last_error}",
            attempts=self._max_plan_attempts,
        )

    def _require_plan(self, data: ForgeData) -> TransformationPlan:
        if data.plan is None:
            raise NoPlanError(f"No plan stored for {self._user_id}")
        return data.plan

    def _persist(self, data: ForgeData) -> ForgeData:
        self._store.save(self._user_id, data)
        return data

    def _today(self) -> date:
        return to_calendar_date(self._clock())
