"""Calendar alignment: map an authored 7-day plan onto the real week.

The plan generator authors days in an arbitrary order that is not tied to
weekday names. Alignment rotates the plan so index 0 is always today, while
``original_index_of`` maps every rotated slot back to its authored position.
Every read or write against the rotated view must resolve through that
mapping or it lands on another day's data.

All functions are pure; ``now`` is always passed in.
"""

from __future__ import annotations

import dataclasses
import re
from datetime import date, datetime, timedelta
from typing import Sequence

from forge_engine.exceptions import MalformedPlanError
from forge_engine.models.enums import DAYS_PER_WEEK, WEEKDAY_NAMES, ExerciseSection
from forge_engine.models.plan import AlignedWorkoutDay, Exercise, WorkoutDay

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_SECTION_FIELDS = {
    ExerciseSection.WARM_UP: "warm_up_exercises",
    ExerciseSection.MAIN: "exercises",
    ExerciseSection.REHAB: "rehab_exercises",
    ExerciseSection.COOL_DOWN: "cool_down_exercises",
}


# ---------------------------------------------------------------------------
# Date keys
# ---------------------------------------------------------------------------


def to_calendar_date(value: date | datetime) -> date:
    """Strip the time of day. Aware datetimes keep their own offset."""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_date_key(value: date | datetime) -> str:
    """Format the local calendar date of *value* as ``YYYY-MM-DD``."""
    return to_calendar_date(value).isoformat()


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key.

    Raises:
        ValueError: If *key* is not a zero-padded ``YYYY-MM-DD`` date.
    """
    if not isinstance(key, str) or not _DATE_KEY_RE.match(key):
        raise ValueError(f"Date key must be YYYY-MM-DD, got {key!r}")
    return date.fromisoformat(key)


def advance_week_start(week_start_key: str, weeks: int = 1) -> str:
    """Move a week-start key forward by exactly 7 days per week."""
    start = parse_date_key(week_start_key)
    return to_date_key(start + timedelta(days=DAYS_PER_WEEK * weeks))


# ---------------------------------------------------------------------------
# Rotation arithmetic
# ---------------------------------------------------------------------------


def days_since_week_start(week_start_key: str, now: date | datetime) -> int:
    """Whole calendar days from the week start to *now* (negative if ahead)."""
    return (to_calendar_date(now) - parse_date_key(week_start_key)).days


def start_offset(week_start_key: str, now: date | datetime) -> int:
    """Rotation amount in [0, 6]; the authored index that is today.

    Stays non-negative when the week start lies in the future.
    """
    diff_days = days_since_week_start(week_start_key, now)
    return ((diff_days % DAYS_PER_WEEK) + DAYS_PER_WEEK) % DAYS_PER_WEEK


def original_index_of(
    rotated_index: int, week_start_key: str, now: date | datetime
) -> int:
    """Map a slot of the aligned (today-first) view to its authored index.

    Raises:
        IndexError: If rotated_index is outside [0, 6].
    """
    _check_slot(rotated_index)
    return (start_offset(week_start_key, now) + rotated_index) % DAYS_PER_WEEK


def session_number_of(
    rotated_index: int, week_start_key: str, now: date | datetime
) -> int:
    """1-based authored session number shown for a rotated slot."""
    return original_index_of(rotated_index, week_start_key, now) + 1


def workout_date_key(rotated_index: int, now: date | datetime) -> str:
    """Calendar date key of a rotated slot: today plus *rotated_index* days."""
    _check_slot(rotated_index)
    return to_date_key(to_calendar_date(now) + timedelta(days=rotated_index))


def align_plan(
    plan_days: Sequence[WorkoutDay],
    week_start_key: str,
    now: date | datetime,
) -> tuple[AlignedWorkoutDay, ...]:
    """Rotate the authored week so index 0 is today.

    Args:
        plan_days: The 7 authored days in authoring order.
        week_start_key: ``YYYY-MM-DD`` date the current plan week started.
        now: Current time; only its calendar date is used.

    Returns:
        7 AlignedWorkoutDay. Slot *i* carries the real weekday name and
        date key of ``now + i days``; only slot 0 is today.

    Raises:
        MalformedPlanError: If plan_days does not hold exactly 7 days.
    """
    _check_week(plan_days)
    today = to_calendar_date(now)
    offset = start_offset(week_start_key, today)

    aligned: list[AlignedWorkoutDay] = []
    for i in range(DAYS_PER_WEEK):
        original = (offset + i) % DAYS_PER_WEEK
        slot_date = today + timedelta(days=i)
        aligned.append(
            AlignedWorkoutDay(
                workout=plan_days[original],
                actual_day_name=WEEKDAY_NAMES[slot_date.weekday()],
                is_today=i == 0,
                date_key=to_date_key(slot_date),
                original_index=original,
            )
        )
    return tuple(aligned)


# ---------------------------------------------------------------------------
# Write-back through the rotation
# ---------------------------------------------------------------------------


def replace_exercise(
    plan_days: Sequence[WorkoutDay],
    rotated_index: int,
    section: ExerciseSection,
    exercise_index: int,
    replacement: Exercise,
    week_start_key: str,
    now: date | datetime,
) -> tuple[WorkoutDay, ...]:
    """Swap one exercise chosen in the aligned view, in authored order.

    The replacement is stored with ``is_alternative=True``. The input plan
    is not modified.

    Raises:
        MalformedPlanError: If plan_days does not hold exactly 7 days.
        IndexError: If rotated_index or exercise_index is out of range.
    """
    _check_week(plan_days)
    original = original_index_of(rotated_index, week_start_key, now)
    day = plan_days[original]
    exercises = list(day.section(section))
    if not 0 <= exercise_index < len(exercises):
        raise IndexError(
            f"No exercise {exercise_index} in {section.value} of session {original + 1}"
        )
    exercises[exercise_index] = dataclasses.replace(replacement, is_alternative=True)
    new_day = dataclasses.replace(day, **{_SECTION_FIELDS[section]: tuple(exercises)})

    days = list(plan_days)
    days[original] = new_day
    return tuple(days)


def _check_week(plan_days: Sequence[WorkoutDay]) -> None:
    if len(plan_days) != DAYS_PER_WEEK:
        raise MalformedPlanError(
            f"Plan must have exactly {DAYS_PER_WEEK} workout days, got {len(plan_days)}"
        )


def _check_slot(rotated_index: int) -> None:
    if not 0 <= rotated_index < DAYS_PER_WEEK:
        raise IndexError(f"Slot must be in [0, {DAYS_PER_WEEK - 1}], got {rotated_index}")
