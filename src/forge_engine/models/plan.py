"""Transformation plan models: the AI-authored week and its aligned view."""

from __future__ import annotations

from dataclasses import dataclass, field

from forge_engine.models.enums import ExerciseSection, ProgressStatus


@dataclass(frozen=True)
class Exercise:
    """A single prescribed exercise."""

    name: str
    sets: str = ""
    reps: str = ""
    rest: str = ""
    tips: str = ""
    is_alternative: bool = False
    is_rehab: bool = False
    is_variation: bool = False


@dataclass(frozen=True)
class Cardio:
    type: str
    duration: str
    intensity: str


@dataclass(frozen=True)
class WorkoutDay:
    """One authored day of a 7-day plan.

    ``day`` is the label the author gave it; it is not tied to a real
    weekday. Authoring order is the canonical storage order.
    """

    day: str
    focus: str
    warm_up_exercises: tuple[Exercise, ...] = field(default_factory=tuple)
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)
    rehab_exercises: tuple[Exercise, ...] | None = None
    cool_down_exercises: tuple[Exercise, ...] = field(default_factory=tuple)
    cardio: Cardio | None = None

    def section(self, section: ExerciseSection) -> tuple[Exercise, ...]:
        """Return the exercises of *section* (empty if the day has none)."""
        if section == ExerciseSection.WARM_UP:
            return self.warm_up_exercises
        if section == ExerciseSection.MAIN:
            return self.exercises
        if section == ExerciseSection.REHAB:
            return self.rehab_exercises or ()
        return self.cool_down_exercises


@dataclass(frozen=True)
class AlignedWorkoutDay:
    """A WorkoutDay placed on the real calendar.

    Index 0 of an aligned week is always today.
    """

    workout: WorkoutDay
    actual_day_name: str
    is_today: bool
    date_key: str
    original_index: int  # 0-based position in the authored plan

    @property
    def session_number(self) -> int:
        """1-based authored session number ("Session N of 7")."""
        return self.original_index + 1

    @property
    def day(self) -> str:
        return self.workout.day

    @property
    def focus(self) -> str:
        return self.workout.focus


@dataclass(frozen=True)
class Meal:
    name: str
    description: str
    calories: float
    prep_time: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class Snack:
    name: str
    description: str


@dataclass(frozen=True)
class DietPlan:
    """Meals for one day of the week."""

    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snacks: tuple[Snack, ...] = field(default_factory=tuple)
    supplements: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Macros:
    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class TransformationPlan:
    """A generated multi-week plan; the workout week repeats with rotation."""

    estimated_weeks: int
    workout_plan: tuple[WorkoutDay, ...]
    timeframe: str = ""
    daily_calories: float = 0.0
    macros: Macros | None = None
    daily_diet_plans: tuple[DietPlan, ...] = field(default_factory=tuple)
    summary: str = ""
    progress_status: ProgressStatus = ProgressStatus.PENDING
    course_correction: str | None = None
    rehab_notice: str | None = None
