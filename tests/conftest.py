"""Shared test fixtures: sample profiles, a 7-day authored week and its JSON payload."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from forge_engine.models.enums import Gender, Goal, SculptingTargetCategory
from forge_engine.models.plan import Exercise, WorkoutDay
from forge_engine.models.profile import (
    BodyComposition,
    FemaleTargetSet,
    TargetSet,
    UserProfile,
)

_FOCUSES = (
    "Push",
    "Pull",
    "Legs",
    "Active Recovery",
    "Upper Body",
    "Lower Body",
    "Mobility",
)


def make_profile(
    gender: Gender = Gender.MALE,
    height_cm: float = 180.0,
    weight_kg: float = 80.0,
    body_fat_pct: float = 18.0,
    waist_cm: float = 85.0,
    neck_cm: float = 40.0,
    hip_cm: float | None = None,
    chest_cm: float | None = 100.0,
    arm_cm: float | None = 35.0,
    category: SculptingTargetCategory = SculptingTargetCategory.FAT_LOSS,
    targets: TargetSet | None = None,
) -> UserProfile:
    if targets is None:
        if gender == Gender.FEMALE:
            targets = FemaleTargetSet(
                weight_kg=weight_kg,
                body_fat_pct=body_fat_pct,
                waist_cm=waist_cm,
                hip_cm=hip_cm if hip_cm is not None else 95.0,
            )
        else:
            targets = TargetSet(weight_kg=weight_kg, body_fat_pct=body_fat_pct, waist_cm=waist_cm)
    return UserProfile(
        age=30,
        height_cm=height_cm,
        weight_kg=weight_kg,
        gender=gender,
        current_composition=BodyComposition(
            bmi=24.7,
            body_fat_pct=body_fat_pct,
            waist_cm=waist_cm,
            neck_cm=neck_cm,
            hip_cm=hip_cm,
            chest_cm=chest_cm,
            arm_cm=arm_cm,
        ),
        sculpting_target_category=category,
        targets=targets,
        goal=Goal.LEAN,
    )


@pytest.fixture
def profile_factory() -> Callable[..., UserProfile]:
    """Factory fixture for UserProfile instances.

    Usage:
        profile = profile_factory(gender=Gender.FEMALE, hip_cm=100.0)
    """
    return make_profile


@pytest.fixture
def male_profile() -> UserProfile:
    """30-year-old man: 180 cm, 80 kg, waist 85, neck 40."""
    return make_profile()


@pytest.fixture
def female_profile() -> UserProfile:
    """30-year-old woman: 165 cm, 65 kg, waist 75, neck 33, hips 100."""
    return make_profile(
        gender=Gender.FEMALE,
        height_cm=165.0,
        weight_kg=65.0,
        body_fat_pct=28.0,
        waist_cm=75.0,
        neck_cm=33.0,
        hip_cm=100.0,
        chest_cm=90.0,
        arm_cm=28.0,
    )


@pytest.fixture
def plan_days() -> tuple[WorkoutDay, ...]:
    """Seven authored days labelled 'Day 1'..'Day 7' with distinct focuses."""
    return tuple(
        WorkoutDay(
            day=f"Day {i + 1}",
            focus=focus,
            warm_up_exercises=(Exercise(name=f"Warm-up {i + 1}", sets="1", reps="5 min"),),
            exercises=(
                Exercise(name=f"Main {i + 1}A", sets="3", reps="10", rest="60s"),
                Exercise(name=f"Main {i + 1}B", sets="3", reps="12", rest="60s"),
            ),
            cool_down_exercises=(Exercise(name=f"Stretch {i + 1}", sets="1", reps="5 min"),),
        )
        for i, focus in enumerate(_FOCUSES)
    )


def make_plan_payload(days: int = 7) -> dict[str, Any]:
    meal = {"name": "Oats", "description": "Oats with berries", "calories": 450}
    return {
        "estimatedWeeks": 12,
        "timeframe": "12 weeks",
        "dailyCalories": 2200,
        "macros": {"protein": 160, "carbs": 220, "fats": 70},
        "dailyDietPlans": [
            {
                "breakfast": meal,
                "lunch": {"name": "Chicken bowl", "description": "Rice and chicken", "calories": 700},
                "dinner": {"name": "Salmon", "description": "With greens", "calories": 650},
                "snacks": [{"name": "Greek yogurt", "description": "200 g"}],
                "supplements": ["Creatine"],
            }
            for _ in range(7)
        ],
        "workoutPlan": [
            {
                "day": f"Day {i + 1}",
                "focus": _FOCUSES[i % len(_FOCUSES)],
                "warmUpExercises": [{"name": f"Warm-up {i + 1}", "sets": 1, "reps": "5 min", "rest": "0", "tips": ""}],
                "exercises": [
                    {"name": f"Main {i + 1}A", "sets": 3, "reps": 10, "rest": "60s", "tips": "Brace"},
                    {"name": f"Main {i + 1}B", "sets": "3", "reps": "12", "rest": "60s", "tips": ""},
                ],
                "coolDownExercises": [{"name": f"Stretch {i + 1}", "sets": "1", "reps": "5 min", "rest": "0", "tips": ""}],
            }
            for i in range(days)
        ],
        "summary": "Lean out while keeping strength.",
        "progressStatus": "pending",
    }


@pytest.fixture
def plan_payload() -> dict[str, Any]:
    """A well-formed generator payload for a 7-day week."""
    return make_plan_payload()


@pytest.fixture
def plan_payload_factory() -> Callable[..., dict[str, Any]]:
    """Factory fixture for plan payloads with a chosen number of days."""
    return make_plan_payload
