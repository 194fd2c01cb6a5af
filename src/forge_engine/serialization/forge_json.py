"""JSON (camelCase) conversion for plans, profiles and the ForgeData document.

``plan_from_dict`` is the boundary the generated plan crosses: it refuses to
guess and raises MalformedPlanError for anything that is not a well-formed
7-day week. Profile conversion enforces the hip invariant in both
directions: ``hipSize`` is written and read only for female profiles.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
import math
from datetime import date
from typing import Any

from forge_engine.exceptions import MalformedPlanError
from forge_engine.math.alignment import parse_date_key
from forge_engine.models.enums import (
    DAYS_PER_WEEK,
    DEFAULT_FEMALE_HIP_CM,
    DietPreference,
    ExerciseSection,
    ExperienceLevel,
    Gender,
    Goal,
    ProgressStatus,
    SculptingTargetCategory,
)
from forge_engine.models.forge_data import ForgeData
from forge_engine.models.plan import (
    Cardio,
    DietPlan,
    Exercise,
    Macros,
    Meal,
    Snack,
    TransformationPlan,
    WorkoutDay,
)
from forge_engine.models.profile import (
    BodyComposition,
    FemaleTargetSet,
    TargetSet,
    UserProfile,
    target_set_for_gender,
)
from forge_engine.models.progress import Measurements, ProgressEntry

# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


def plan_from_dict(payload: Any) -> TransformationPlan:
    """Build a TransformationPlan from the generator's JSON payload.

    Raises:
        MalformedPlanError: If the payload is not a dict, the workout plan
            is not exactly 7 days, a day lacks ``day``/``focus``, an exercise
            section is not a list, or the diet plan is neither absent nor
            7 days long.
    """
    if not isinstance(payload, dict):
        raise MalformedPlanError(f"Plan must be an object, got {type(payload).__name__}")

    raw_days = payload.get("workoutPlan")
    if not isinstance(raw_days, list) or len(raw_days) != DAYS_PER_WEEK:
        found = len(raw_days) if isinstance(raw_days, list) else type(raw_days).__name__
        raise MalformedPlanError(
            f"workoutPlan must list exactly {DAYS_PER_WEEK} days, got {found}"
        )
    workout_plan = tuple(_workout_day_from_dict(d, i) for i, d in enumerate(raw_days))

    raw_diet = payload.get("dailyDietPlans") or []
    if not isinstance(raw_diet, list) or len(raw_diet) not in (0, DAYS_PER_WEEK):
        raise MalformedPlanError(
            f"dailyDietPlans must be empty or list {DAYS_PER_WEEK} days"
        )

    try:
        estimated_weeks = int(payload.get("estimatedWeeks", 0))
        daily_calories = float(payload.get("dailyCalories", 0.0))
        diet = tuple(_diet_plan_from_dict(d) for d in raw_diet)
        macros = _macros_from_dict(payload.get("macros"))
        status = ProgressStatus(payload.get("progressStatus", ProgressStatus.PENDING.value))
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedPlanError(f"Invalid plan field: {exc}") from exc

    return TransformationPlan(
        estimated_weeks=estimated_weeks,
        workout_plan=workout_plan,
        timeframe=str(payload.get("timeframe", "")),
        daily_calories=daily_calories,
        macros=macros,
        daily_diet_plans=diet,
        summary=str(payload.get("summary", "")),
        progress_status=status,
        course_correction=payload.get("courseCorrection"),
        rehab_notice=payload.get("rehabNotice"),
    )


def plan_to_dict(plan: TransformationPlan) -> dict:
    out: dict[str, Any] = {
        "estimatedWeeks": plan.estimated_weeks,
        "timeframe": plan.timeframe,
        "dailyCalories": plan.daily_calories,
        "dailyDietPlans": [_diet_plan_to_dict(d) for d in plan.daily_diet_plans],
        "workoutPlan": [workout_day_to_dict(d) for d in plan.workout_plan],
        "summary": plan.summary,
        "progressStatus": plan.progress_status.value,
    }
    if plan.macros is not None:
        out["macros"] = {
            "protein": plan.macros.protein,
            "carbs": plan.macros.carbs,
            "fats": plan.macros.fats,
        }
    if plan.course_correction is not None:
        out["courseCorrection"] = plan.course_correction
    if plan.rehab_notice is not None:
        out["rehabNotice"] = plan.rehab_notice
    return out


def exercise_from_dict(raw: Any) -> Exercise:
    """Build an Exercise; ``sets``/``reps``/``rest`` may arrive as numbers.

    Raises:
        MalformedPlanError: If raw is not an object with a non-empty name.
    """
    if not isinstance(raw, dict) or not raw.get("name"):
        raise MalformedPlanError(f"Exercise must be an object with a name: {raw!r}")
    return Exercise(
        name=str(raw["name"]),
        sets=str(raw.get("sets", "")),
        reps=str(raw.get("reps", "")),
        rest=str(raw.get("rest", "")),
        tips=str(raw.get("tips", "")),
        is_alternative=bool(raw.get("isAlternative", False)),
        is_rehab=bool(raw.get("isRehab", False)),
        is_variation=bool(raw.get("isVariation", False)),
    )


def exercise_to_dict(exercise: Exercise) -> dict:
    out: dict[str, Any] = {
        "name": exercise.name,
        "sets": exercise.sets,
        "reps": exercise.reps,
        "rest": exercise.rest,
        "tips": exercise.tips,
    }
    for key, flag in (
        ("isAlternative", exercise.is_alternative),
        ("isRehab", exercise.is_rehab),
        ("isVariation", exercise.is_variation),
    ):
        if flag:
            out[key] = True
    return out


def workout_day_to_dict(day: WorkoutDay) -> dict:
    out: dict[str, Any] = {"day": day.day, "focus": day.focus}
    for section in ExerciseSection:
        if section == ExerciseSection.REHAB and day.rehab_exercises is None:
            continue
        out[section.value] = [exercise_to_dict(e) for e in day.section(section)]
    if day.cardio is not None:
        out["cardio"] = {
            "type": day.cardio.type,
            "duration": day.cardio.duration,
            "intensity": day.cardio.intensity,
        }
    return out


def _workout_day_from_dict(raw: Any, index: int) -> WorkoutDay:
    if not isinstance(raw, dict):
        raise MalformedPlanError(f"Workout day {index + 1} must be an object")
    for key in ("day", "focus"):
        if not isinstance(raw.get(key), str) or not raw[key]:
            raise MalformedPlanError(f"Workout day {index + 1} is missing '{key}'")

    sections: dict[ExerciseSection, tuple[Exercise, ...] | None] = {}
    for section in ExerciseSection:
        items = raw.get(section.value)
        if items is None:
            sections[section] = None if section == ExerciseSection.REHAB else ()
            continue
        if not isinstance(items, list):
            raise MalformedPlanError(
                f"Workout day {index + 1}: '{section.value}' must be a list"
            )
        sections[section] = tuple(exercise_from_dict(e) for e in items)

    cardio = None
    raw_cardio = raw.get("cardio")
    if isinstance(raw_cardio, dict):
        cardio = Cardio(
            type=str(raw_cardio.get("type", "")),
            duration=str(raw_cardio.get("duration", "")),
            intensity=str(raw_cardio.get("intensity", "")),
        )

    return WorkoutDay(
        day=raw["day"],
        focus=raw["focus"],
        warm_up_exercises=sections[ExerciseSection.WARM_UP] or (),
        exercises=sections[ExerciseSection.MAIN] or (),
        rehab_exercises=sections[ExerciseSection.REHAB],
        cool_down_exercises=sections[ExerciseSection.COOL_DOWN] or (),
        cardio=cardio,
    )


def _meal_from_dict(raw: dict) -> Meal:
    return Meal(
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        calories=float(raw.get("calories", 0.0)),
        prep_time=raw.get("prepTime"),
        image_url=raw.get("imageUrl"),
    )


def _meal_to_dict(meal: Meal) -> dict:
    out: dict[str, Any] = {
        "name": meal.name,
        "description": meal.description,
        "calories": meal.calories,
    }
    if meal.prep_time is not None:
        out["prepTime"] = meal.prep_time
    if meal.image_url is not None:
        out["imageUrl"] = meal.image_url
    return out


def _diet_plan_from_dict(raw: dict) -> DietPlan:
    return DietPlan(
        breakfast=_meal_from_dict(raw["breakfast"]),
        lunch=_meal_from_dict(raw["lunch"]),
        dinner=_meal_from_dict(raw["dinner"]),
        snacks=tuple(
            Snack(name=str(s["name"]), description=str(s.get("description", "")))
            for s in raw.get("snacks", [])
        ),
        supplements=tuple(str(s) for s in raw.get("supplements", [])),
    )


def _diet_plan_to_dict(plan: DietPlan) -> dict:
    return {
        "breakfast": _meal_to_dict(plan.breakfast),
        "lunch": _meal_to_dict(plan.lunch),
        "dinner": _meal_to_dict(plan.dinner),
        "snacks": [{"name": s.name, "description": s.description} for s in plan.snacks],
        "supplements": list(plan.supplements),
    }


def _macros_from_dict(raw: Any) -> Macros | None:
    if raw is None:
        return None
    return Macros(
        protein=float(raw["protein"]),
        carbs=float(raw["carbs"]),
        fats=float(raw["fats"]),
    )


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def targets_to_dict(targets: TargetSet) -> dict:
    """Serialize targets; ``hipSize`` appears only for the female variant."""
    out: dict[str, Any] = {
        "weight": targets.weight_kg,
        "bodyFatPercentage": targets.body_fat_pct,
        "waistSize": targets.waist_cm,
    }
    if isinstance(targets, FemaleTargetSet):
        out["hipSize"] = targets.hip_cm
    if targets.chest_cm is not None:
        out["chestSize"] = targets.chest_cm
    if targets.arm_cm is not None:
        out["armSize"] = targets.arm_cm
    return out


def targets_from_dict(
    raw: dict, gender: Gender, current_hip_cm: float | None = None
) -> TargetSet:
    """Rebuild the gender-keyed target variant.

    A stored ``hipSize`` is ignored for non-female genders (older documents
    wrote 0 there). Female targets without a usable hip value fall back to
    the current hip measurement, then to DEFAULT_FEMALE_HIP_CM.
    """
    hip_cm = None
    if gender == Gender.FEMALE:
        hip_cm = _positive(raw.get("hipSize")) or _positive(current_hip_cm) or DEFAULT_FEMALE_HIP_CM
    return target_set_for_gender(
        gender,
        weight_kg=float(raw["weight"]),
        body_fat_pct=float(raw["bodyFatPercentage"]),
        waist_cm=float(raw["waistSize"]),
        chest_cm=_optional_float(raw.get("chestSize")),
        arm_cm=_optional_float(raw.get("armSize")),
        hip_cm=hip_cm,
    )


def composition_to_dict(comp: BodyComposition) -> dict:
    out: dict[str, Any] = {
        "bmi": comp.bmi,
        "bodyFatPercentage": comp.body_fat_pct,
        "waistSize": comp.waist_cm,
        "neckSize": comp.neck_cm,
    }
    for key, value in (
        ("hipSize", comp.hip_cm),
        ("chestSize", comp.chest_cm),
        ("armSize", comp.arm_cm),
    ):
        if value is not None:
            out[key] = value
    return out


def composition_from_dict(raw: dict, gender: Gender) -> BodyComposition:
    return BodyComposition(
        bmi=float(raw.get("bmi", 0.0)),
        body_fat_pct=float(raw.get("bodyFatPercentage", 0.0)),
        waist_cm=float(raw["waistSize"]),
        neck_cm=float(raw["neckSize"]),
        hip_cm=_optional_float(raw.get("hipSize")) if gender == Gender.FEMALE else None,
        chest_cm=_optional_float(raw.get("chestSize")),
        arm_cm=_optional_float(raw.get("armSize")),
    )


def profile_to_dict(profile: UserProfile) -> dict:
    return {
        "age": profile.age,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "gender": profile.gender.value,
        "goal": profile.goal.value,
        "experienceLevel": profile.experience_level.value,
        "cuisine": list(profile.cuisine),
        "customCuisinePreferences": list(profile.custom_cuisine_preferences),
        "dietPreference": profile.diet_preference.value,
        "workoutPreferences": list(profile.workout_preferences),
        "medicalConditions": list(profile.medical_conditions),
        "currentComposition": composition_to_dict(profile.current_composition),
        "sculptingTargetCategory": profile.sculpting_target_category.value,
        "targets": targets_to_dict(profile.targets),
    }


def profile_from_dict(raw: dict) -> UserProfile:
    gender = Gender(raw["gender"])
    composition = composition_from_dict(raw["currentComposition"], gender)
    return UserProfile(
        age=int(raw["age"]),
        height_cm=float(raw["height"]),
        weight_kg=float(raw["weight"]),
        gender=gender,
        current_composition=composition,
        sculpting_target_category=SculptingTargetCategory(raw["sculptingTargetCategory"]),
        targets=targets_from_dict(raw["targets"], gender, composition.hip_cm),
        goal=Goal(raw.get("goal", Goal.MUSCLE.value)),
        experience_level=ExperienceLevel(
            raw.get("experienceLevel", ExperienceLevel.BEGINNER.value)
        ),
        diet_preference=DietPreference(raw.get("dietPreference", DietPreference.BOTH.value)),
        cuisine=tuple(raw.get("cuisine", ())),
        custom_cuisine_preferences=tuple(raw.get("customCuisinePreferences", ())),
        workout_preferences=tuple(raw.get("workoutPreferences", ())),
        medical_conditions=tuple(raw.get("medicalConditions", ())),
    )


# ---------------------------------------------------------------------------
# Progress + ForgeData
# ---------------------------------------------------------------------------


def progress_entry_to_dict(entry: ProgressEntry) -> dict:
    m = entry.measurements
    measurements = {
        key: value
        for key, value in (
            ("waist", m.waist_cm),
            ("neck", m.neck_cm),
            ("hips", m.hip_cm),
            ("chest", m.chest_cm),
            ("arms", m.arm_cm),
        )
        if value is not None
    }
    out: dict[str, Any] = {
        "date": entry.entry_date.isoformat(),
        "weekNumber": entry.week_number,
        "weight": entry.weight_kg,
        "measurements": measurements,
    }
    if entry.body_fat_pct is not None:
        out["bodyFat"] = entry.body_fat_pct
    return out


def progress_entry_from_dict(raw: dict) -> ProgressEntry:
    m = raw.get("measurements") or {}
    return ProgressEntry(
        entry_date=date.fromisoformat(raw["date"]),
        week_number=int(raw["weekNumber"]),
        weight_kg=float(raw["weight"]),
        body_fat_pct=_optional_float(raw.get("bodyFat")),
        measurements=Measurements(
            waist_cm=_optional_float(m.get("waist")),
            neck_cm=_optional_float(m.get("neck")),
            hip_cm=_optional_float(m.get("hips")),
            chest_cm=_optional_float(m.get("chest")),
            arm_cm=_optional_float(m.get("arms")),
        ),
    )


def forge_data_to_dict(data: ForgeData) -> dict:
    return {
        "profile": profile_to_dict(data.profile),
        "plan": plan_to_dict(data.plan) if data.plan is not None else None,
        "weekNumber": data.week_number,
        "progressHistory": [progress_entry_to_dict(e) for e in data.progress_history],
        "completedWorkouts": {k: True for k, v in sorted(data.completed_workouts.items()) if v},
        "currentWeekStartDate": data.current_week_start_date,
    }


def forge_data_from_dict(raw: dict, today: date | None = None) -> ForgeData:
    """Rebuild ForgeData from a stored document.

    A missing ``currentWeekStartDate`` (documents written before it existed)
    defaults to *today*, which must then be supplied.

    Raises:
        MalformedPlanError: If the stored plan is malformed.
        ValueError: If the week start is missing and *today* is None, or a
            date key is not ``YYYY-MM-DD``, or the document,
            its profile or its completion map is not a JSON object.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Document must be an object, got {type(raw).__name__}")
    week_start = raw.get("currentWeekStartDate")
    if not week_start:
        if today is None:
            raise ValueError("currentWeekStartDate missing and no fallback date given")
        week_start = today.isoformat()
    parse_date_key(week_start)

    completed = raw.get("completedWorkouts") or {}
    if not isinstance(completed, dict):
        raise ValueError("completedWorkouts must be an object")
    if not isinstance(raw.get("profile"), dict):
        raise ValueError("profile must be an object")
    for key in completed:
        parse_date_key(key)

    raw_plan = raw.get("plan")
    return ForgeData(
        profile=profile_from_dict(raw["profile"]),
        current_week_start_date=week_start,
        plan=plan_from_dict(raw_plan) if raw_plan is not None else None,
        week_number=int(raw.get("weekNumber", 1)),
        progress_history=tuple(
            progress_entry_from_dict(e) for e in raw.get("progressHistory", [])
        ),
        completed_workouts={k: True for k, v in completed.items() if v},
    )


def forge_data_to_json_string(data: ForgeData, indent: int | None = 2) -> str:
    return json.dumps(forge_data_to_dict(data), indent=indent)


def forge_data_from_json_string(text: str, today: date | None = None) -> ForgeData:
    return forge_data_from_dict(json.loads(text), today=today)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _positive(value: Any) -> float | None:
    if value is None:
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number
