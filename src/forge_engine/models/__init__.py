"""Data models for the forge engine."""

from forge_engine.models.enums import (
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
    AlignedWorkoutDay,
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

__all__ = [
    "AlignedWorkoutDay",
    "BodyComposition",
    "Cardio",
    "DietPlan",
    "DietPreference",
    "Exercise",
    "ExerciseSection",
    "ExperienceLevel",
    "FemaleTargetSet",
    "ForgeData",
    "Gender",
    "Goal",
    "Macros",
    "Meal",
    "Measurements",
    "ProgressEntry",
    "ProgressStatus",
    "SculptingTargetCategory",
    "Snack",
    "TargetSet",
    "TransformationPlan",
    "UserProfile",
    "WorkoutDay",
    "target_set_for_gender",
]
