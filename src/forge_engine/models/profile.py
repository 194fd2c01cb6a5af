"""User profile models: current body composition and gender-keyed targets."""

from __future__ import annotations

from dataclasses import dataclass, field

from forge_engine.models.enums import (
    DietPreference,
    ExperienceLevel,
    Gender,
    Goal,
    SculptingTargetCategory,
)


@dataclass(frozen=True)
class BodyComposition:
    """Current measurements plus the values derived from them."""

    bmi: float
    body_fat_pct: float
    waist_cm: float
    neck_cm: float
    hip_cm: float | None = None
    chest_cm: float | None = None
    arm_cm: float | None = None


@dataclass(frozen=True)
class TargetSet:
    """Goal values for a male or other-gender profile.

    Carries no hip target. Female profiles use FemaleTargetSet instead,
    so a hip value can never outlive a gender change.
    """

    weight_kg: float
    body_fat_pct: float
    waist_cm: float
    chest_cm: float | None = None
    arm_cm: float | None = None

    @property
    def has_hip_target(self) -> bool:
        return False


@dataclass(frozen=True, kw_only=True)
class FemaleTargetSet(TargetSet):
    """Goal values for a female profile, including the hip target."""

    hip_cm: float

    @property
    def has_hip_target(self) -> bool:
        return True


def target_set_for_gender(
    gender: Gender,
    weight_kg: float,
    body_fat_pct: float,
    waist_cm: float,
    chest_cm: float | None = None,
    arm_cm: float | None = None,
    hip_cm: float | None = None,
) -> TargetSet:
    """Build the target variant matching *gender*.

    ``hip_cm`` is dropped for non-female genders. Female targets require it.

    Raises:
        ValueError: If gender is FEMALE and hip_cm is None.
    """
    if gender == Gender.FEMALE:
        if hip_cm is None:
            raise ValueError("Female targets require a hip target")
        return FemaleTargetSet(
            weight_kg=weight_kg,
            body_fat_pct=body_fat_pct,
            waist_cm=waist_cm,
            chest_cm=chest_cm,
            arm_cm=arm_cm,
            hip_cm=hip_cm,
        )
    return TargetSet(
        weight_kg=weight_kg,
        body_fat_pct=body_fat_pct,
        waist_cm=waist_cm,
        chest_cm=chest_cm,
        arm_cm=arm_cm,
    )


@dataclass(frozen=True)
class UserProfile:
    """Immutable snapshot of the user's biometrics, goals and preferences.

    ``targets`` is derived by the target projector whenever weight, height,
    gender, composition or category change; it is never edited directly.
    """

    age: int
    height_cm: float
    weight_kg: float
    gender: Gender
    current_composition: BodyComposition
    sculpting_target_category: SculptingTargetCategory
    targets: TargetSet

    goal: Goal = Goal.MUSCLE
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    diet_preference: DietPreference = DietPreference.BOTH
    cuisine: tuple[str, ...] = field(default_factory=tuple)
    custom_cuisine_preferences: tuple[str, ...] = field(default_factory=tuple)
    workout_preferences: tuple[str, ...] = field(default_factory=tuple)
    medical_conditions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def height_m(self) -> float:
        return self.height_cm / 100.0

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE
