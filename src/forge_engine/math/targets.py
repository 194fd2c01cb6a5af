"""Target projection: suggested goal metrics per sculpting category.

Deltas are always applied to the *current* measurements, never to the
previous targets, so repeated recomputation cannot drift. Fields a
category does not touch are copied from the previous targets (falling back
to the current composition). Weight and body fat are floored at clinically
safe minimums regardless of what the percentage math suggests.

References:
    WHO (2000). Technical Report Series 894, healthy BMI 18.5-24.9.
    American Council on Exercise (2009). Body-fat norms for men and women.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from forge_engine.models.enums import (
    ABSOLUTE_MIN_WEIGHT_KG,
    BODY_FAT_FALLBACK_PCT,
    DEFAULT_FEMALE_HIP_CM,
    HEALTH_MARKERS_TARGET_BMI,
    HEALTHY_BMI_LOW,
    HEALTHY_BODY_FAT_RANGE_FEMALE,
    HEALTHY_BODY_FAT_RANGE_MALE,
    MIN_HIP_CM,
    MIN_WAIST_CM,
    MUSCLE_GAIN_BODY_FAT_CEILING,
    MUSCLE_GAIN_DEFAULT_ARM_CM,
    MUSCLE_GAIN_DEFAULT_CHEST_CM,
    SAFE_MIN_BODY_FAT_FEMALE,
    SAFE_MIN_BODY_FAT_MALE,
    Gender,
    SculptingTargetCategory,
)
from forge_engine.models.profile import (
    FemaleTargetSet,
    TargetSet,
    UserProfile,
    target_set_for_gender,
)


def safe_min_body_fat(gender: Gender) -> float:
    """Lowest body-fat % the projector will ever suggest for *gender*."""
    if gender == Gender.FEMALE:
        return SAFE_MIN_BODY_FAT_FEMALE
    return SAFE_MIN_BODY_FAT_MALE


def safe_min_weight(height_cm: float) -> float:
    """Weight at the lower bound of a healthy BMI (18.5) for *height_cm*.

    Returns 0.0 for a missing or non-positive height; the absolute 30 kg
    floor still applies in that case.
    """
    height_m = _finite_or(height_cm, 0.0) / 100.0
    if height_m <= 0:
        return 0.0
    return HEALTHY_BMI_LOW * height_m * height_m


def project_targets(
    profile: UserProfile,
    category: SculptingTargetCategory | None = None,
) -> TargetSet:
    """Compute suggested targets for *profile* under *category*.

    Args:
        profile: Current profile. Its ``targets`` are only used as the copy
            basis for fields the category leaves alone.
        category: Transformation focus. Defaults to the profile's own
            ``sculpting_target_category``.

    Returns:
        A FemaleTargetSet for female profiles, a TargetSet otherwise.
        Weight and body fat are rounded to 1 dp, waist/chest/hips to 0 dp,
        arm to 1 dp.
    """
    if category is None:
        category = profile.sculpting_target_category

    gender = profile.gender
    comp = profile.current_composition
    previous = profile.targets
    is_female = gender == Gender.FEMALE

    weight = _finite_or(profile.weight_kg, 0.0)
    height_m = _finite_or(profile.height_cm, 0.0) / 100.0
    body_fat = _positive_or(comp.body_fat_pct, BODY_FAT_FALLBACK_PCT)
    waist = _positive_or(comp.waist_cm, _positive_or(previous.waist_cm, MIN_WAIST_CM))
    min_bfp = safe_min_body_fat(gender)
    weight_floor = max(safe_min_weight(profile.height_cm), ABSOLUTE_MIN_WEIGHT_KG)

    # Copy basis for fields a category leaves alone
    new_waist = _positive_or(previous.waist_cm, waist)
    new_chest = previous.chest_cm if previous.chest_cm is not None else comp.chest_cm
    new_arm = previous.arm_cm if previous.arm_cm is not None else comp.arm_cm
    current_hip = _hip_basis(comp.hip_cm)
    new_hip = (
        previous.hip_cm
        if isinstance(previous, FemaleTargetSet) and _is_positive(previous.hip_cm)
        else current_hip
    )

    if category == SculptingTargetCategory.FAT_LOSS:
        new_weight = max(weight * 0.90, weight_floor)
        new_bfp = max(body_fat - 5.0, min_bfp)
        new_waist = max(waist * 0.90, MIN_WAIST_CM)
        new_hip = max(current_hip * 0.90, MIN_HIP_CM)
    elif category == SculptingTargetCategory.MUSCLE_GAIN:
        # Underweight users reach a healthy weight first, then add mass
        new_weight = max(weight, safe_min_weight(profile.height_cm)) * 1.05
        new_bfp = min(body_fat + 1.0, MUSCLE_GAIN_BODY_FAT_CEILING)
        new_chest = (
            comp.chest_cm * 1.05 if _is_positive(comp.chest_cm)
            else MUSCLE_GAIN_DEFAULT_CHEST_CM
        )
        new_arm = (
            comp.arm_cm * 1.05 if _is_positive(comp.arm_cm)
            else MUSCLE_GAIN_DEFAULT_ARM_CM
        )
    elif category == SculptingTargetCategory.RECOMPOSITION:
        new_weight = max(weight * 0.98, weight_floor)
        new_bfp = max(body_fat - 3.0, min_bfp)
        new_waist = max(waist * 0.95, MIN_WAIST_CM)
        new_hip = max(current_hip * 0.98, MIN_HIP_CM)
        if _is_positive(comp.chest_cm):
            new_chest = comp.chest_cm * 1.02
        if _is_positive(comp.arm_cm):
            new_arm = comp.arm_cm * 1.02
    elif category == SculptingTargetCategory.STRENGTH:
        new_weight = max(weight, safe_min_weight(profile.height_cm)) * 1.03
        new_bfp = body_fat
        if _is_positive(comp.chest_cm):
            new_chest = comp.chest_cm * 1.03
        if _is_positive(comp.arm_cm):
            new_arm = comp.arm_cm * 1.03
    elif category == SculptingTargetCategory.PERFORMANCE:
        new_weight = max(weight * 0.99, weight_floor)
        new_bfp = max(body_fat - 2.0, min_bfp)
    elif category == SculptingTargetCategory.HEALTH_MARKERS:
        new_weight = max(HEALTH_MARKERS_TARGET_BMI * height_m * height_m, weight_floor)
        low, high = (
            HEALTHY_BODY_FAT_RANGE_FEMALE if is_female else HEALTHY_BODY_FAT_RANGE_MALE
        )
        new_bfp = min(max(body_fat - 3.0, low), high)
    else:
        return _rounded(
            gender, weight, body_fat, waist, new_chest, new_arm,
            current_hip if is_female else None,
        )

    new_weight = max(new_weight, weight_floor)
    if round_half_up(new_weight, 1) < weight_floor:
        # Rounding must not undercut the floor
        new_weight = math.ceil(weight_floor * 10) / 10
    new_bfp = max(new_bfp, min_bfp)
    return _rounded(
        gender, new_weight, new_bfp, new_waist, new_chest, new_arm,
        new_hip if is_female else None,
    )


def targets_changed(old: TargetSet, new: TargetSet) -> bool:
    """True if storing *new* over *old* would change anything.

    A change of variant (female <-> other) always counts as a change.
    """
    return old != new


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _hip_basis(current_hip: float | None) -> float:
    """Current hip measurement, else 95 cm. Never a previous target."""
    if _is_positive(current_hip):
        return current_hip  # type: ignore[return-value]
    return DEFAULT_FEMALE_HIP_CM


def _rounded(
    gender: Gender,
    weight: float,
    body_fat: float,
    waist: float,
    chest: float | None,
    arm: float | None,
    hip: float | None,
) -> TargetSet:
    return target_set_for_gender(
        gender,
        weight_kg=round_half_up(weight, 1),
        body_fat_pct=round_half_up(body_fat, 1),
        waist_cm=round_half_up(waist, 0),
        chest_cm=round_half_up(chest, 0) if _is_positive(chest) else None,
        arm_cm=round_half_up(arm, 1) if _is_positive(arm) else None,
        hip_cm=round_half_up(hip, 0) if _is_positive(hip) else None,
    )


def round_half_up(value: float, digits: int) -> float:
    """Round like a display formatter: halves go away from zero.

    ``round()`` uses banker's rounding (``round(0.5) == 0``), which would
    make targets flicker between neighbouring values. Values too large
    for decimal precision (or non-finite) already have no fractional part
    to round and fall back to ``round()``.
    """
    quantum = Decimal(1).scaleb(-digits)
    try:
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return round(value, digits)


def _is_positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _finite_or(value: float | None, fallback: float) -> float:
    if value is None or not math.isfinite(value):
        return fallback
    return value


def _positive_or(value: float | None, fallback: float) -> float:
    return value if _is_positive(value) else fallback  # type: ignore[return-value]
