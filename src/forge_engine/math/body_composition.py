"""Body-composition estimates: Navy-method body fat and BMI.

References:
    Hodgdon & Beckett (1984). Prediction of percent body fat for U.S. Navy
        men and women from body circumferences and height. Naval Health
        Research Center Reports 84-11 and 84-29.
    WHO (2000). Obesity: preventing and managing the global epidemic.
        Technical Report Series 894.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from forge_engine.math.targets import round_half_up
from forge_engine.models.enums import (
    BODY_FAT_FALLBACK_PCT,
    DEFAULT_FEMALE_HIP_CM,
    NAVY_FEMALE_HEIGHT_COEF,
    NAVY_FEMALE_INTERCEPT,
    NAVY_FEMALE_WAIST_HIP_NECK_COEF,
    NAVY_MALE_HEIGHT_COEF,
    NAVY_MALE_INTERCEPT,
    NAVY_MALE_WAIST_NECK_COEF,
    Gender,
)
from forge_engine.models.profile import BodyComposition, UserProfile


@dataclass(frozen=True)
class BodyFatEstimate:
    """Result of a Navy-method estimate.

    Exactly one of ``value`` / ``reason`` is set. Use ``or_default()`` to
    obtain a number that is always finite and positive.

    Attributes:
        value: Body-fat percentage, or None when the inputs were invalid.
        reason: Why the estimate is invalid, or None.
        used_default_hips: True when a female estimate fell back to the
            DEFAULT_FEMALE_HIP_CM approximation.
    """

    value: float | None = None
    reason: str | None = None
    used_default_hips: bool = False

    @property
    def is_valid(self) -> bool:
        return self.value is not None

    def or_default(self, default: float = BODY_FAT_FALLBACK_PCT) -> float:
        """Return the estimate, or *default* if it is invalid."""
        if self.value is None:
            return default
        return self.value


def _invalid(reason: str, used_default_hips: bool = False) -> BodyFatEstimate:
    return BodyFatEstimate(reason=reason, used_default_hips=used_default_hips)


def estimate_body_fat(
    gender: Gender,
    height_cm: float,
    waist_cm: float,
    neck_cm: float,
    hip_cm: float | None = None,
) -> BodyFatEstimate:
    """Estimate body-fat percentage with the U.S. Navy circumference method.

    Men (and OTHER):
        %BF = 86.010 * log10(waist - neck) - 70.041 * log10(height) + 36.76
    Women:
        %BF = 163.205 * log10(waist + hip - neck) - 97.684 * log10(height) - 78.387

    OTHER takes the hip-free formula, not the female one with
    default hips, because only female profiles carry a hip measurement.

    Never raises: non-positive measurements, a non-positive log argument
    or a non-finite / non-positive result all yield an invalid estimate.

    Args:
        gender: Selects the formula.
        height_cm: Standing height.
        waist_cm: Waist circumference at the navel.
        neck_cm: Neck circumference.
        hip_cm: Hip circumference, used only for women. A missing value
            falls back to DEFAULT_FEMALE_HIP_CM.

    Returns:
        A BodyFatEstimate.
    """
    for label, measurement in (("height", height_cm), ("waist", waist_cm), ("neck", neck_cm)):
        if not _is_positive(measurement):
            return _invalid(f"{label} must be positive, got {measurement}")

    if gender == Gender.FEMALE:
        used_default = hip_cm is None
        hips = DEFAULT_FEMALE_HIP_CM if hip_cm is None else hip_cm
        if not _is_positive(hips):
            return _invalid(f"hips must be positive, got {hips}", used_default)
        log_arg = waist_cm + hips - neck_cm
        if log_arg <= 0:
            return _invalid("waist + hips - neck must be positive", used_default)
        value = (
            NAVY_FEMALE_WAIST_HIP_NECK_COEF * math.log10(log_arg)
            - NAVY_FEMALE_HEIGHT_COEF * math.log10(height_cm)
            - NAVY_FEMALE_INTERCEPT
        )
    else:
        used_default = False
        log_arg = waist_cm - neck_cm
        if log_arg <= 0:
            return _invalid("waist - neck must be positive")
        value = (
            NAVY_MALE_WAIST_NECK_COEF * math.log10(log_arg)
            - NAVY_MALE_HEIGHT_COEF * math.log10(height_cm)
            + NAVY_MALE_INTERCEPT
        )

    if not math.isfinite(value) or value <= 0:
        return _invalid(f"estimate out of range: {value}", used_default)
    return BodyFatEstimate(value=value, used_default_hips=used_default)


def estimate_bmi(weight_kg: float, height_cm: float) -> float:
    """Body-mass index, weight / height_m², rounded to one decimal.

    Returns 0.0 when weight or height is not a positive number.
    """
    if not _is_positive(weight_kg) or not _is_positive(height_cm):
        return 0.0
    height_m = height_cm / 100.0
    return round_half_up(weight_kg / (height_m * height_m), 1)


def refresh_composition(profile: UserProfile) -> BodyComposition:
    """Recompute BMI and body fat from the profile's current measurements.

    Body fat falls back to BODY_FAT_FALLBACK_PCT when the measurements
    cannot produce a valid estimate. Hips are kept only for women.
    """
    comp = profile.current_composition
    hip_cm = comp.hip_cm if profile.is_female else None
    estimate = estimate_body_fat(
        profile.gender,
        profile.height_cm,
        comp.waist_cm,
        comp.neck_cm,
        hip_cm,
    )
    return BodyComposition(
        bmi=estimate_bmi(profile.weight_kg, profile.height_cm),
        body_fat_pct=round_half_up(estimate.or_default(), 1),
        waist_cm=comp.waist_cm,
        neck_cm=comp.neck_cm,
        hip_cm=hip_cm,
        chest_cm=comp.chest_cm,
        arm_cm=comp.arm_cm,
    )


def _is_positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0
