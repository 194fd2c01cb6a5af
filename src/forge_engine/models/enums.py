"""Enumerations and body-composition constants for the forge engine.

Thresholds cite their published source where one exists.
"""

from enum import Enum


class Gender(Enum):
    """Biological sex used by the circumference formulas."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class SculptingTargetCategory(Enum):
    """Transformation focus that parameterizes target projection."""

    FAT_LOSS = "Fat Loss & Weight Loss"
    MUSCLE_GAIN = "Muscle Gain (Bulking)"
    RECOMPOSITION = 'Body Recomposition ("Toning")'
    STRENGTH = "Strength Building"
    PERFORMANCE = "Performance Improvement"
    HEALTH_MARKERS = "Improved Health Markers"


class Goal(Enum):
    LEAN = "Getting Lean"
    MUSCLE = "Building Muscle"


class ExperienceLevel(Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class DietPreference(Enum):
    VEG = "Veg"
    NON_VEG = "Non-Veg"
    BOTH = "Both"


class ProgressStatus(Enum):
    """Plan-level progress verdict shown alongside the weekly plan."""

    ON_TRACK = "on-track"
    OFF_TRACK = "off-track"
    PENDING = "pending"


class ExerciseSection(Enum):
    """Exercise lists carried by a workout day, keyed by their JSON name."""

    WARM_UP = "warmUpExercises"
    MAIN = "exercises"
    REHAB = "rehabExercises"
    COOL_DOWN = "coolDownExercises"


# ---------------------------------------------------------------------------
# U.S. Navy circumference method — Hodgdon & Beckett (1984),
# Naval Health Research Center Report 84-29
# ---------------------------------------------------------------------------
NAVY_MALE_WAIST_NECK_COEF = 86.010
NAVY_MALE_HEIGHT_COEF = 70.041
NAVY_MALE_INTERCEPT = 36.76
NAVY_FEMALE_WAIST_HIP_NECK_COEF = 163.205
NAVY_FEMALE_HEIGHT_COEF = 97.684
NAVY_FEMALE_INTERCEPT = 78.387

# Hip approximation when a female profile has no hip measurement. Not a
# clinical substitute.
DEFAULT_FEMALE_HIP_CM = 95.0

# Body-fat value used whenever an estimate is invalid
BODY_FAT_FALLBACK_PCT = 15.0

# ---------------------------------------------------------------------------
# BMI bands — WHO (2000), Technical Report Series 894
# ---------------------------------------------------------------------------
HEALTHY_BMI_LOW = 18.5
HEALTH_MARKERS_TARGET_BMI = 22.0  # Middle of the 18.5-24.9 healthy band
ABSOLUTE_MIN_WEIGHT_KG = 30.0

# ---------------------------------------------------------------------------
# Body-fat floors — ACE (2009) essential/athletic ranges
# Men: essential 2-5%, athletes 6-13%. Women: essential 10-13%, athletes 14-20%.
# ---------------------------------------------------------------------------
SAFE_MIN_BODY_FAT_FEMALE = 18.0
SAFE_MIN_BODY_FAT_MALE = 10.0
MUSCLE_GAIN_BODY_FAT_CEILING = 25.0

# Healthy body-fat ranges targeted by HEALTH_MARKERS (low, high)
HEALTHY_BODY_FAT_RANGE_FEMALE = (20.0, 25.0)
HEALTHY_BODY_FAT_RANGE_MALE = (15.0, 20.0)

# Circumference floors (cm)
MIN_WAIST_CM = 50.0
MIN_HIP_CM = 70.0

# Muscle-gain defaults when chest / arm were never measured (cm)
MUSCLE_GAIN_DEFAULT_CHEST_CM = 105.0
MUSCLE_GAIN_DEFAULT_ARM_CM = 37.0

# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------
DAYS_PER_WEEK = 7
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# ---------------------------------------------------------------------------
# Progress tracking
# ---------------------------------------------------------------------------
WEIGHT_EWMA_SPAN = 3  # ~3 weekly check-ins
# Trend slower than this (kg/week) counts as flat
WEIGHT_TREND_TOLERANCE_KG = 0.1
