"""Weekly check-in records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Measurements:
    """Circumferences logged at a check-in (cm). Any may be omitted."""

    waist_cm: float | None = None
    neck_cm: float | None = None
    hip_cm: float | None = None
    chest_cm: float | None = None
    arm_cm: float | None = None


@dataclass(frozen=True)
class ProgressEntry:
    """A single weekly check-in."""

    entry_date: date
    week_number: int
    weight_kg: float
    body_fat_pct: float | None = None
    measurements: Measurements = field(default_factory=Measurements)
