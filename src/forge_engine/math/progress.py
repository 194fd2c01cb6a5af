"""Progress-history math: check-in upserts, weight smoothing and trend.

References:
    Hall et al. (2011). Quantification of the effect of energy imbalance on
        bodyweight. Lancet 378(9793):826-837. Daily weight noise makes a
        smoothed / regressed trend more reliable than week-to-week deltas.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from forge_engine.models.enums import (
    WEIGHT_EWMA_SPAN,
    WEIGHT_TREND_TOLERANCE_KG,
    ProgressStatus,
)
from forge_engine.models.profile import UserProfile
from forge_engine.models.progress import ProgressEntry


def upsert_progress_entry(
    history: Sequence[ProgressEntry], entry: ProgressEntry
) -> tuple[ProgressEntry, ...]:
    """Add *entry*, replacing any existing check-in on the same date.

    Returns the history sorted chronologically.
    """
    kept = [e for e in history if e.entry_date != entry.entry_date]
    kept.append(entry)
    return tuple(sorted(kept, key=lambda e: e.entry_date))


def smoothed_weight(
    history: Sequence[ProgressEntry], span: int = WEIGHT_EWMA_SPAN
) -> float | None:
    """Most recent EWMA of logged weights, or None with no history."""
    if not history:
        return None
    ordered = sorted(history, key=lambda e: e.entry_date)
    series = pd.Series([e.weight_kg for e in ordered], dtype=np.float64)
    return float(series.ewm(span=span, adjust=False).mean().iloc[-1])


def weekly_weight_trend(history: Sequence[ProgressEntry]) -> float | None:
    """Least-squares weight change in kg per week.

    Returns None with fewer than two distinct check-in dates.
    """
    dates = {e.entry_date for e in history}
    if len(dates) < 2:
        return None
    ordered = sorted(history, key=lambda e: e.entry_date)
    first = ordered[0].entry_date
    weeks = np.array([(e.entry_date - first).days / 7.0 for e in ordered], dtype=np.float64)
    weights = np.array([e.weight_kg for e in ordered], dtype=np.float64)
    slope, _intercept = np.polyfit(weeks, weights, 1)
    return float(slope)


def progress_status(
    history: Sequence[ProgressEntry], profile: UserProfile
) -> ProgressStatus:
    """Classify progress toward the weight target.

    PENDING until a trend exists. ON_TRACK when the latest smoothed weight
    is already within tolerance of the target or the trend moves toward it
    faster than the tolerance; OFF_TRACK otherwise.
    """
    trend = weekly_weight_trend(history)
    current = smoothed_weight(history)
    if trend is None or current is None:
        return ProgressStatus.PENDING

    gap = profile.targets.weight_kg - current
    if abs(gap) <= WEIGHT_TREND_TOLERANCE_KG:
        return ProgressStatus.ON_TRACK
    if abs(trend) >= WEIGHT_TREND_TOLERANCE_KG and np.sign(trend) == np.sign(gap):
        return ProgressStatus.ON_TRACK
    return ProgressStatus.OFF_TRACK
