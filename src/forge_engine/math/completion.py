"""Workout-completion tracking keyed by calendar date.

The completion map is a plain ``dict[str, bool]`` keyed by ``YYYY-MM-DD``.
Entries are never removed by the engine; a missing key means "not done".
The application layer persists the map and passes it back in; these
functions never mutate it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Mapping

from forge_engine.math.alignment import parse_date_key, to_calendar_date, to_date_key
from forge_engine.models.enums import DAYS_PER_WEEK


def mark_complete(completed: Mapping[str, bool], date_key: str) -> dict[str, bool]:
    """Return a new map with *date_key* marked done. Idempotent.

    Raises:
        ValueError: If date_key is not ``YYYY-MM-DD``.
    """
    parse_date_key(date_key)
    updated = dict(completed)
    updated[date_key] = True
    return updated


def is_day_complete(completed: Mapping[str, bool], date_key: str) -> bool:
    return completed.get(date_key) is True


def week_date_keys(week_start_key: str) -> tuple[str, ...]:
    """The 7 date keys of the week beginning at *week_start_key*."""
    start = parse_date_key(week_start_key)
    return tuple(to_date_key(start + timedelta(days=i)) for i in range(DAYS_PER_WEEK))


def completed_days_in_week(completed: Mapping[str, bool], week_start_key: str) -> int:
    """How many of the week's 7 days are marked done."""
    return sum(1 for key in week_date_keys(week_start_key) if is_day_complete(completed, key))


def is_week_fully_complete(
    completed: Mapping[str, bool],
    week_start_key: str,
    now: date | datetime,
) -> bool:
    """Gate for advancing to the next plan week / weekly check-in.

    True only if the week's last day (start + 6) has been reached and all
    7 days of the week are marked done.
    """
    week_end = parse_date_key(week_start_key) + timedelta(days=DAYS_PER_WEEK - 1)
    if to_calendar_date(now) < week_end:
        return False
    return completed_days_in_week(completed, week_start_key) == DAYS_PER_WEEK


def prune_before(completed: Mapping[str, bool], week_start_key: str) -> dict[str, bool]:
    """Drop entries dated before *week_start_key*.

    For a per-week tracking policy; the default policy keeps every entry.
    Keys compare lexicographically because the format is zero-padded.
    """
    parse_date_key(week_start_key)
    return {key: done for key, done in completed.items() if key >= week_start_key}
