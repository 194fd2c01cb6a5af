"""Fixtures for forge_app tests: a scripted generator, a movable clock and a tmp store."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

import pytest

from forge_app.generator import PlanGenerator
from forge_app.orchestrator import PlanOrchestrator
from forge_app.store import ForgeStore
from forge_engine.models.plan import Exercise
from forge_engine.models.profile import UserProfile
from forge_engine.models.progress import ProgressEntry
from forge_engine.serialization.forge_json import exercise_to_dict


class ScriptedGenerator(PlanGenerator):
    """Returns queued payloads, then repeats the last one.

    Records every call so tests can check what was requested.
    """

    def __init__(self, payloads: Sequence[Any], alternatives: dict[str, Any] | None = None):
        self.payloads = list(payloads)
        self.alternatives = alternatives or {}
        self.calls: list[int] = []
        self.alternative_calls: list[str] = []

    def generate(
        self,
        profile: UserProfile,
        week_number: int,
        history: Sequence[ProgressEntry],
    ) -> dict[str, Any]:
        self.calls.append(week_number)
        if len(self.payloads) > 1:
            return self.payloads.pop(0)
        return self.payloads[0]

    def alternative_exercise(self, exercise: Exercise, profile: UserProfile) -> dict[str, Any]:
        self.alternative_calls.append(exercise.name)
        return self.alternatives.get(exercise.name, exercise_to_dict(exercise))


class MovableClock:
    """Callable clock whose time tests can set."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> MovableClock:
    """Starts Wednesday 2024-01-03 09:00."""
    return MovableClock(datetime(2024, 1, 3, 9, 0))


@pytest.fixture
def generator(plan_payload) -> ScriptedGenerator:
    return ScriptedGenerator(
        [plan_payload],
        alternatives={
            "Main 3A": {"name": "Dumbbell Press", "sets": 3, "reps": "8-10", "rest": "90s"},
        },
    )


@pytest.fixture
def store(tmp_path) -> ForgeStore:
    return ForgeStore(tmp_path / "data")


@pytest.fixture
def orchestrator(generator, store, clock) -> PlanOrchestrator:
    return PlanOrchestrator(generator, store, user_id="athlete", clock=clock)


@pytest.fixture
def generator_factory():
    """The ScriptedGenerator class, for tests that script their own payloads."""
    return ScriptedGenerator
