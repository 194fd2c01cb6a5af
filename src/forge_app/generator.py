"""Plan generator seam: the external service that authors plans.

The generator returns raw JSON payloads; the orchestrator validates them
with ``plan_from_dict`` so a misbehaving generator can never put a
malformed week in front of the alignment engine.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence

from forge_engine.models.plan import Exercise
from forge_engine.models.profile import UserProfile
from forge_engine.models.progress import ProgressEntry
from forge_engine.serialization.forge_json import exercise_to_dict

from forge_app.exceptions import PlanGenerationError

logger = logging.getLogger(__name__)


class PlanGenerator(ABC):
    """Interface of the plan-authoring service.

    Subclasses must define:
        generate(): a full plan payload for a given week
        alternative_exercise(): a replacement for a single exercise
    """

    @abstractmethod
    def generate(
        self,
        profile: UserProfile,
        week_number: int,
        history: Sequence[ProgressEntry],
    ) -> dict[str, Any]:
        """Return a raw plan payload (camelCase plan schema) for *week_number*."""
        ...

    @abstractmethod
    def alternative_exercise(
        self, exercise: Exercise, profile: UserProfile
    ) -> dict[str, Any]:
        """Return a raw exercise payload that can stand in for *exercise*."""
        ...


class FilePlanGenerator(PlanGenerator):
    """Serves pre-authored payloads from a directory.

    Layout:
        week_<n>.json      : plan for week n (falls back to plan.json)
        alternatives.json  : {"<exercise name>": {exercise payload}, ...}

    Used for offline runs and tests in place of the remote service.
    """

    def __init__(self, plan_dir: Path | str) -> None:
        self._plan_dir = Path(plan_dir)

    def generate(
        self,
        profile: UserProfile,
        week_number: int,
        history: Sequence[ProgressEntry],
    ) -> dict[str, Any]:
        for name in (f"week_{week_number}.json", "plan.json"):
            path = self._plan_dir / name
            if path.exists():
                logger.info("Serving week %d plan from %s", week_number, path)
                return self._read(path)
        raise PlanGenerationError(
            f"No plan file for week {week_number} in {self._plan_dir}"
        )

    def alternative_exercise(
        self, exercise: Exercise, profile: UserProfile
    ) -> dict[str, Any]:
        path = self._plan_dir / "alternatives.json"
        alternatives = self._read(path) if path.exists() else {}
        if exercise.name in alternatives:
            return alternatives[exercise.name]
        logger.warning("No alternative for %r, keeping the original", exercise.name)
        return exercise_to_dict(exercise)

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            with open(path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PlanGenerationError(f"Could not read {path}: {exc}") from exc
