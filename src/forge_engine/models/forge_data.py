"""ForgeData — the persisted aggregate for one user."""

from __future__ import annotations

from dataclasses import dataclass, field

from forge_engine.models.plan import TransformationPlan
from forge_engine.models.profile import UserProfile
from forge_engine.models.progress import ProgressEntry


@dataclass(frozen=True)
class ForgeData:
    """Everything the application persists for a user.

    ``current_week_start_date`` is set to today when a plan is first
    generated and moves forward by exactly 7 days per week refresh.
    ``completed_workouts`` maps YYYY-MM-DD keys to True and is cleared only
    when a brand-new plan replaces the old one.
    """

    profile: UserProfile
    current_week_start_date: str
    plan: TransformationPlan | None = None
    week_number: int = 1
    progress_history: tuple[ProgressEntry, ...] = field(default_factory=tuple)
    completed_workouts: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.week_number < 1:
            raise ValueError(f"week_number must be >= 1, got {self.week_number}")

    @property
    def has_plan(self) -> bool:
        return self.plan is not None
