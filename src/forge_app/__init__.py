"""Forge application layer — plan generation, persistence and orchestration."""

from forge_app.exceptions import (
    ForgeAppError,
    NoPlanError,
    PlanGenerationError,
    StoreError,
    WeekNotCompleteError,
)
from forge_app.generator import FilePlanGenerator, PlanGenerator
from forge_app.orchestrator import PlanOrchestrator
from forge_app.store import ForgeStore

__all__ = [
    "FilePlanGenerator",
    "ForgeAppError",
    "ForgeStore",
    "NoPlanError",
    "PlanGenerationError",
    "PlanGenerator",
    "PlanOrchestrator",
    "StoreError",
    "WeekNotCompleteError",
]
