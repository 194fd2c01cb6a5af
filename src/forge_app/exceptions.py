"""Custom exception hierarchy for the forge application layer."""

from __future__ import annotations


class ForgeAppError(Exception):
    """Base exception for all forge_app errors."""


class PlanGenerationError(ForgeAppError):
    """The plan generator failed or kept returning malformed plans."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class NoPlanError(ForgeAppError):
    """An operation needs a generated plan but none is stored."""


class WeekNotCompleteError(ForgeAppError):
    """Advancing was requested before the current week was fully completed."""


class StoreError(ForgeAppError):
    """Reading or writing persisted ForgeData failed."""
