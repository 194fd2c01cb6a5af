"""Exceptions raised by the forge engine core."""

from __future__ import annotations


class ForgeEngineError(Exception):
    """Base exception for all forge_engine errors."""


class MalformedPlanError(ForgeEngineError):
    """A plan does not have the shape the engine guarantees (7 well-formed days).

    Callers should treat the plan as not yet generated and request a new one.
    """
