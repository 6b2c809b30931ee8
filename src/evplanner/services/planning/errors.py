"""Typed planning failures."""

from __future__ import annotations


class PlanningError(ValueError):
    """Base class for failures a caller can react to by relaxing its inputs."""

    code = "planning_error"


class InvalidProfile(PlanningError):
    """Vehicle profile has non-positive capacity/range/efficiency/power or SOC outside [0, 100]."""

    code = "invalid_profile"


class InvalidChargeTarget(PlanningError):
    """A charge was requested that would lower the state of charge."""

    code = "invalid_charge_target"


class Infeasible(PlanningError):
    """No usable charging station was found at some step of the trip."""

    code = "infeasible"


class NoProgress(PlanningError):
    """The planner stopped advancing toward the destination."""

    code = "no_progress"
