"""Greedy charging-stop insertion planner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ...config import settings
from ...models.domain import RoutePoint, Station, VehicleProfile
from ..geospatial import distance_km
from .assembly import build_route_plan
from .candidates import StationFilters, find_reachable
from .charging import estimate_charge
from .errors import Infeasible, InvalidChargeTarget, InvalidProfile, NoProgress, PlanningError
from .models import ChargingStop, PlanningFailure, PlanningOutcome, RoutePlan
from .scoring import ScoringContext, ScoringStrategy, get_strategy
from .state import SimulationState

# Absorbs float error for a station sitting exactly on the range limit.
RANGE_TOLERANCE_KM = 1e-6


@dataclass(slots=True)
class PlannerOptions:
    search_radius_km: float = settings.search_radius_km
    safety_buffer_pct: float = settings.safety_buffer_pct
    max_departure_soc_pct: float = settings.max_departure_soc_pct
    min_charging_minutes: float = settings.min_charging_minutes
    average_speed_kmh: float = settings.average_speed_kmh
    max_iterations: int = settings.max_planning_iterations
    strategy: str = settings.default_strategy
    filters: StationFilters | None = None


def validate_profile(vehicle: VehicleProfile) -> None:
    problems: list[str] = []
    for name in ("battery_capacity_kwh", "max_range_km", "efficiency_km_per_kwh", "max_charging_power_kw"):
        if getattr(vehicle, name) <= 0:
            problems.append(f"{name} must be positive")
    for name in ("current_soc_pct", "target_soc_pct"):
        value = getattr(vehicle, name)
        if not 0.0 <= value <= 100.0:
            problems.append(f"{name} must be within [0, 100], got {value}")
    if problems:
        raise InvalidProfile("Invalid vehicle profile: " + "; ".join(problems) + ".")


def departure_target_pct(remaining_after_stop_km: float, vehicle: VehicleProfile, options: PlannerOptions) -> float:
    """SOC to leave a stop with: the next leg plus the safety buffer, capped below full."""

    next_range = min(vehicle.max_range_km, max(0.0, remaining_after_stop_km))
    wanted = next_range / vehicle.max_range_km * 100.0 + options.safety_buffer_pct
    return min(options.max_departure_soc_pct, wanted)


def _arrival_soc(state: SimulationState, distance: float, vehicle: VehicleProfile) -> float:
    return max(0.0, state.soc_pct - distance / vehicle.max_range_km * 100.0)


def _insert_stop(
    state: SimulationState,
    *,
    catalog: tuple[Station, ...],
    vehicle: VehicleProfile,
    strategy: ScoringStrategy,
    options: PlannerOptions,
) -> SimulationState:
    reachable_km = state.range_km(vehicle.max_range_km) + RANGE_TOLERANCE_KM
    candidates = find_reachable(
        state.position,
        catalog,
        options.search_radius_km,
        max_distance_km=min(state.remaining_km, reachable_km),
        exclude_ids=state.visited_ids,
        filters=options.filters,
    )
    # A stop reached at or above its departure target adds no charge.
    useful = [
        candidate
        for candidate in candidates
        if departure_target_pct(state.remaining_km - candidate.distance_km, vehicle, options)
        > _arrival_soc(state, candidate.distance_km, vehicle)
    ]
    if candidates and not useful:
        logging.info(f"Skipped {len(candidates)} reachable stations where no charge would be gained")
    context = ScoringContext(
        position=state.position,
        soc_pct=state.soc_pct,
        remaining_km=state.remaining_km,
        vehicle=vehicle,
    )
    choice = strategy.select(useful, context)
    if choice is None:
        raise Infeasible(
            f"No available station within {options.search_radius_km:.0f} km and "
            f"{reachable_km:.1f} km of range from ({state.position.latitude:.5f}, "
            f"{state.position.longitude:.5f}) where charging would help; "
            f"{state.remaining_km:.1f} km still to go."
        )

    station = choice.station
    arrival_soc = _arrival_soc(state, choice.distance_km, vehicle)
    departure_soc = departure_target_pct(state.remaining_km - choice.distance_km, vehicle, options)
    if departure_soc <= arrival_soc:
        raise InvalidChargeTarget(
            f"Departure SOC {departure_soc:.1f}% at station {station.id} does not exceed "
            f"arrival SOC {arrival_soc:.1f}%."
        )

    estimate = estimate_charge(
        arrival_soc,
        departure_soc,
        vehicle.battery_capacity_kwh,
        station.power_kw,
        vehicle.max_charging_power_kw,
        min_minutes=options.min_charging_minutes,
    )
    stop = ChargingStop(
        station=station,
        distance_from_previous_km=choice.distance_km,
        arrival_soc_pct=arrival_soc,
        departure_soc_pct=departure_soc,
        charging_minutes=estimate.minutes,
        wait_minutes=float(station.estimated_wait_minutes or 0.0),
        energy_kwh=estimate.energy_kwh,
        cost=estimate.energy_kwh * station.price_per_kwh,
    )
    logging.info(
        f"Stop {state.iteration + 1}: station {station.id} at {choice.distance_km:.1f} km, "
        f"SOC {arrival_soc:.1f}% -> {departure_soc:.1f}%, {estimate.minutes:.0f} min"
    )
    return state.advance(stop)


def plan_route(
    start: RoutePoint,
    end: RoutePoint,
    vehicle: VehicleProfile,
    stations: Iterable[Station],
    options: PlannerOptions | None = None,
) -> RoutePlan:
    """Plan a trip from ``start`` to ``end``, inserting charging stops as needed.

    Raises a ``PlanningError`` subclass when no plan can be produced. The
    station snapshot is read once and never modified.
    """

    options = options or PlannerOptions()
    validate_profile(vehicle)
    strategy = get_strategy(options.strategy)
    catalog = tuple(stations)

    total_distance = distance_km(start.position, end.position)
    energy_needed = total_distance / vehicle.efficiency_km_per_kwh
    state = SimulationState(
        position=start.position,
        soc_pct=vehicle.current_soc_pct,
        remaining_km=total_distance,
    )

    if vehicle.current_energy_kwh < energy_needed:
        while state.needs_charge(vehicle.max_range_km):
            if state.iteration >= options.max_iterations:
                raise NoProgress(
                    f"Gave up after {state.iteration} stops with {state.remaining_km:.1f} km remaining."
                )
            previous_km = state.remaining_km
            state = _insert_stop(state, catalog=catalog, vehicle=vehicle, strategy=strategy, options=options)
            if state.remaining_km >= previous_km:
                raise NoProgress(
                    f"Stop at station {state.stops[-1].station.id} did not shorten the "
                    f"{previous_km:.1f} km still to go."
                )
    else:
        logging.info(f"Direct trip of {total_distance:.1f} km needs {energy_needed:.1f} kWh, no stop required")

    return build_route_plan(
        start=start,
        end=end,
        vehicle=vehicle,
        total_distance_km=total_distance,
        state=state,
        average_speed_kmh=options.average_speed_kmh,
        strategy=strategy.name,
    )


def plan_trip(
    start: RoutePoint,
    end: RoutePoint,
    vehicle: VehicleProfile,
    stations: Iterable[Station],
    options: PlannerOptions | None = None,
) -> PlanningOutcome:
    """Run ``plan_route`` and report planning failures as values."""

    try:
        plan = plan_route(start, end, vehicle, stations, options)
    except PlanningError as exc:
        logging.warning(f"Trip planning failed ({exc.code}): {exc}")
        return PlanningOutcome(failure=PlanningFailure(code=exc.code, message=str(exc)))
    return PlanningOutcome(plan=plan)
