"""Linear charging time and energy estimate."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import settings
from .errors import InvalidChargeTarget


@dataclass(frozen=True, slots=True)
class ChargeEstimate:
    minutes: float
    energy_kwh: float


def estimate_charge(
    current_soc_pct: float,
    target_soc_pct: float,
    capacity_kwh: float,
    charger_power_kw: float,
    vehicle_max_power_kw: float,
    *,
    min_minutes: float | None = None,
) -> ChargeEstimate:
    """Estimate dwell time and energy to charge from ``current_soc_pct`` to ``target_soc_pct``.

    Charging power is the lower of the charger and vehicle ratings and is
    assumed constant over the session. The result never drops below the
    minimum dwell time. Pricing is left to the caller.
    """

    energy_kwh = capacity_kwh * (target_soc_pct - current_soc_pct) / 100.0
    if energy_kwh < 0:
        raise InvalidChargeTarget(
            f"Target SOC {target_soc_pct:.1f}% is below current SOC {current_soc_pct:.1f}%."
        )
    power_kw = min(charger_power_kw, vehicle_max_power_kw)
    if power_kw <= 0:
        raise InvalidChargeTarget(f"No charging power available (charger {charger_power_kw} kW).")

    floor = settings.min_charging_minutes if min_minutes is None else min_minutes
    minutes = (energy_kwh / power_kw) * 60.0
    return ChargeEstimate(minutes=max(floor, minutes), energy_kwh=energy_kwh)
