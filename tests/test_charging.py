import pytest

from src.evplanner.services.planning.charging import estimate_charge
from src.evplanner.services.planning.errors import InvalidChargeTarget, PlanningError


def test_estimate_uses_lower_of_charger_and_vehicle_power():
    estimate = estimate_charge(20.0, 80.0, 75.0, 350.0, 100.0)

    assert estimate.energy_kwh == pytest.approx(45.0)
    assert estimate.minutes == pytest.approx(27.0)


def test_estimate_clamps_to_minimum_dwell():
    estimate = estimate_charge(70.0, 75.0, 75.0, 150.0, 150.0)

    assert estimate.energy_kwh == pytest.approx(3.75)
    assert estimate.minutes == 15.0


def test_estimate_respects_custom_minimum():
    estimate = estimate_charge(70.0, 75.0, 75.0, 150.0, 150.0, min_minutes=5.0)

    assert estimate.minutes == pytest.approx(5.0)


def test_zero_energy_still_takes_minimum_dwell():
    estimate = estimate_charge(50.0, 50.0, 60.0, 50.0, 50.0)

    assert estimate.energy_kwh == 0.0
    assert estimate.minutes == 15.0


def test_estimate_rejects_decrease():
    with pytest.raises(InvalidChargeTarget):
        estimate_charge(80.0, 60.0, 75.0, 150.0, 150.0)


def test_estimate_rejects_zero_power():
    with pytest.raises(PlanningError):
        estimate_charge(10.0, 60.0, 75.0, 0.0, 150.0)
