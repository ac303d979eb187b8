from __future__ import annotations

import pytest

from thermocharge.regulator.charging import ChargingProcess
from thermocharge.regulator.interfaces import ProcessExhaustedError
from thermocharge.regulator.reading import Mode, Reading


def test_single_iteration_below_target():
    """One iteration: +0.1 %, +0.01 degrees, mode untouched."""
    process = ChargingProcess(Reading(temperature=19.0, battery_charge=94.85, mode=Mode.CHARGING))

    r = process.resume()

    assert process.iterations == 1
    assert r.battery_charge == pytest.approx(94.95)
    assert r.temperature == pytest.approx(19.01)
    assert r.mode is Mode.CHARGING


def test_threshold_comparison_uses_float_arithmetic():
    """
    94.8 + 0.1 evaluates to 94.89999999999999 in binary floating point,
    which is still below 94.9, so a second iteration runs.
    """
    process = ChargingProcess(Reading(temperature=19.0, battery_charge=94.8, mode=Mode.CHARGING))

    r = process.resume()

    assert process.iterations == 2
    assert r.battery_charge == pytest.approx(95.0)
    assert r.battery_charge >= 94.9
    assert r.temperature == pytest.approx(19.02)


def test_already_charged_returns_same_values():
    reading = Reading(temperature=30.0, battery_charge=95.0, mode=Mode.CHARGING)
    process = ChargingProcess(reading)

    r = process.resume()

    assert process.iterations == 0
    assert r == reading


def test_full_charge_from_low_battery():
    """From 10 % the loop runs 850 times; temperature drifts up by 8.5."""
    process = ChargingProcess(Reading(temperature=15.0, battery_charge=10.0, mode=Mode.CHARGING))

    r = process.resume()

    assert process.iterations == 850
    assert r.battery_charge >= 94.9
    assert r.battery_charge < 95.1
    assert r.temperature == pytest.approx(23.5)


def test_mode_is_passed_through():
    process = ChargingProcess(Reading(temperature=15.0, battery_charge=90.0, mode=Mode.COOLING))
    assert process.resume().mode is Mode.COOLING


def test_charging_has_a_single_resumption():
    process = ChargingProcess(Reading(temperature=15.0, battery_charge=90.0, mode=Mode.CHARGING))
    assert not process.exhausted

    process.resume()

    assert process.exhausted
    with pytest.raises(ProcessExhaustedError):
        process.resume()
