from __future__ import annotations

import io

import pytest

from thermocharge.config import SimConfig
from thermocharge.regulator.acclimation import AcclimationProcess
from thermocharge.regulator.charging import ChargingProcess
from thermocharge.regulator.interfaces import ProcessExhaustedError, UnreachableModeError
from thermocharge.regulator.reading import Mode, Reading
from thermocharge.runtime.controller import Controller, classify
from thermocharge.runtime.reporting import ConsoleReporter
from thermocharge.runtime.sources import FixedReadingSource


def _config(sequences: int = 1, max_steps: int = 100_000, seed: int = 0) -> SimConfig:
    return SimConfig.from_args(
        name="controller",
        sequences=sequences,
        max_steps=max_steps,
        seed=seed,
        out_dir=None,
        log_level="WARNING",
    )


@pytest.mark.parametrize(
    "temperature, charge, expected",
    [
        (10.0, 50.0, Mode.HEATING),
        (25.0, 50.0, Mode.COOLING),
        (19.0, 50.0, Mode.FINISH),
        (18.0, 50.0, Mode.FINISH),
        (20.0, 50.0, Mode.FINISH),
        (25.0, 20.0, Mode.CHARGING),
        (10.0, 5.0, Mode.CHARGING),
        (19.0, 0.0, Mode.CHARGING),
    ],
)
def test_classify(temperature, charge, expected):
    assert classify(temperature, charge) is expected


def test_start_adopts_first_cooling_step():
    controller = Controller(_config(), source=FixedReadingSource(25.0, 50.0))
    assert controller.mode is Mode.START

    r = controller.step()

    assert r.mode is Mode.COOLING
    assert r.temperature == pytest.approx(24.9)
    assert r.battery_charge == pytest.approx(49.2)
    assert isinstance(controller.process, AcclimationProcess)
    assert controller.process.steps == 1


def test_start_adopts_first_heating_step():
    controller = Controller(_config(), source=FixedReadingSource(10.0, 50.0))

    r = controller.step()

    assert r.mode is Mode.HEATING
    assert r.temperature == pytest.approx(10.1)
    assert r.battery_charge == pytest.approx(49.2)

    r = controller.step()

    assert r.mode is Mode.HEATING
    assert r.temperature == pytest.approx(10.2)
    assert r.battery_charge == pytest.approx(48.4)
    assert controller.process.steps == 2


def test_start_keeps_finish_classification():
    controller = Controller(_config(), source=FixedReadingSource(19.0, 50.0))

    r = controller.step()

    assert r == Reading(temperature=19.0, battery_charge=50.0, mode=Mode.FINISH)
    assert controller.process.exhausted


def test_cooling_scenario_hands_over_to_charging():
    """
    25 degrees / 50 %: START adopts the first cooling step, then one step per
    dispatch until charge drops below the floor after 38 steps, then CHARGING.
    """
    controller = Controller(_config(), source=FixedReadingSource(25.0, 50.0))
    controller.step()

    previous = controller.reading
    cooling_steps = 0
    while controller.mode is Mode.COOLING:
        process = controller.process
        assert process is not None and not process.exhausted
        r = controller.step()
        if r.mode is Mode.COOLING:
            cooling_steps += 1
            assert r.temperature == pytest.approx(previous.temperature - 0.1)
            assert r.battery_charge == pytest.approx(previous.battery_charge - 0.8)
        previous = r

    assert cooling_steps == 37
    assert controller.mode is Mode.CHARGING
    assert controller.process.exhausted
    assert controller.reading.battery_charge == pytest.approx(19.6)
    assert controller.reading.temperature == pytest.approx(21.2)


def test_low_battery_start_goes_straight_to_charging():
    """15 degrees / 10 %: CHARGING right away, values untouched by acclimation."""
    controller = Controller(_config(), source=FixedReadingSource(15.0, 10.0))

    controller.step()

    assert controller.mode is Mode.CHARGING
    assert controller.reading.temperature == 15.0
    assert controller.reading.battery_charge == 10.0
    assert controller.process.steps == 1
    assert controller.process.exhausted

    controller.step()

    # 850 charging iterations leave the device at 23.5 degrees: cooling next
    assert controller.mode is Mode.COOLING
    assert controller.reading.temperature == pytest.approx(23.5)
    assert controller.reading.battery_charge >= 94.9


def test_charging_then_heating_adopts_first_heating_step():
    start = Reading(temperature=5.0, battery_charge=50.0, mode=Mode.CHARGING)
    charged = ChargingProcess(start).resume()
    controller = Controller(_config(), source=FixedReadingSource(5.0, 50.0), reading=start)

    r = controller.step()

    assert charged.temperature < 18.0
    assert r.mode is Mode.HEATING
    assert r.temperature == pytest.approx(charged.temperature + 0.1)
    assert r.battery_charge == pytest.approx(charged.battery_charge - 0.8)
    assert isinstance(controller.process, AcclimationProcess)
    assert controller.process.steps == 1


def test_charging_then_cooling_keeps_charged_reading():
    """The fresh acclimation process takes its first step but its Reading is not adopted."""
    start = Reading(temperature=30.0, battery_charge=50.0, mode=Mode.CHARGING)
    charged = ChargingProcess(start).resume()
    controller = Controller(_config(), reading=start)

    r = controller.step()

    assert r.mode is Mode.COOLING
    assert r.temperature == charged.temperature
    assert r.battery_charge == charged.battery_charge
    assert controller.process.steps == 1

    r = controller.step()
    assert r.mode is Mode.COOLING
    assert r.temperature == pytest.approx(charged.temperature - 0.2)
    assert r.battery_charge == pytest.approx(charged.battery_charge - 1.6)


def test_charging_in_band_finishes():
    start = Reading(temperature=19.0, battery_charge=90.0, mode=Mode.CHARGING)
    controller = Controller(_config(), reading=start)

    r = controller.step()

    assert r.mode is Mode.FINISH
    assert r.temperature == pytest.approx(19.5)
    assert controller.process is None


def test_finish_returns_to_start_keeping_values():
    start = Reading(temperature=19.0, battery_charge=60.0, mode=Mode.FINISH)
    controller = Controller(_config(sequences=2), reading=start)

    r = controller.step()

    assert r == Reading(temperature=19.0, battery_charge=60.0, mode=Mode.START)
    assert controller.completed_sequences == 1


def test_start_after_last_sequence_enters_standby():
    controller = Controller(_config(sequences=1), source=FixedReadingSource(19.0, 50.0))

    assert controller.step().mode is Mode.FINISH
    assert controller.step().mode is Mode.START
    assert controller.step().mode is Mode.STANDBY

    # Standby dispatch is a no-op
    steps = controller.steps
    assert controller.step().mode is Mode.STANDBY
    assert controller.steps == steps


def test_zero_sequences_goes_straight_to_standby():
    result = Controller(_config(sequences=0)).run()

    assert result.metrics.total_steps == 1
    assert result.metrics.sequences == 0
    assert result.metrics.final_mode == "STANDBY"
    assert result.sequences == []


def test_acclimation_mode_without_process_is_an_error():
    controller = Controller(
        _config(),
        reading=Reading(temperature=25.0, battery_charge=50.0, mode=Mode.COOLING),
    )
    with pytest.raises(ProcessExhaustedError):
        controller.step()


def test_unknown_mode_is_unreachable():
    controller = Controller(
        _config(),
        reading=Reading(temperature=25.0, battery_charge=50.0, mode="bogus"),
    )
    with pytest.raises(UnreachableModeError) as excinfo:
        controller.step()
    assert excinfo.value.mode == "bogus"


def test_process_exhaustion_checked_before_every_resume():
    """Drive full runs step by step; COOLING/HEATING always has a live process."""
    for seed in range(10):
        controller = Controller(_config(sequences=2, seed=seed))
        while controller.mode is not Mode.STANDBY:
            if controller.mode in (Mode.COOLING, Mode.HEATING):
                assert controller.process is not None
                assert not controller.process.exhausted
            controller.step()
            assert controller.steps < 100_000


@pytest.mark.parametrize("seed", range(20))
def test_random_runs_complete(seed):
    result = Controller(_config(sequences=3, seed=seed)).run()

    assert not result.metrics.truncated
    assert result.metrics.final_mode == "STANDBY"
    assert result.metrics.sequences == 3
    assert [s.sequence for s in result.sequences] == [1, 2, 3]
    for summary in result.sequences:
        assert summary.completed
        # Every sequence ends in band with charge above the floor
        assert 18.0 <= summary.final_temperature <= 20.0
        assert summary.final_battery_charge > 20.0


def test_run_records_every_adopted_reading():
    result = Controller(_config(), source=FixedReadingSource(25.0, 50.0)).run()

    modes = [s.mode for s in result.samples]
    assert modes[0] == "COOLING"
    assert modes[1:38] == ["COOLING"] * 37
    assert modes[38] == "CHARGING"
    assert modes[-3:] == ["FINISH", "START", "STANDBY"]
    assert result.metrics.charge_cycles >= 1
    assert result.sequences[0].initial_mode == "COOLING"
    assert result.sequences[0].start_temperature == 25.0
    assert result.sequences[0].charge_cycles == result.metrics.charge_cycles


def test_run_truncates_at_max_steps():
    controller = Controller(_config(sequences=5, max_steps=10), source=FixedReadingSource(25.0, 50.0))

    result = controller.run()

    assert result.metrics.truncated
    assert result.metrics.total_steps == 10
    assert result.metrics.final_mode == "STANDBY"
    assert len(result.sequences) == 1
    assert not result.sequences[0].completed
    assert controller.process is None


def test_console_reporter_lines_for_cooling_sequence():
    stream = io.StringIO()
    controller = Controller(
        _config(),
        source=FixedReadingSource(25.0, 50.0),
        reporter=ConsoleReporter(stream),
    )

    controller.run()

    lines = stream.getvalue().splitlines()
    assert lines[0] == "Start a new sequence"
    assert lines[1] == "The actual temperature is 25.000000. Cooling at 50.000000% of battery."
    assert lines[2].startswith("The actual temperature is 21.2")
    assert " Start charging at " in lines[2]
    assert " Finish charging at " in lines[3]
    assert "Finish at" in lines[-1]
