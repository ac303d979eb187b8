from __future__ import annotations

from dataclasses import replace
from enum import Enum

from thermocharge.config import DEFAULT_PARAMS, RegulatorParams
from thermocharge.regulator.interfaces import ProcessExhaustedError
from thermocharge.regulator.reading import Mode, Reading


class AcclimationStep(Enum):
    """Suspension point an AcclimationProcess will resume from."""
    COOLING = "cooling"
    HEATING = "heating"
    SETTLE = "settle"
    DONE = "done"


class AcclimationProcess:
    """
    Resumable process that steers temperature toward the operating band.

    Algorithm (one Reading yielded per step):
    - While above the band with charge to spare: cool by one step, drain charge
    - Then, while below the band with charge to spare: heat by one step, drain charge
    - Finally tag the Reading CHARGING and yield it once more

    If the bound Reading starts at or below the charge floor, the process
    skips both loops and yields the CHARGING Reading immediately.

    The process is lazy: nothing runs until the first resume(). It is finite
    and single-consumer; restarting means constructing a new instance.
    """

    def __init__(self, reading: Reading, params: RegulatorParams | None = None):
        """
        Bind the process to a Reading.

        Args:
            reading: Reading the process starts from
            params: Regulator thresholds (uses defaults if None)
        """
        self.params = params or DEFAULT_PARAMS
        self._reading = reading
        self._steps = 0

        if reading.battery_charge > self.params.charge_floor:
            self._state = AcclimationStep.COOLING
        else:
            self._state = AcclimationStep.SETTLE

    @property
    def exhausted(self) -> bool:
        return self._state is AcclimationStep.DONE

    @property
    def state(self) -> AcclimationStep:
        return self._state

    @property
    def steps(self) -> int:
        """Number of Readings yielded so far."""
        return self._steps

    @property
    def reading(self) -> Reading:
        """Most recent Reading produced (the bound Reading before the first step)."""
        return self._reading

    def resume(self) -> Reading:
        """
        Advance to the next suspension point.

        Returns:
            Reading after one cooling/heating step, or the final CHARGING Reading

        Raises:
            ProcessExhaustedError: if the final Reading was already produced
        """
        if self._state is AcclimationStep.DONE:
            raise ProcessExhaustedError("acclimation process already exhausted")

        p = self.params
        r = self._reading

        if self._state is AcclimationStep.COOLING:
            if r.temperature > p.band_high and r.battery_charge > p.charge_floor:
                return self._emit(
                    temperature=r.temperature - p.acclimate_temp_step,
                    battery_charge=r.battery_charge - p.acclimate_charge_cost,
                    mode=Mode.COOLING,
                )
            self._state = AcclimationStep.HEATING

        if self._state is AcclimationStep.HEATING:
            if r.temperature < p.band_low and r.battery_charge > p.charge_floor:
                return self._emit(
                    temperature=r.temperature + p.acclimate_temp_step,
                    battery_charge=r.battery_charge - p.acclimate_charge_cost,
                    mode=Mode.HEATING,
                )

        # Band reached or charge spent: hand over to charging
        self._state = AcclimationStep.DONE
        return self._emit(mode=Mode.CHARGING)

    def _emit(self, **changes) -> Reading:
        self._reading = replace(self._reading, **changes)
        self._steps += 1
        return self._reading

    def __iter__(self) -> "AcclimationProcess":
        return self

    def __next__(self) -> Reading:
        if self.exhausted:
            raise StopIteration
        return self.resume()
