from __future__ import annotations

from thermocharge.config import DEFAULT_PARAMS, RegulatorParams
from thermocharge.regulator.interfaces import ProcessExhaustedError
from thermocharge.regulator.reading import Reading


class ChargingProcess:
    """
    Resumable process with a single terminal Reading.

    The one resume() drains the whole charging loop in a tight burst:
    each iteration adds charge_step to the battery and charge_temp_drift to
    the temperature until the charge target is reached. Intermediate values
    are never observable. The mode is passed through unchanged.
    """

    def __init__(self, reading: Reading, params: RegulatorParams | None = None):
        self.params = params or DEFAULT_PARAMS
        self._reading = reading
        self._iterations = 0
        self._done = False

    @property
    def exhausted(self) -> bool:
        return self._done

    @property
    def iterations(self) -> int:
        """Internal charging iterations performed."""
        return self._iterations

    @property
    def reading(self) -> Reading:
        return self._reading

    def resume(self) -> Reading:
        """
        Run the charging loop to completion.

        Returns:
            Final Reading with the battery at or above the charge target

        Raises:
            ProcessExhaustedError: if the process already returned its Reading
        """
        if self._done:
            raise ProcessExhaustedError("charging process already exhausted")

        p = self.params
        temperature = self._reading.temperature
        battery_charge = self._reading.battery_charge
        while battery_charge < p.charge_target:
            battery_charge = battery_charge + p.charge_step
            temperature = temperature + p.charge_temp_drift
            self._iterations += 1

        self._reading = Reading(
            temperature=temperature,
            battery_charge=battery_charge,
            mode=self._reading.mode,
        )
        self._done = True
        return self._reading
