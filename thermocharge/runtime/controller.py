"""
Regulator Controller for thermocharge.

This module provides the Controller class, the top-level state machine of
the regulator. It owns:
- The single live Reading
- At most one active process handle (acclimation or charging)
- The dispatch loop over Mode, which ends at STANDBY

Architecture:
```
    Controller (mode dispatch)
        |
        +-- InitialReadingSource
        |   |-- draws (temperature, battery_charge) at START
        |
        +-- AcclimationProcess (resumed on COOLING/HEATING)
        |   |-- one Reading per resume
        |
        +-- ChargingProcess (run on CHARGING)
        |   |-- one terminal Reading
        |
        +-- Reporter
        |   |-- status lines at each observed transition
        |
        v
    RunResult:
        |-- RunMetrics (timing, counts)
        |-- TransitionSample[] (adopted Readings)
        |-- SequenceSummary[] (per Start -> Finish)
```

Example usage:
    >>> from thermocharge.config import SimConfig
    >>> from thermocharge.runtime.controller import Controller
    >>> from thermocharge.runtime.sources import FixedReadingSource
    >>>
    >>> config = SimConfig.from_args(
    ...     name="example", sequences=1, max_steps=10_000, seed=0, out_dir=None
    ... )
    >>> controller = Controller(config, source=FixedReadingSource(25.0, 50.0))
    >>> result = controller.run()
    >>> print(f"Ran {result.metrics.total_steps} steps")
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config import DEFAULT_PARAMS, RegulatorParams, SimConfig
from ..regulator.acclimation import AcclimationProcess
from ..regulator.charging import ChargingProcess
from ..regulator.interfaces import (
    InitialReadingSource,
    Process,
    ProcessExhaustedError,
    Reporter,
    UnreachableModeError,
)
from ..regulator.reading import Mode, Reading
from .interfaces import RunMetrics, RunResult, SequenceSummary, TransitionSample
from .reporting import NullReporter
from .sources import RandomReadingSource

logger = logging.getLogger(__name__)


def classify(
    temperature: float,
    battery_charge: float,
    params: RegulatorParams | None = None,
) -> Mode:
    """
    Pick the starting mode for a freshly drawn reading.

    Args:
        temperature: Drawn temperature
        battery_charge: Drawn battery charge (%)
        params: Regulator thresholds (uses defaults if None)

    Returns:
        HEATING or COOLING when out of band with charge to spare, FINISH when
        in band with charge to spare, otherwise CHARGING
    """
    p = params or DEFAULT_PARAMS
    if temperature < p.band_low and battery_charge > p.charge_floor:
        return Mode.HEATING
    if temperature > p.band_high and battery_charge > p.charge_floor:
        return Mode.COOLING
    if battery_charge > p.charge_floor:
        return Mode.FINISH
    return Mode.CHARGING


class Controller:
    """
    Mode-driven controller for the regulator simulation.

    Each call to step() dispatches the current mode once:
    - START: draw a Reading, classify it, bind a new AcclimationProcess and
      adopt its first step under the classified mode
    - COOLING / HEATING: resume the bound process and adopt its Reading
    - CHARGING: run a ChargingProcess, then choose heating, cooling or finish
    - FINISH: report and go back to START
    - STANDBY: nothing left to do

    The controller replaces its live Reading wholesale with whatever the
    last process produced; processes never share a Reading.

    Attributes:
        _cfg: Simulation configuration (name, sequences, step bound, seed).
        _source: Supplies starting readings at START.
        _reporter: Receives status lines.
        _params: Regulator thresholds.
        _process: Active process handle, if any.
    """

    def __init__(
        self,
        config: SimConfig,
        source: Optional[InitialReadingSource] = None,
        reporter: Optional[Reporter] = None,
        params: Optional[RegulatorParams] = None,
        reading: Optional[Reading] = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            config: Simulation configuration
            source: Initial reading source (seeded RandomReadingSource if None)
            reporter: Status reporter (NullReporter if None)
            params: Regulator thresholds (uses defaults if None)
            reading: Initial live Reading (a START Reading if None)
        """
        self._cfg = config
        self._source = source if source is not None else RandomReadingSource(config.seed)
        self._reporter = reporter if reporter is not None else NullReporter()
        self._params = params or DEFAULT_PARAMS

        if reading is None:
            reading = Reading(temperature=0.0, battery_charge=0.0, mode=Mode.START)
        self._reading = reading
        self._process: Optional[Process] = None

        self._handlers: dict[Mode, Callable[[], None]] = {
            Mode.START: self._on_start,
            Mode.COOLING: self._on_acclimate,
            Mode.HEATING: self._on_acclimate,
            Mode.CHARGING: self._on_charging,
            Mode.FINISH: self._on_finish,
        }

        # Run bookkeeping
        self._steps = 0
        self._sequence = 0
        self._completed = 0
        self._charge_cycles = 0
        self._samples: list[TransitionSample] = []
        self._summaries: list[SequenceSummary] = []
        self._seq_start: Optional[Reading] = None
        self._seq_first_step = 0
        self._seq_charge_cycles = 0

    @property
    def reading(self) -> Reading:
        """The live Reading."""
        return self._reading

    @property
    def mode(self) -> Mode:
        return self._reading.mode

    @property
    def process(self) -> Optional[Process]:
        """The active process handle, if any."""
        return self._process

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def completed_sequences(self) -> int:
        return self._completed

    def step(self) -> Reading:
        """
        Dispatch the current mode once.

        Returns:
            The live Reading after the dispatch

        Raises:
            UnreachableModeError: if the live Reading carries an unknown mode
            ProcessExhaustedError: if COOLING/HEATING has no resumable process
        """
        mode = self._reading.mode
        if mode is Mode.STANDBY:
            return self._reading

        handler = self._handlers.get(mode)
        if handler is None:
            raise UnreachableModeError(mode)

        self._steps += 1
        handler()
        return self._reading

    def run(self) -> RunResult:
        """
        Dispatch until STANDBY.

        The run stops after config.sequences completed sequences, or when
        config.max_steps dispatches have been made (truncated run).

        Returns:
            RunResult with metrics, adopted samples and sequence summaries
        """
        start_time = datetime.now(timezone.utc).isoformat()
        truncated = False

        while self._reading.mode is not Mode.STANDBY:
            if self._steps >= self._cfg.max_steps:
                truncated = True
                logger.warning(
                    "step limit reached, stopping run",
                    extra={"step": self._steps, "mode": self._reading.mode.name},
                )
                self._close_sequence(completed=False)
                self._process = None
                self._adopt(replace(self._reading, mode=Mode.STANDBY))
                break
            self.step()

        finish_time = datetime.now(timezone.utc).isoformat()
        metrics = RunMetrics(
            scenario_name=self._cfg.name,
            seed=self._cfg.seed,
            sequences=self._sequence,
            total_steps=self._steps,
            charge_cycles=self._charge_cycles,
            final_mode=self._reading.mode.name,
            truncated=truncated,
            start_time=start_time,
            finish_time=finish_time,
        )
        logger.info(
            "run finished",
            extra={"sequence": self._sequence, "step": self._steps},
        )

        return RunResult(
            metrics=metrics,
            samples=list(self._samples),
            sequences=list(self._summaries),
        )

    # ─────────────────────────────────────────────────────────────────
    # Mode handlers
    # ─────────────────────────────────────────────────────────────────

    def _on_start(self) -> None:
        if self._completed >= self._cfg.sequences:
            self._process = None
            self._adopt(replace(self._reading, mode=Mode.STANDBY))
            return

        self._sequence += 1
        self._reporter.sequence_started(self._sequence)

        temperature, battery_charge = self._source.draw()
        mode = classify(temperature, battery_charge, self._params)
        reading = Reading(temperature=temperature, battery_charge=battery_charge, mode=mode)
        if mode in (Mode.HEATING, Mode.COOLING):
            self._reporter.status(reading)

        self._seq_start = reading
        self._seq_first_step = self._steps
        self._seq_charge_cycles = 0

        # Values of the first step, mode of the classification
        first = self._start_acclimation(reading)
        self._adopt(replace(first, mode=mode))

    def _on_acclimate(self) -> None:
        process = self._process
        if process is None or process.exhausted:
            raise ProcessExhaustedError(
                f"no resumable acclimation process in mode {self._reading.mode.name}"
            )
        self._adopt(process.resume())

    def _on_charging(self) -> None:
        p = self._params
        self._reporter.status(self._reading, prefix="Start")

        charger = ChargingProcess(self._reading, p)
        self._process = charger
        self._charge_cycles += 1
        self._seq_charge_cycles += 1
        self._adopt(charger.resume())
        logger.debug(
            "charging finished",
            extra={"iterations": charger.iterations, "battery_charge": self._reading.battery_charge},
        )
        self._reporter.status(self._reading, prefix="Finish", mode=Mode.CHARGING)

        temperature = self._reading.temperature
        if temperature < p.band_low:
            first = self._start_acclimation(self._reading)
            self._adopt(replace(first, mode=Mode.HEATING))
            self._reporter.status(self._reading)
        elif temperature > p.band_high:
            # The new process's first Reading is not adopted here, only the mode
            self._start_acclimation(self._reading)
            self._adopt(replace(self._reading, mode=Mode.COOLING))
            self._reporter.status(self._reading)
        else:
            self._process = None
            self._adopt(replace(self._reading, mode=Mode.FINISH))

    def _on_finish(self) -> None:
        self._reporter.status(self._reading)
        self._close_sequence(completed=True)
        self._completed += 1
        self._process = None
        # Values are kept; START draws fresh ones
        self._adopt(replace(self._reading, mode=Mode.START))

    def _start_acclimation(self, reading: Reading) -> Reading:
        """Bind a new AcclimationProcess and run it to its first suspension point."""
        process = AcclimationProcess(reading, self._params)
        self._process = process
        return process.resume()

    # ─────────────────────────────────────────────────────────────────
    # Bookkeeping
    # ─────────────────────────────────────────────────────────────────

    def _adopt(self, reading: Reading) -> None:
        self._reading = reading
        self._samples.append(
            TransitionSample(
                step=self._steps,
                sequence=self._sequence,
                mode=reading.mode.name,
                temperature=reading.temperature,
                battery_charge=reading.battery_charge,
            )
        )
        logger.debug(
            "adopted reading",
            extra={
                "sequence": self._sequence,
                "step": self._steps,
                "mode": reading.mode.name,
                "temperature": reading.temperature,
                "battery_charge": reading.battery_charge,
            },
        )

    def _close_sequence(self, *, completed: bool) -> None:
        start = self._seq_start
        if start is None:
            return
        self._summaries.append(
            SequenceSummary(
                sequence=self._sequence,
                initial_mode=start.mode.name,
                start_temperature=start.temperature,
                start_battery_charge=start.battery_charge,
                final_temperature=self._reading.temperature,
                final_battery_charge=self._reading.battery_charge,
                steps=self._steps - self._seq_first_step,
                charge_cycles=self._seq_charge_cycles,
                completed=completed,
            )
        )
        self._seq_start = None
