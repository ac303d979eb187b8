from __future__ import annotations

from thermocharge.regulator.acclimation import AcclimationProcess, AcclimationStep
from thermocharge.regulator.charging import ChargingProcess
from thermocharge.regulator.interfaces import (
    InitialReadingSource,
    Process,
    ProcessExhaustedError,
    Reporter,
    UnreachableModeError,
)
from thermocharge.regulator.reading import MODE_LABELS, Mode, Reading

__all__ = [
    "Mode",
    "MODE_LABELS",
    "Reading",
    "Process",
    "InitialReadingSource",
    "Reporter",
    "ProcessExhaustedError",
    "UnreachableModeError",
    "AcclimationProcess",
    "AcclimationStep",
    "ChargingProcess",
]
