from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """
    Controller state tag carried by every Reading.

    Values keep the original numeric ordering; STANDBY (5) is terminal.
    """
    START = 0
    COOLING = 1
    HEATING = 2
    CHARGING = 3
    FINISH = 4
    STANDBY = 5


MODE_LABELS: dict[Mode, str] = {
    Mode.START: "Start",
    Mode.COOLING: "Cooling",
    Mode.HEATING: "Heating",
    Mode.CHARGING: "charging",
    Mode.FINISH: "Finish",
    Mode.STANDBY: "StandBy",
}


# slots are used to enfore good interface hygiene, disables dynamic attribute creation.
@dataclass(frozen=True, slots=True)
class Reading:
    """
    Snapshot of the regulated device.

    Readings are values: processes never mutate one in place, they build a
    new Reading with dataclasses.replace() and hand it back to the controller.
    """
    temperature: float         # Device temperature (degrees)
    battery_charge: float      # Battery charge (%)
    mode: Mode = Mode.START    # Controller state at the time of the snapshot

    @property
    def label(self) -> str:
        """Display label of the reading's mode."""
        return MODE_LABELS[self.mode]
