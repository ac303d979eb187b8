from __future__ import annotations

import sys
from typing import TextIO

from thermocharge.regulator.reading import MODE_LABELS, Mode, Reading


def format_status(reading: Reading, *, prefix: str = "", mode: Mode | None = None) -> str:
    """
    Render a status line for a reading.

    Example:
        >>> format_status(Reading(25.0, 50.0, Mode.COOLING))
        'The actual temperature is 25.000000. Cooling at 50.000000% of battery.'
    """
    label = MODE_LABELS[mode if mode is not None else reading.mode]
    if prefix:
        label = f"{prefix} {label}"
    return (
        f"The actual temperature is {reading.temperature:.6f}. "
        f"{label} at {reading.battery_charge:.6f}% of battery."
    )


class ConsoleReporter:
    """Prints status lines to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream if self._stream is not None else sys.stdout)

    def sequence_started(self, index: int) -> None:
        self._write("Start a new sequence")

    def status(self, reading: Reading, *, prefix: str = "", mode: Mode | None = None) -> None:
        self._write(format_status(reading, prefix=prefix, mode=mode))


class NullReporter:
    """Discards all reports."""

    def sequence_started(self, index: int) -> None:
        pass

    def status(self, reading: Reading, *, prefix: str = "", mode: Mode | None = None) -> None:
        pass
