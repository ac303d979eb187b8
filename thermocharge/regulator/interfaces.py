from __future__ import annotations

from typing import Protocol

from thermocharge.regulator.reading import Mode, Reading


class ProcessExhaustedError(RuntimeError):
    """Raised when a process handle is resumed after its terminal Reading."""


class UnreachableModeError(RuntimeError):
    """Raised when the controller is asked to dispatch a mode it does not know."""

    def __init__(self, mode: object):
        super().__init__(f"unreachable controller mode: {mode!r}")
        self.mode = mode


class Process(Protocol):
    """
    Protocol for resumable regulator processes.

    A process is bound to one Reading at construction. Each resume() advances
    it to its next suspension point and returns the Reading produced there.
    Once exhausted, a process must not be resumed again.
    """

    @property
    def exhausted(self) -> bool:
        """True once the process has produced its terminal Reading."""
        ...

    def resume(self) -> Reading:
        """
        Advance the process by one step.

        Returns:
            Reading produced at the next suspension point

        Raises:
            ProcessExhaustedError: if the process is already exhausted
        """
        ...


class InitialReadingSource(Protocol):
    """
    Supplies starting (temperature, battery_charge) pairs.
    """

    def draw(self) -> tuple[float, float]:
        ...


class Reporter(Protocol):
    """
    Receives human-facing status updates from the controller.
    """

    def sequence_started(self, index: int) -> None:
        ...

    def status(self, reading: Reading, *, prefix: str = "", mode: Mode | None = None) -> None:
        """
        Report a reading.

        Args:
            reading: Reading to report
            prefix: Optional word placed before the mode label ("Start", "Finish")
            mode: Mode whose label is shown (defaults to reading.mode)
        """
        ...
