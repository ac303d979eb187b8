from __future__ import annotations

from dataclasses import dataclass

# slots are used to enfore good interface hygiene, disables dynamic attribute creation.

@dataclass(frozen=True, slots=True)
class TransitionSample:
    """
    A Reading adopted by the controller.

    One sample is recorded every time the controller replaces its live
    Reading, so a single dispatch step may record several samples
    (charging adopts the charged Reading and then the follow-up mode).
    """
    step: int               # Controller dispatch step that adopted the Reading
    sequence: int           # Sequence index (1-based, 0 before the first Start)
    mode: str               # Mode name of the adopted Reading
    temperature: float      # Temperature (degrees)
    battery_charge: float   # Battery charge (%)


@dataclass(frozen=True, slots=True)
class SequenceSummary:
    """
    Summary of one Start -> Finish sequence.
    """
    sequence: int
    initial_mode: str               # Classification of the drawn Reading
    start_temperature: float
    start_battery_charge: float
    final_temperature: float
    final_battery_charge: float
    steps: int                      # Dispatch steps spent in the sequence
    charge_cycles: int              # Charging processes run in the sequence
    completed: bool = True          # False if the run stopped mid-sequence


@dataclass(frozen=True, slots=True)
class RunMetrics:
    scenario_name: str
    seed: int
    sequences: int          # Sequences started
    total_steps: int        # Controller dispatch steps
    charge_cycles: int      # Charging processes run
    final_mode: str
    truncated: bool         # True if max_steps stopped the run
    start_time: str
    finish_time: str


@dataclass(frozen=True, slots=True)
class RunResult:
    """
    Complete results from a controller run.

    Attributes:
        metrics: Run-level metadata (timing, counts, scenario name).
        samples: Every Reading the controller adopted, in order.
        sequences: Per-sequence summaries.
    """
    metrics: RunMetrics
    samples: list[TransitionSample]
    sequences: list[SequenceSummary]
