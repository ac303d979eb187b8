from __future__ import annotations

from thermocharge.runtime.controller import Controller, classify
from thermocharge.runtime.interfaces import (
    RunMetrics,
    RunResult,
    SequenceSummary,
    TransitionSample,
)
from thermocharge.runtime.metrics import write_run_artifacts
from thermocharge.runtime.reporting import ConsoleReporter, NullReporter, format_status
from thermocharge.runtime.sources import FixedReadingSource, RandomReadingSource

__all__ = [
    "Controller",
    "classify",
    "RunMetrics",
    "RunResult",
    "SequenceSummary",
    "TransitionSample",
    "write_run_artifacts",
    "ConsoleReporter",
    "NullReporter",
    "format_status",
    "FixedReadingSource",
    "RandomReadingSource",
]
