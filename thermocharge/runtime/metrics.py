"""
Artifact writing for thermocharge simulation runs.

Artifact files produced:
- metrics.json: Run metadata and per-sequence summaries
- timeseries.json: Every Reading adopted by the controller
- transitions.jsonl: Mode changes only, one JSON object per line

Example artifact directory structure:
```
artifacts/runs/20240115_120000_example/
├── metrics.json       # Run metadata
├── timeseries.json    # Adopted Readings
└── transitions.jsonl  # Mode change stream
```
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from .interfaces import RunResult, TransitionSample


def write_run_artifacts(*, out_path: Path, result: RunResult) -> None:
    """
    Write all simulation artifacts to disk.

    Creates the output directory (if needed). timeseries.json and
    transitions.jsonl are written only when the run adopted any Reading.

    Args:
        out_path: Output directory path, created with parents if missing
        result: RunResult from Controller.run()
    """
    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    _write_metrics_json(out_path, result)

    if len(result.samples) > 0:
        _write_timeseries_json(out_path, result.samples)
        _write_transitions_jsonl(out_path, mode_changes(result.samples))


def mode_changes(samples: list[TransitionSample]) -> list[TransitionSample]:
    """Samples whose mode differs from the previous sample's."""
    changes: list[TransitionSample] = []
    last_mode = None
    for sample in samples:
        if sample.mode != last_mode:
            changes.append(sample)
            last_mode = sample.mode
    return changes


def _write_metrics_json(out_path: Path, result: RunResult) -> None:
    """
    Write metrics.json artifact.

    Schema:
    {
        "run": {scenario_name, seed, sequences, total_steps, charge_cycles,
                final_mode, truncated, start_time, finish_time},
        "sequences": [{sequence, initial_mode, start_temperature, ...}, ...]
    }
    """
    payload = {
        "run": asdict(result.metrics),
        "sequences": [asdict(s) for s in result.sequences],
    }

    metrics_path = out_path / "metrics.json"
    metrics_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )


def _write_timeseries_json(out_path: Path, samples: list[TransitionSample]) -> None:
    payload = {
        "samples": [asdict(s) for s in samples],
    }
    timeseries_path = out_path / "timeseries.json"
    timeseries_path.write_text(
        json.dumps(payload, indent=2) + "\n",
        encoding="utf-8",
    )


def _write_transitions_jsonl(out_path: Path, samples: list[TransitionSample]) -> None:
    transitions_path = out_path / "transitions.jsonl"
    with transitions_path.open("w", encoding="utf-8") as f:
        for sample in samples:
            json.dump(asdict(sample), f, sort_keys=True)
            f.write("\n")
