"""
Plotting utilities for thermocharge simulation runs.

Plots can be generated directly from a RunResult or from artifact files on
disk. Both produce the same two-panel figure: temperature with the
operating band, and battery charge with the floor/target levels, each
shaded by controller mode.

Requires matplotlib: pip install thermocharge[plot]
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import DEFAULT_PARAMS, RegulatorParams

if TYPE_CHECKING:
    from .interfaces import RunResult

# Background shading per mode name
MODE_COLORS = {
    "COOLING": "tab:blue",
    "HEATING": "tab:red",
    "CHARGING": "tab:green",
    "FINISH": "tab:gray",
}


def check_matplotlib_available() -> bool:
    """Check if matplotlib is available."""
    try:
        import matplotlib  # noqa: F401
        return True
    except ImportError:
        return False


def plot_run(
    result: "RunResult",
    output_path: Path | str,
    show: bool = False,
    title: str | None = None,
    params: RegulatorParams | None = None,
) -> Path:
    """
    Plot a run's adopted Readings against controller step.

    Args:
        result: RunResult from Controller.run()
        output_path: Where to save the figure (PNG, PDF, ...)
        show: If True, also display the plot interactively
        title: Optional figure title (defaults to scenario name)
        params: Regulator thresholds drawn as reference lines

    Returns:
        Path the figure was saved to

    Raises:
        RuntimeError: If matplotlib is not installed.
        ValueError: If the run recorded no samples.
    """
    if not result.samples:
        raise ValueError("No samples in result")

    samples = [asdict(s) for s in result.samples]
    if title is None:
        title = (
            f"thermocharge: {result.metrics.scenario_name} "
            f"({result.metrics.total_steps} steps)"
        )
    return _draw(samples, Path(output_path), title=title, show=show, params=params)


def plot_from_artifacts(
    artifact_dir: Path | str,
    output_path: Path | str | None = None,
    show: bool = False,
) -> Path:
    """
    Generate a plot from artifact files on disk.

    Args:
        artifact_dir: Directory containing metrics.json and timeseries.json.
        output_path: Path to save the figure. If None, saves to artifact_dir/plot.png.
        show: If True, display the plot interactively.

    Returns:
        Path the figure was saved to

    Raises:
        RuntimeError: If matplotlib is not installed.
        FileNotFoundError: If required artifact files are missing.
    """
    artifact_dir = Path(artifact_dir)

    metrics_path = artifact_dir / "metrics.json"
    if not metrics_path.exists():
        raise FileNotFoundError(f"metrics.json not found in {artifact_dir}")
    with metrics_path.open(encoding="utf-8") as f:
        metrics_data = json.load(f)

    timeseries_path = artifact_dir / "timeseries.json"
    if not timeseries_path.exists():
        raise FileNotFoundError(f"timeseries.json not found in {artifact_dir}")
    with timeseries_path.open(encoding="utf-8") as f:
        timeseries_data = json.load(f)

    samples = timeseries_data.get("samples", [])
    if not samples:
        raise ValueError("No samples in timeseries.json")

    run_info = metrics_data.get("run", {})
    scenario = run_info.get("scenario_name", "unknown")
    total_steps = run_info.get("total_steps", len(samples))

    if output_path is None:
        output_path = artifact_dir / "plot.png"

    return _draw(
        samples,
        Path(output_path),
        title=f"thermocharge: {scenario} ({total_steps} steps)",
        show=show,
        params=None,
    )


def _mode_spans(steps: list[int], modes: list[str]) -> list[tuple[int, int, str]]:
    """
    Collapse per-sample modes into (first_step, end_step, mode) runs.

    end_step is exclusive: the first step of the next run, or one past the
    last step. Several samples can share a step, so a run whose mode is
    replaced within the same dispatch has first_step == end_step.
    """
    spans: list[tuple[int, int, str]] = []
    start = 0
    for i in range(1, len(modes) + 1):
        if i == len(modes) or modes[i] != modes[start]:
            end = steps[i] if i < len(modes) else steps[-1] + 1
            spans.append((steps[start], end, modes[start]))
            start = i
    return spans


def _draw(
    samples: list[dict],
    output_path: Path,
    *,
    title: str,
    show: bool,
    params: RegulatorParams | None,
) -> Path:
    if not check_matplotlib_available():
        raise RuntimeError(
            "matplotlib not installed. Install with: pip install thermocharge[plot]"
        )

    import matplotlib.pyplot as plt

    p = params or DEFAULT_PARAMS
    steps = [s["step"] for s in samples]
    temps = [s["temperature"] for s in samples]
    charges = [s["battery_charge"] for s in samples]
    modes = [s["mode"] for s in samples]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 6), sharex=True)

    # Panel 1: Temperature with operating band
    ax1.plot(steps, temps, "r-", linewidth=1.5, label="Temperature")
    ax1.axhline(y=p.band_high, color="black", linestyle=":", linewidth=1.5,
                label=f"Band ({p.band_low:.0f}-{p.band_high:.0f})")
    ax1.axhline(y=p.band_low, color="black", linestyle=":", linewidth=1.5)
    ax1.set_ylabel("Temperature", color="r")
    ax1.tick_params(axis="y", labelcolor="r")
    ax1.grid(True, alpha=0.3)

    # Panel 2: Battery charge with floor and target
    ax2.plot(steps, charges, color="tab:green", linewidth=1.5, label="Battery charge")
    ax2.axhline(y=p.charge_floor, color="tab:orange", linestyle="--", linewidth=1,
                label=f"Floor ({p.charge_floor:.0f}%)")
    ax2.axhline(y=p.charge_target, color="tab:purple", linestyle="--", linewidth=1,
                label=f"Target ({p.charge_target:.1f}%)")
    ax2.set_ylabel("Battery charge (%)")
    ax2.set_ylim(-5, 105)
    ax2.grid(True, alpha=0.3)
    ax2.set_xlabel("Step")

    # Shade mode spans on both panels, one legend entry per mode
    labelled: set[str] = set()
    for start, end, mode in _mode_spans(steps, modes):
        color = MODE_COLORS.get(mode)
        if color is None or end == start:
            continue
        label = mode.capitalize() if mode not in labelled else None
        labelled.add(mode)
        for ax in (ax1, ax2):
            ax.axvspan(start - 0.5, end - 0.5, color=color, alpha=0.08,
                       label=label if ax is ax1 else None)

    ax1.legend(loc="upper right", fontsize="small")
    ax2.legend(loc="upper right", fontsize="small")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    plt.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    plt.close(fig)
    return output_path
