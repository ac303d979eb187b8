from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

LOG_LEVEL_ENV = "THERMOCHARGE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _clean_path_name(path_name: str) -> str:
    # Remove unsafe characters from directory name
    cleaned = [c if (c.isalnum() or c in ("-", "_")) else "_" for c in path_name]
    return "".join(cleaned).strip("_")


def _resolve_log_level(log_level: str | None) -> str:
    if log_level is None:
        log_level = os.getenv(LOG_LEVEL_ENV, "").strip() or DEFAULT_LOG_LEVEL
    level = log_level.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
    return level


# slots are used to enfore good interface hygiene, disables dynamic attribute creation.
@dataclass(frozen=True, slots=True)
class SimConfig:
    """
    SimConfig

    Definitions and configuration for a regulator simulation run

    Params:
    - name (str) : simulation name
    - sequences (int) : number of Start -> Finish sequences before standby
    - max_steps (int) : upper bound on controller dispatch steps
    - seed (int) : random seed for the initial reading source
    - out_dir (Path) : output directory for simulation artifacts
                       default: artifacts/runs/<timestamp>_<name>
    - log_level (str) : logging level name
    """
    name: str
    sequences: int
    max_steps: int
    seed: int
    out_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def from_args(
        *,
        name: str,
        sequences: int,
        max_steps: int,
        seed: int,
        out_dir: str | None,
        log_level: str | None = None,
    ) -> "SimConfig":
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")
        if sequences < 0:
            raise ValueError("sequences must be >= 0")
        if max_steps <= 0:
            raise ValueError("max_steps must be > 0")

        if out_dir is not None:
            out_dir = Path(out_dir)
        else:
            # Default output location: artifacts/runs/<UTC YYYYmmdd_HHMMSS>_<name>
            ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            clean_name = _clean_path_name(name)

            # Check if name is empty after cleaning
            if not clean_name:
                clean_name = "scenario"
            out_dir = Path("artifacts").joinpath(f"runs/{ts}_{clean_name}")

        return SimConfig(
            name=name,
            sequences=int(sequences),
            max_steps=int(max_steps),
            seed=int(seed),
            out_dir=out_dir,
            log_level=_resolve_log_level(log_level),
        )


@dataclass(frozen=True, slots=True)
class RegulatorParams:
    """
    Fixed thresholds and step sizes for the regulator.
    """
    # Operating band
    band_low: float = 18.0                # Heat below this temperature
    band_high: float = 20.0               # Cool above this temperature

    # Battery
    charge_floor: float = 20.0            # Acclimation requires charge above this (%)
    charge_target: float = 94.9           # Charging stops at this level (%)

    # Acclimation step
    acclimate_temp_step: float = 0.1      # Temperature change per step
    acclimate_charge_cost: float = 0.8    # Charge drained per step (%)

    # Charging iteration
    charge_step: float = 0.1              # Charge restored per iteration (%)
    charge_temp_drift: float = 0.01       # Temperature rise per iteration


DEFAULT_PARAMS = RegulatorParams()
