"""
thermocharge: Closed-loop thermal/battery regulator simulation.

Features:
- Resumable acclimation (cooling/heating) and charging processes
- Mode-driven controller that hands a single Reading between processes
- Deterministic runs with seeded initial readings
- JSON/JSONL run artifacts and optional matplotlib plots
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
