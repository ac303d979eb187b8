from __future__ import annotations

import random

# Ranges of the simulated sensor draws (integers, upper bound exclusive)
TEMPERATURE_RANGE = 55
CHARGE_RANGE = 100


class RandomReadingSource:
    """
    Seeded source of starting readings.

    Draws whole-number temperatures in [0, 55) and charges in [0, 100),
    like a coarse sensor. Same seed, same sequence of draws.
    """

    def __init__(self, seed: int):
        """
        Initialize the source with a seed.

        Args:
            seed: Random seed for deterministic draws
        """
        self._rng = random.Random(seed)

    def draw(self) -> tuple[float, float]:
        temperature = float(self._rng.randrange(TEMPERATURE_RANGE))
        battery_charge = float(self._rng.randrange(CHARGE_RANGE))
        return temperature, battery_charge


class FixedReadingSource:
    """Source that returns the same starting reading on every draw."""

    def __init__(self, temperature: float, battery_charge: float):
        self.temperature = float(temperature)
        self.battery_charge = float(battery_charge)

    def draw(self) -> tuple[float, float]:
        return self.temperature, self.battery_charge
