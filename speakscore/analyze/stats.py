"""
speakscore.analyze.stats - Online summary statistics.

Welford's algorithm: mean and variance are updated one value at a time, so a
feature stream never has to be held in memory to be summarised.
"""

from __future__ import annotations

import math
from collections.abc import Iterable


class RunningStats:
    """Running count, mean, variance, min and max of a numeric stream."""

    def __init__(self) -> None:
        self.count = 0
        self.mean = 0.0
        self.m2 = 0.0
        self.min = math.inf
        self.max = -math.inf

    def update(self, value: float) -> None:
        value = float(value)
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (value - self.mean)
        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.update(value)

    @property
    def variance(self) -> float:
        """Sample variance (n - 1 denominator); 0 for fewer than two values."""
        if self.count < 2:
            return 0.0
        return self.m2 / (self.count - 1)

    @property
    def population_variance(self) -> float:
        if self.count == 0:
            return 0.0
        return self.m2 / self.count

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def coefficient_of_variation(self) -> float:
        """Standard deviation relative to the mean; 0 when the mean is 0."""
        if self.mean == 0:
            return 0.0
        return self.std_dev / self.mean

    @property
    def value_range(self) -> float:
        if self.count == 0:
            return 0.0
        return self.max - self.min

    def summary(self) -> dict[str, float]:
        """Plain summary; extremes report 0 for an empty stream."""
        empty = self.count == 0
        return {
            "count": self.count,
            "mean": self.mean,
            "min": 0.0 if empty else self.min,
            "max": 0.0 if empty else self.max,
            "std_dev": self.std_dev,
        }

    def __repr__(self) -> str:
        return f"RunningStats(count={self.count}, mean={self.mean:.6g}, std_dev={self.std_dev:.6g})"
