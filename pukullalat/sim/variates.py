"""
Random variates on top of an injectable uniform source.
"""

from __future__ import annotations

import math
import random
from typing import Optional


class RandomVariate:
    """
    Exponential and standard-normal samples.

    The normal sampler uses the Marsaglia polar method, which yields two independent
    samples per accepted draw: one is returned, the other is cached on *this instance*
    and handed out by the next call without touching the uniform source.
    """

    def __init__(self, uniform: Optional[random.Random] = None):
        self.uniform = uniform if uniform is not None else random.Random()
        self._cached: Optional[float] = None

    @property
    def has_cached(self) -> bool:
        return self._cached is not None

    def exponential(self, rate: float) -> float:
        """Exponentially distributed sample with the given rate (mean 1/rate)."""
        u = 0.0
        while u <= 0.0:
            u = self.uniform.random()
        return -math.log(u) / rate

    def standard_normal(self) -> float:
        """Normally distributed sample with mean 0 and standard deviation 1."""
        if self._cached is not None:
            result = self._cached
            self._cached = None
            return result

        while True:
            x = self.uniform.random() * 2.0 - 1.0
            y = self.uniform.random() * 2.0 - 1.0
            s = x * x + y * y
            if s < 1.0:
                break
        if s == 0.0:
            return 0.0
        factor = math.sqrt(-2.0 * math.log(s) / s)
        self._cached = x * factor
        return y * factor

    def reset(self) -> None:
        """Drop the cached half of the last pair."""
        self._cached = None
