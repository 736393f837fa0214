"""
Difficulty scaling.

Every cadence in the game (mosquito spawns, mosquito moves, child moves) is drawn from
the same curve: a noisy nominal interval, divided by "one more" every `half_life`
milliseconds of play. At t=0 the nominal interval holds exactly; as t grows the mean
shrinks hyperbolically towards zero, so the game never plateaus.
"""

from __future__ import annotations

from dataclasses import dataclass

from pukullalat.sim.variates import RandomVariate


def interval(time_ms: float, base: float, stdev: float, half_life: float, variate: RandomVariate) -> float:
    """
    Sample the next inter-event interval at `time_ms`.

    The result may be zero or negative (normal tail); callers treat that as "due now".
    """
    noisy = base + variate.standard_normal() * stdev
    # Multiply first: keeps interval(0, base, 0, h) == base exact in floating point.
    return noisy * half_life / (time_ms + half_life)


@dataclass(frozen=True, slots=True)
class DifficultyCurve:
    """A `(base, stdev, half_life)` triple, optionally with scaling switched off."""

    base: float
    stdev: float
    half_life: float
    scaling: bool = True

    def sample(self, time_ms: float, variate: RandomVariate) -> float:
        if not self.scaling:
            return self.base + variate.standard_normal() * self.stdev
        return interval(time_ms, self.base, self.stdev, self.half_life, variate)

    def mean_at(self, time_ms: float) -> float:
        """Noise-free interval at `time_ms` (useful for HUD/diagnostics)."""
        if not self.scaling:
            return float(self.base)
        return self.base * self.half_life / (time_ms + self.half_life)
