"""
The bear child on the ladder.
"""
from __future__ import annotations

from pukullalat.sim.contracts import (
    EVENT_CHILD_APPEARED,
    EVENT_CHILD_FELL,
    ChildPos,
    ChildSnapshot,
)
from pukullalat.sim.difficulty import DifficultyCurve
from pukullalat.sim.variates import RandomVariate

# Fractions of the last-rung climb during which the child is hidden (blinks 3 times).
_BLINK_OFF_WINDOWS = ((6.0 / 12, 7.0 / 12), (8.0 / 12, 9.0 / 12), (10.0 / 12, 11.0 / 12))


class Child:
    """
    The rescuable child.

    Appears after `appear_time`, then climbs one rung down every move interval. From
    the last rung it falls into the water (a lost life), stays there for the water
    time and starts over at the top. The bear can hold it (freeze its climb clock) or
    push it back up a rung.
    """

    def __init__(
        self,
        move_curve: DifficultyCurve,
        variate: RandomVariate,
        *,
        appear_time: float,
        water_time: float,
        water_nom: float,
    ):
        self.move_curve = move_curve
        self.variate = variate
        self.appear_time = float(appear_time)
        self.base_water_time = float(water_time)
        self.water_nom = float(water_nom)

        self.position = ChildPos.HIGH
        self.active = False
        self.last_move = 0.0
        self.move_due = 0.0
        self.n_baths = 0

    def move_interval(self, now: float) -> float:
        return self.move_curve.sample(now, self.variate)

    def water_time(self) -> float:
        """Time spent in the water; shrinks with every bath but never reaches zero."""
        return (self.base_water_time * self.water_nom) / (self.n_baths + self.water_nom)

    def update(self, now: float) -> list:
        """Activate when due and catch up on every climb step before `now`."""
        events: list = []
        if not self.active and now >= self.appear_time:
            self.active = True
            self.last_move = now
            self.move_due = now + self.move_interval(now)
            events.append({"type": EVENT_CHILD_APPEARED})

        if not self.active:
            return events

        while now > self.move_due:
            self.last_move = self.move_due
            nxt = int(self.position) + 1
            if nxt > ChildPos.WATER:
                self.position = ChildPos.HIGH
                self.move_due += self.move_interval(now)
            elif nxt == ChildPos.WATER:
                self.position = ChildPos.WATER
                self.n_baths += 1
                events.append({"type": EVENT_CHILD_FELL, "n_baths": self.n_baths})
                self.move_due += self.water_time()
            else:
                self.position = ChildPos(nxt)
                self.move_due += self.move_interval(now)
        return events

    def hold(self, now: float) -> None:
        """Freeze the climb clock without moving."""
        self.last_move = now
        self.move_due = now + self.move_interval(now)

    def push(self, now: float) -> bool:
        """Move one rung back up. Returns False (and does nothing) at the top."""
        if self.position <= ChildPos.HIGH:
            return False
        self.position = ChildPos(int(self.position) - 1)
        self.last_move = now
        self.move_due = now + self.move_interval(now)
        return True

    def climb_fraction(self, now: float) -> float:
        """How far through the current climb step we are (0..1, may exceed 1 between ticks)."""
        span = self.move_due - self.last_move
        if span <= 0:
            return 1.0
        return (now - self.last_move) / span

    def is_blink_visible(self, now: float) -> bool:
        """Render helper: on the last rung the child blinks shortly before falling."""
        if not self.active:
            return False
        if self.position != ChildPos.LOW:
            return True
        fraction = self.climb_fraction(now)
        return not any(lo < fraction <= hi for lo, hi in _BLINK_OFF_WINDOWS)

    def snapshot(self, now: float) -> ChildSnapshot:
        return ChildSnapshot(
            active=self.active,
            position=self.position,
            last_move=self.last_move,
            move_due=self.move_due,
            n_baths=self.n_baths,
            visible=self.is_blink_visible(now),
        )
