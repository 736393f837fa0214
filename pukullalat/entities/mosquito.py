"""
Mosquito entities.
"""
from __future__ import annotations

import random
from typing import TYPE_CHECKING

from config import GRID_ROWS
from pukullalat.sim.contracts import (
    EVENT_MOSQUITO_BITE,
    EVENT_MOSQUITO_SWATTED,
    MosquitoSnapshot,
    MosquitoState,
)
from pukullalat.sim.difficulty import DifficultyCurve
from pukullalat.sim.variates import RandomVariate

if TYPE_CHECKING:
    from pukullalat.entities.bear import Bear

SWAT_COLUMN = 3
EXIT_COLUMN = 4


class Mosquito:
    """
    One attacking mosquito.

    Flies along its row one column per move. Column 3 is right in front of the bear:
    while it sits there it is biting, and a bear arm on the left at the same height
    swats it. If it leaves the board (column 4) still biting, a life is lost.
    """

    def __init__(self, row: int, now: float, move_curve: DifficultyCurve, variate: RandomVariate):
        self.row = int(row)
        self.col = 0
        self.state = MosquitoState.FLYING
        self.move_curve = move_curve
        self.variate = variate
        self.move_due = now + self.move_interval(now)

    @classmethod
    def spawn(
        cls,
        now: float,
        rng: random.Random,
        move_curve: DifficultyCurve,
        variate: RandomVariate,
    ) -> "Mosquito":
        """Create a mosquito on a uniformly random row."""
        return cls(rng.randrange(GRID_ROWS), now, move_curve, variate)

    @property
    def is_alive(self) -> bool:
        return self.state is not MosquitoState.DEAD

    def move_interval(self, now: float) -> float:
        return self.move_curve.sample(now, self.variate)

    def _resolve_swat(self, bear: "Bear", events: list) -> None:
        if self.col != SWAT_COLUMN or not bear.swats(self.row):
            return
        # First kill wins; a dying mosquito is never scored twice.
        if self.state is not MosquitoState.DYING:
            self.state = MosquitoState.DYING
            events.append({"type": EVENT_MOSQUITO_SWATTED, "row": self.row})

    def update(self, now: float, bear: "Bear") -> list:
        """
        Catch up on every move due before `now`.

        Returns the events produced (swats, bites). The swat check runs before the
        exit check, so a mosquito hit while biting is killed, not a lost life.
        """
        events: list = []
        if not self.is_alive:
            return events

        self._resolve_swat(bear, events)

        while now > self.move_due:
            self.move_due += self.move_interval(now)
            self.col += 1
            if self.col == SWAT_COLUMN:
                self.state = MosquitoState.BITING
                self._resolve_swat(bear, events)
            elif self.col >= EXIT_COLUMN:
                if self.state is MosquitoState.BITING:
                    events.append({"type": EVENT_MOSQUITO_BITE, "row": self.row})
                self.state = MosquitoState.DEAD
                return events

        self._resolve_swat(bear, events)
        return events

    def snapshot(self) -> MosquitoSnapshot:
        return MosquitoSnapshot(row=self.row, col=self.col, state=self.state)
