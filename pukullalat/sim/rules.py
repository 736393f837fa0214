"""
Game rules - capabilities + tunables for one session.

One canonical simulation covers every game variant: switch features off here instead
of maintaining separate copies of the game loop.

Units are milliseconds of session time (no wall-clock).
"""

from __future__ import annotations

from dataclasses import dataclass

import config
from pukullalat.sim.difficulty import DifficultyCurve


@dataclass(frozen=True, slots=True)
class GameRules:
    # -----------------------------
    # Capabilities
    # -----------------------------
    has_child: bool = True
    has_lives: bool = True
    has_difficulty_scaling: bool = True

    # -----------------------------
    # Session
    # -----------------------------
    starting_lives: int = config.STARTING_LIVES
    ouch_duration_ms: float = config.OUCH_DURATION_MS

    # -----------------------------
    # Mosquitoes
    # -----------------------------
    mosquito_grace_time: float = config.MOSQUITO_GRACE_TIME
    mosquito_spawn_interval: float = config.MOSQUITO_SPAWN_INTERVAL
    mosquito_spawn_stdev: float = config.MOSQUITO_SPAWN_STDEV
    mosquito_spawn_increases: float = config.MOSQUITO_SPAWN_INCREASES
    mosquito_move_interval: float = config.MOSQUITO_MOVE_INTERVAL
    mosquito_move_stdev: float = config.MOSQUITO_MOVE_STDEV
    mosquito_move_increases: float = config.MOSQUITO_MOVE_INCREASES

    # -----------------------------
    # Child
    # -----------------------------
    child_move_interval: float = config.CHILD_MOVE_INTERVAL
    child_move_stdev: float = config.CHILD_MOVE_STDEV
    child_move_increases: float = config.CHILD_MOVE_INCREASES
    child_water_time: float = config.CHILD_WATER_TIME
    child_water_nom: float = config.CHILD_WATER_NOM
    child_appear_time: float = config.CHILD_APPEAR_TIME

    @classmethod
    def from_config(cls) -> "GameRules":
        """Rules as configured in `config.py` (all features on)."""
        return cls()

    @property
    def mosquito_spawn_curve(self) -> DifficultyCurve:
        return DifficultyCurve(
            self.mosquito_spawn_interval,
            self.mosquito_spawn_stdev,
            self.mosquito_spawn_increases,
            scaling=self.has_difficulty_scaling,
        )

    @property
    def mosquito_move_curve(self) -> DifficultyCurve:
        return DifficultyCurve(
            self.mosquito_move_interval,
            self.mosquito_move_stdev,
            self.mosquito_move_increases,
            scaling=self.has_difficulty_scaling,
        )

    @property
    def child_move_curve(self) -> DifficultyCurve:
        return DifficultyCurve(
            self.child_move_interval,
            self.child_move_stdev,
            self.child_move_increases,
            scaling=self.has_difficulty_scaling,
        )
