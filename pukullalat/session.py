"""
Game session - owns the clock, score, lives and every entity of one game.

The front end calls `advance(now_ms)` once per frame and `command(...)` on input;
everything else is read through `snapshot()`. Sessions share no state, so any number
of them can run side by side (tools/simulate.py runs hundreds).
"""
from __future__ import annotations

from typing import Iterable, Optional

import config
from pukullalat.entities import Bear, Child, Mosquito
from pukullalat.sim.contracts import (
    EVENT_CHILD_FELL,
    EVENT_CHILD_PUSHED,
    EVENT_GAME_OVER,
    EVENT_LIFE_LOST,
    EVENT_MOSQUITO_BITE,
    EVENT_MOSQUITO_SPAWNED,
    EVENT_MOSQUITO_SWATTED,
    ArmPos,
    BearActiveSide,
    ChildPos,
    Command,
    SessionSnapshot,
)
from pukullalat.sim.determinism import make_rng
from pukullalat.sim.listeners import SessionListener
from pukullalat.sim.rules import GameRules
from pukullalat.sim.variates import RandomVariate

# Debug logging (set PL_DEBUG_SIM=1 to see session logs)
DEBUG_SIM = config.DEBUG_SIM

_last_log: dict = {}


def debug_log(msg, throttle_key=None, now_ms=None):
    if not DEBUG_SIM:
        return
    # Throttle repeated messages (session time, never wall-clock)
    if throttle_key is not None and now_ms is not None:
        last = _last_log.get(throttle_key)
        if last is not None and 0 <= now_ms - last < 1000:
            return
        _last_log[throttle_key] = now_ms
    print(f"[sim] {msg}")


class GameSession:
    """One game, from the first frame to game over."""

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        seed: Optional[int] = None,
        listeners: Optional[Iterable[SessionListener]] = None,
    ):
        self.rules = rules if rules is not None else GameRules.from_config()
        self.seed = config.SIM_SEED if seed is None else int(seed)

        # Independent streams per system: extra draws in one never shift another.
        self.row_rng = make_rng(self.seed, "mosquito_rows")
        self.spawn_variate = RandomVariate(make_rng(self.seed, "mosquito_spawn"))
        self.mosquito_variate = RandomVariate(make_rng(self.seed, "mosquito_move"))
        self.child_variate = RandomVariate(make_rng(self.seed, "child_move"))

        self.time = 0.0
        self.score = 0
        self.lives = int(self.rules.starting_lives)

        self.active_mosquitos: list[Mosquito] = []
        self.mosquito_due = float(self.rules.mosquito_grace_time)
        self.total_mosquito_count = 0

        self.bear = Bear()
        self.child = Child(
            self.rules.child_move_curve,
            self.child_variate,
            appear_time=self.rules.child_appear_time,
            water_time=self.rules.child_water_time,
            water_nom=self.rules.child_water_nom,
        )

        self._ouch_until: Optional[float] = None
        self._listeners: list[SessionListener] = list(listeners or [])
        self._events: list[dict] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.lives <= 0

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            time=self.time,
            score=self.score,
            lives=self.lives,
            terminal=self.is_terminal,
            bear=self.bear.snapshot(),
            child=self.child.snapshot(self.time),
            mosquitos=[m.snapshot() for m in self.active_mosquitos],
        )

    # ------------------------------------------------------------------
    # Internal event plumbing
    # ------------------------------------------------------------------

    def _emit(self, event: dict) -> None:
        event.setdefault("time", self.time)
        self._events.append(event)

    def _add_score(self, delta: int, event: dict) -> None:
        self.score += int(delta)
        event["score"] = self.score
        self._emit(event)
        for listener in list(self._listeners):
            listener.on_score(self, int(delta))

    def _lose_life(self, cause: dict) -> None:
        if self.is_terminal:
            return
        self._emit(cause)
        if self.rules.has_lives:
            self.lives -= 1
        self._emit({"type": EVENT_LIFE_LOST, "lives": self.lives, "cause": cause["type"]})
        debug_log(f"life lost ({cause['type']}) at t={self.time:.0f}, lives={self.lives}")
        for listener in list(self._listeners):
            listener.on_life_lost(self)

        if self.is_terminal:
            self._emit({"type": EVENT_GAME_OVER, "score": self.score})
            debug_log(f"game over at t={self.time:.0f}, score={self.score}")
            for listener in list(self._listeners):
                listener.on_game_over(self)
            return

        # Shake + fresh board: the next mosquitoes arrive after the grace time again.
        self.bear.set_ouch()
        self._ouch_until = self.time + float(self.rules.ouch_duration_ms)
        self.active_mosquitos = []
        self.mosquito_due = self.time + float(self.rules.mosquito_grace_time)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self, now: float) -> list[dict]:
        """
        Advance the simulation to `now` (ms since session start).

        Every due spawn/move is performed, however far `now` jumped. Returns the
        events of this tick. A terminal session ignores further ticks.
        """
        if now < self.time:
            raise ValueError(f"session time must not go backwards ({now} < {self.time})")
        self._events = []
        if self.is_terminal:
            return self._events
        self.time = float(now)

        if self._ouch_until is not None and self.time >= self._ouch_until:
            self.bear.clear_ouch()
            self._ouch_until = None

        self._spawn_mosquitos()
        self._update_mosquitos()
        if self.is_terminal:
            return self._events

        self.bear.update(self.active_mosquitos, self.child, self.time)

        if self.rules.has_child:
            for event in self.child.update(self.time):
                if event["type"] == EVENT_CHILD_FELL:
                    self._lose_life(event)
                else:
                    self._emit(event)
        return self._events

    def _spawn_mosquitos(self) -> None:
        curve = self.rules.mosquito_spawn_curve
        while self.time > self.mosquito_due:
            mosquito = Mosquito.spawn(self.time, self.row_rng, self.rules.mosquito_move_curve, self.mosquito_variate)
            self.active_mosquitos.append(mosquito)
            self.total_mosquito_count += 1
            self._emit({"type": EVENT_MOSQUITO_SPAWNED, "row": mosquito.row})
            self.mosquito_due += curve.sample(self.time, self.spawn_variate)
        debug_log(f"{len(self.active_mosquitos)} mosquitoes active", throttle_key="active", now_ms=self.time)

    def _update_mosquitos(self) -> None:
        survivors: list[Mosquito] = []
        for mosquito in self.active_mosquitos:
            bitten = False
            for event in mosquito.update(self.time, self.bear):
                if event["type"] == EVENT_MOSQUITO_SWATTED:
                    self._add_score(1, event)
                elif event["type"] == EVENT_MOSQUITO_BITE:
                    self._lose_life(event)
                    bitten = True
            if bitten:
                # The board was cleared (or the game ended); the rest of this pass is moot.
                if self.is_terminal:
                    self.active_mosquitos = [m for m in self.active_mosquitos if m.is_alive]
                return
            if mosquito.is_alive:
                survivors.append(mosquito)
        self.active_mosquitos = survivors

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------

    def command(self, cmd: Command) -> list[dict]:
        """Apply one directional command between ticks. Returns the events it caused."""
        self._events = []
        if self.is_terminal:
            return self._events

        if cmd is Command.LEFT:
            self.bear.active_side = BearActiveSide.LEFT
        elif cmd is Command.RIGHT:
            if self._child_reachable():
                self.bear.active_side = BearActiveSide.RIGHT
                self.bear.hold_child(self.child, self.time)
        elif cmd is Command.ARM_DOWN:
            self.bear.arm_down()
        elif cmd is Command.ARM_UP:
            self.bear.arm_up()
            if self.bear.active_side is BearActiveSide.RIGHT:
                self._push_child()
        return self._events

    def select_arm(self, side: BearActiveSide, arm_pos: ArmPos) -> list[dict]:
        """Jump straight to one arm (pointer/touch input)."""
        self._events = []
        if self.is_terminal:
            return self._events
        arm_pos = ArmPos(arm_pos)

        if side is BearActiveSide.LEFT:
            self.bear.active_side = BearActiveSide.LEFT
            self.bear.arm_pos = arm_pos
            return self._events

        if not self._child_reachable():
            return self._events
        if self.bear.active_side is BearActiveSide.LEFT:
            self.bear.active_side = BearActiveSide.RIGHT
            self.bear.arm_pos = arm_pos
            self.bear.hold_child(self.child, self.time)
        elif int(self.bear.arm_pos) == int(arm_pos) + 1 and int(self.child.position) == int(arm_pos) + 2:
            # Already holding one rung lower: raising the arm pushes the child up.
            self.bear.arm_pos = arm_pos
            self._push_child()
        elif int(self.child.position) <= int(arm_pos) + 1:
            self.bear.arm_pos = arm_pos
            self.bear.hold_child(self.child, self.time)
        return self._events

    def _child_reachable(self) -> bool:
        return self.rules.has_child and self.child.position != ChildPos.WATER

    def _push_child(self) -> None:
        if self.bear.push_child(self.child, self.time):
            self._add_score(1, {"type": EVENT_CHILD_PUSHED, "position": int(self.child.position)})
