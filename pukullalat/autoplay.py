"""
Headless autoplay: scripted players driving a GameSession at a fixed frame rate.

Used by tools/simulate.py and `main.py --headless` to measure difficulty and to run
many independent sessions side by side (no pygame, no wall-clock).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pukullalat.session import GameSession
from pukullalat.sim.contracts import (
    EVENT_CHILD_FELL,
    EVENT_CHILD_PUSHED,
    EVENT_MOSQUITO_BITE,
    EVENT_MOSQUITO_SWATTED,
    BearActiveSide,
    ChildPos,
    Command,
    MosquitoState,
)
from pukullalat.sim.listeners import RecordingListener
from pukullalat.sim.rules import GameRules


def idle_policy(session: GameSession) -> list[Command]:
    """Never touches the controls."""
    return []


def _most_urgent_mosquito(session: GameSession):
    threats = [m for m in session.active_mosquitos if m.state in (MosquitoState.FLYING, MosquitoState.BITING)]
    if not threats:
        return None
    return max(threats, key=lambda m: (m.col, -m.move_due))


def _arm_towards(session: GameSession, target: int) -> list[Command]:
    arm = int(session.bear.arm_pos)
    if arm > target:
        return [Command.ARM_UP] * (arm - target)
    return [Command.ARM_DOWN] * (target - arm)


def swatter_policy(session: GameSession) -> list[Command]:
    """Stays left and tracks the mosquito closest to the bear."""
    target = _most_urgent_mosquito(session)
    if target is None or target.col < 2:
        return []
    cmds = []
    if session.bear.active_side is not BearActiveSide.LEFT:
        cmds.append(Command.LEFT)
    return cmds + _arm_towards(session, target.row)


def keeper_policy(session: GameSession) -> list[Command]:
    """Swats, but runs to the child when it gets close to the water."""
    child = session.child
    target = _most_urgent_mosquito(session)
    if target is not None and target.col >= 3:
        return swatter_policy(session)

    if child.active and child.position == ChildPos.LOW and child.climb_fraction(session.time) > 0.5:
        if session.bear.active_side is not BearActiveSide.RIGHT:
            return [Command.RIGHT]
        if int(session.bear.arm_pos) == int(child.position) - 1:
            # Holding: raise the arm once to push the child up a rung.
            return [Command.ARM_UP]
        return []
    return swatter_policy(session)


POLICIES: dict[str, Callable[[GameSession], list]] = {
    "idle": idle_policy,
    "swatter": swatter_policy,
    "keeper": keeper_policy,
}


@dataclass
class SimulationSummary:
    seed: int
    policy: str
    time_ms: float
    score: int
    lives: int
    game_over: bool
    mosquitos_spawned: int
    swats: int
    bites: int
    falls: int
    pushes: int
    callbacks: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "policy": self.policy,
            "time_ms": round(self.time_ms, 1),
            "score": self.score,
            "lives": self.lives,
            "game_over": self.game_over,
            "mosquitos_spawned": self.mosquitos_spawned,
            "swats": self.swats,
            "bites": self.bites,
            "falls": self.falls,
            "pushes": self.pushes,
            "callbacks": dict(self.callbacks),
        }


def run_simulation(
    *,
    seconds: float,
    seed: int,
    policy: str = "keeper",
    fps: int = 60,
    rules: Optional[GameRules] = None,
    stop_on_game_over: bool = True,
) -> SimulationSummary:
    """Play one session headlessly. Frame timestamps are exact multiples of 1000/fps."""
    if policy not in POLICIES:
        raise ValueError(f"unknown policy {policy!r} (choose from {', '.join(sorted(POLICIES))})")
    decide = POLICIES[policy]
    recorder = RecordingListener()
    session = GameSession(rules=rules, seed=seed, listeners=[recorder])

    counts = {EVENT_MOSQUITO_SWATTED: 0, EVENT_MOSQUITO_BITE: 0, EVENT_CHILD_FELL: 0, EVENT_CHILD_PUSHED: 0}
    total_frames = int(seconds * fps)
    for frame in range(1, total_frames + 1):
        events = list(session.advance(frame * 1000.0 / fps))
        for cmd in decide(session):
            events.extend(session.command(cmd))
        for e in events:
            if e["type"] in counts:
                counts[e["type"]] += 1
        if stop_on_game_over and session.is_terminal:
            break

    return SimulationSummary(
        seed=seed,
        policy=policy,
        time_ms=session.time,
        score=session.score,
        lives=session.lives,
        game_over=session.is_terminal,
        mosquitos_spawned=session.total_mosquito_count,
        swats=counts[EVENT_MOSQUITO_SWATTED],
        bites=counts[EVENT_MOSQUITO_BITE],
        falls=counts[EVENT_CHILD_FELL],
        pushes=counts[EVENT_CHILD_PUSHED],
        callbacks={name: recorder.count(name) for name in ("score", "life_lost", "game_over")},
    )
