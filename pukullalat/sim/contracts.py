"""
Thin, stable data contracts shared by the simulation, the renderer and the tools.

The enums replace loose int constants; the snapshot dataclasses are the read-only
view a renderer (or a headless tool) gets after each tick:
- renderers never touch live entities, so they cannot mutate game state
- snapshots are easy to serialize (replays, debugging, highscore submission)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class BearActiveSide(Enum):
    LEFT = "left"
    RIGHT = "right"


class ArmPos(IntEnum):
    """Arm height. Lower number = physically higher."""

    HIGH = 0
    MED = 1
    LOW = 2


class FaceState(Enum):
    HAPPY = "happy"
    HMM = "hmm"
    OUCH = "ouch"


class ChildPos(IntEnum):
    """Ladder rung. The child climbs *down* towards the water."""

    HIGH = 1
    MED = 2
    LOW = 3
    WATER = 4


class MosquitoState(Enum):
    FLYING = "flying"
    BITING = "biting"
    DYING = "dying"
    DEAD = "dead"


class Command(Enum):
    """The four logical directional actions the input layer may send."""

    LEFT = "left"
    RIGHT = "right"
    ARM_UP = "arm_up"
    ARM_DOWN = "arm_down"


# Event types emitted during a tick/command (flat dicts: {"type": ..., ...}).
EVENT_MOSQUITO_SPAWNED = "mosquito_spawned"
EVENT_MOSQUITO_SWATTED = "mosquito_swatted"
EVENT_MOSQUITO_BITE = "mosquito_bite"
EVENT_CHILD_APPEARED = "child_appeared"
EVENT_CHILD_FELL = "child_fell"
EVENT_CHILD_PUSHED = "child_pushed"
EVENT_LIFE_LOST = "life_lost"
EVENT_GAME_OVER = "game_over"


@dataclass(slots=True)
class MosquitoSnapshot:
    row: int
    col: int
    state: MosquitoState

    def to_dict(self) -> dict[str, Any]:
        return {"row": int(self.row), "col": int(self.col), "state": self.state.value}


@dataclass(slots=True)
class BearSnapshot:
    active_side: BearActiveSide
    arm_pos: ArmPos
    face_state: FaceState

    def to_dict(self) -> dict[str, Any]:
        return {
            "active_side": self.active_side.value,
            "arm_pos": self.arm_pos.name.lower(),
            "face_state": self.face_state.value,
        }


@dataclass(slots=True)
class ChildSnapshot:
    """
    Child state for rendering.

    `last_move`/`move_due` are authoritative timestamps (not just visuals): the
    "last gasp" blink and the bear's worried face are both derived from them.
    """

    active: bool
    position: ChildPos
    last_move: float
    move_due: float
    n_baths: int
    visible: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": bool(self.active),
            "position": self.position.name.lower(),
            "last_move": float(self.last_move),
            "move_due": float(self.move_due),
            "n_baths": int(self.n_baths),
            "visible": bool(self.visible),
        }


@dataclass(slots=True)
class SessionSnapshot:
    time: float
    score: int
    lives: int
    terminal: bool
    bear: BearSnapshot
    child: ChildSnapshot
    mosquitos: list[MosquitoSnapshot] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": float(self.time),
            "score": int(self.score),
            "lives": int(self.lives),
            "terminal": bool(self.terminal),
            "bear": self.bear.to_dict(),
            "child": self.child.to_dict(),
            "mosquitos": [m.to_dict() for m in self.mosquitos],
        }
