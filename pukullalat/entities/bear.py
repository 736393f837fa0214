"""
The player's bear.
"""
from __future__ import annotations

from typing import Iterable

from pukullalat.entities.child import Child
from pukullalat.entities.mosquito import Mosquito
from pukullalat.sim.contracts import (
    ArmPos,
    BearActiveSide,
    BearSnapshot,
    ChildPos,
    FaceState,
    MosquitoState,
)

# Past this share of the last-rung climb the bear gets worried about the child.
CHILD_DANGER_FRACTION = 0.5


class Bear:
    """
    Player-controlled avatar: one active side and one arm height.

    Left arm at height `h` swats mosquitoes in row `h`. Right arm at height
    `child.position - 1` is where the child is caught; arm heights and rungs use
    inverted encodings, so that offset is the alignment rule everywhere.
    """

    def __init__(self):
        self.face_state = FaceState.HAPPY
        self.active_side = BearActiveSide.LEFT
        self.arm_pos = ArmPos.MED

    def swats(self, row: int) -> bool:
        return self.active_side is BearActiveSide.LEFT and int(self.arm_pos) == int(row)

    def is_aligned_with(self, child: Child) -> bool:
        return int(self.arm_pos) == int(child.position) - 1

    def arm_up(self) -> bool:
        if self.arm_pos > ArmPos.HIGH:
            self.arm_pos = ArmPos(int(self.arm_pos) - 1)
            return True
        return False

    def arm_down(self) -> bool:
        if self.arm_pos < ArmPos.LOW:
            self.arm_pos = ArmPos(int(self.arm_pos) + 1)
            return True
        return False

    def set_ouch(self) -> None:
        self.face_state = FaceState.OUCH

    def clear_ouch(self) -> None:
        if self.face_state is FaceState.OUCH:
            self.face_state = FaceState.HAPPY

    def update(self, mosquitos: Iterable[Mosquito], child: Child, now: float) -> None:
        """Derive the face and keep holding the child while aligned on the right."""
        if self.face_state is not FaceState.OUCH:
            self.face_state = FaceState.HAPPY
            if any(m.state is MosquitoState.BITING for m in mosquitos):
                self.face_state = FaceState.HMM
            if (
                child.position == ChildPos.LOW
                and child.climb_fraction(now) > CHILD_DANGER_FRACTION
                and self.active_side is not BearActiveSide.RIGHT
            ):
                self.face_state = FaceState.HMM

        if self.active_side is BearActiveSide.RIGHT and self.is_aligned_with(child):
            child.hold(now)

    def hold_child(self, child: Child, now: float) -> None:
        """After switching right: bring the arm down to the child and hold it if aligned."""
        catch_pos = int(child.position) - 1
        if int(self.arm_pos) < catch_pos and catch_pos <= ArmPos.LOW:
            self.arm_pos = ArmPos(catch_pos)
        if self.is_aligned_with(child):
            child.hold(now)

    def push_child(self, child: Child, now: float) -> bool:
        """Push the child one rung up if the arm is above it. Returns True on a push."""
        if int(self.arm_pos) < int(child.position) - 1:
            return child.push(now)
        return False

    def snapshot(self) -> BearSnapshot:
        return BearSnapshot(active_side=self.active_side, arm_pos=self.arm_pos, face_state=self.face_state)
