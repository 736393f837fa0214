"""Tests for GameSession: spawning, scoring, lives, commands and listeners."""

import pytest

from pukullalat.session import GameSession
from pukullalat.sim.contracts import (
    EVENT_CHILD_FELL,
    EVENT_CHILD_PUSHED,
    EVENT_GAME_OVER,
    EVENT_LIFE_LOST,
    EVENT_MOSQUITO_BITE,
    EVENT_MOSQUITO_SPAWNED,
    ArmPos,
    BearActiveSide,
    ChildPos,
    Command,
    FaceState,
)
from pukullalat.sim.listeners import RecordingListener
from tests.conftest import make_flat_rules

NEVER = 10 ** 9


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _mosquito_rules(**overrides):
    """One mosquito at t>1000 that moves every 100 ms; no child."""
    params = dict(
        has_child=False,
        mosquito_grace_time=1000,
        mosquito_spawn_interval=NEVER,
        mosquito_move_interval=100,
    )
    params.update(overrides)
    return make_flat_rules(**params)


def _child_rules(**overrides):
    """Child from t=0 climbing one rung per second; no mosquitoes."""
    params = dict(
        mosquito_grace_time=NEVER,
        child_appear_time=0,
        child_move_interval=1000,
    )
    params.update(overrides)
    return make_flat_rules(**params)


def _types(events):
    return [e["type"] for e in events]


def _session_with_unguarded_mosquito(**overrides):
    """The bear looks right (where it cannot swat), so the mosquito always bites at t=1500."""
    recorder = RecordingListener()
    session = GameSession(rules=_mosquito_rules(**overrides), seed=1, listeners=[recorder])
    session.bear.active_side = BearActiveSide.RIGHT
    session.advance(1001)
    assert len(session.active_mosquitos) == 1
    return session, recorder


class TestSpawning:
    def test_nothing_spawns_during_grace_time(self):
        session = GameSession(rules=_mosquito_rules(), seed=1)
        assert session.advance(1000) == []
        assert session.active_mosquitos == []

    def test_catch_up_spawns_every_due_mosquito(self):
        rules = _mosquito_rules(mosquito_spawn_interval=1000, mosquito_move_interval=NEVER)
        session = GameSession(rules=rules, seed=1)
        events = session.advance(5500)
        assert _types(events) == [EVENT_MOSQUITO_SPAWNED] * 5
        assert len(session.active_mosquitos) == 5
        assert session.total_mosquito_count == 5
        assert session.mosquito_due == 6000
        assert all(m.col == 0 for m in session.active_mosquitos)

    def test_spawned_rows_are_in_grid(self):
        rules = _mosquito_rules(mosquito_spawn_interval=10, mosquito_move_interval=NEVER)
        session = GameSession(rules=rules, seed=3)
        session.advance(3000)
        assert {m.row for m in session.active_mosquitos} == {0, 1, 2}


class TestSwatting:
    def test_swat_scores_once_and_removes_mosquito(self):
        recorder = RecordingListener()
        session = GameSession(rules=_mosquito_rules(), seed=1, listeners=[recorder])
        session.advance(1001)
        row = session.active_mosquitos[0].row
        session.select_arm(BearActiveSide.LEFT, ArmPos(row))

        session.advance(1302)
        assert session.score == 1
        session.advance(1350)
        assert session.score == 1
        session.advance(1402)
        assert session.active_mosquitos == []
        assert session.lives == 3
        assert recorder.calls == [("score", 1)]


class TestLives:
    def test_bite_costs_a_life_and_resets_the_board(self):
        session, recorder = _session_with_unguarded_mosquito()
        events = session.advance(1500)
        assert _types(events) == [EVENT_MOSQUITO_BITE, EVENT_LIFE_LOST]
        assert session.lives == 2
        assert session.active_mosquitos == []
        assert session.mosquito_due == 2500
        assert session.bear.face_state is FaceState.OUCH
        assert recorder.calls == [("life_lost", 2)]

    def test_ouch_wears_off(self):
        session, _ = _session_with_unguarded_mosquito()
        session.advance(1500)
        session.advance(1999)
        assert session.bear.face_state is FaceState.OUCH
        session.advance(2000)
        assert session.bear.face_state is FaceState.HAPPY

    def test_new_mosquitoes_after_grace_time(self):
        session, _ = _session_with_unguarded_mosquito(mosquito_spawn_interval=NEVER)
        session.advance(1500)
        assert session.advance(2500) == []
        assert _types(session.advance(2501)) == [EVENT_MOSQUITO_SPAWNED]

    def test_last_life_ends_the_game(self):
        session, recorder = _session_with_unguarded_mosquito(starting_lives=1)
        events = session.advance(1500)
        assert _types(events) == [EVENT_MOSQUITO_BITE, EVENT_LIFE_LOST, EVENT_GAME_OVER]
        assert session.is_terminal
        assert recorder.calls == [("life_lost", 0), ("game_over", 0)]

    def test_terminal_session_ignores_ticks_and_commands(self):
        session, recorder = _session_with_unguarded_mosquito(starting_lives=1)
        session.advance(1500)
        before = session.snapshot().to_dict()
        assert session.advance(10000) == []
        assert session.command(Command.ARM_UP) == []
        assert session.select_arm(BearActiveSide.LEFT, ArmPos.HIGH) == []
        assert session.snapshot().to_dict() == before
        assert recorder.count("game_over") == 1

    def test_endless_mode_keeps_lives(self):
        session, recorder = _session_with_unguarded_mosquito(has_lives=False)
        events = session.advance(1500)
        assert EVENT_LIFE_LOST in _types(events)
        assert session.lives == 3
        assert not session.is_terminal
        assert session.active_mosquitos == []
        assert recorder.count("life_lost") == 1

    def test_time_must_not_go_backwards(self):
        session = GameSession(rules=_mosquito_rules(), seed=1)
        session.advance(100)
        with pytest.raises(ValueError):
            session.advance(50)
        session.advance(100)
        assert session.time == 100


class TestChild:
    def test_child_falls_without_help(self):
        session = GameSession(rules=_child_rules(), seed=1)
        session.advance(0)
        session.advance(2001)
        assert session.child.position is ChildPos.LOW
        events = session.advance(3001)
        assert _types(events) == [EVENT_CHILD_FELL, EVENT_LIFE_LOST]
        assert session.lives == 2
        assert session.child.n_baths == 1

    def test_holding_keeps_the_child_on_its_rung(self):
        session = GameSession(rules=_child_rules(), seed=1)
        session.advance(0)
        session.advance(1001)
        assert session.child.position is ChildPos.MED
        session.command(Command.RIGHT)
        assert session.bear.active_side is BearActiveSide.RIGHT
        for now in range(1500, 20001, 500):
            session.advance(now)
        assert session.child.position is ChildPos.MED
        assert session.lives == 3

    def test_pushing_scores(self):
        recorder = RecordingListener()
        session = GameSession(rules=_child_rules(), seed=1, listeners=[recorder])
        session.advance(0)
        session.advance(2001)
        session.command(Command.RIGHT)
        assert session.bear.arm_pos is ArmPos.LOW

        events = session.command(Command.ARM_UP)
        assert _types(events) == [EVENT_CHILD_PUSHED]
        assert session.child.position is ChildPos.MED
        session.command(Command.ARM_UP)
        assert session.child.position is ChildPos.HIGH
        assert session.command(Command.ARM_UP) == []
        assert session.score == 2
        assert recorder.calls == [("score", 1), ("score", 1)]

    def test_cannot_turn_right_while_child_in_water(self):
        session = GameSession(rules=_child_rules(), seed=1)
        session.advance(0)
        session.advance(3001)
        assert session.child.position is ChildPos.WATER
        session.command(Command.RIGHT)
        assert session.bear.active_side is BearActiveSide.LEFT

    def test_without_child_right_is_ignored(self):
        session = GameSession(rules=_child_rules(has_child=False), seed=1)
        session.advance(30000)
        session.command(Command.RIGHT)
        assert session.bear.active_side is BearActiveSide.LEFT
        assert not session.child.active


class TestCommands:
    def test_left_and_arm_moves(self):
        session = GameSession(rules=_mosquito_rules(), seed=1)
        session.command(Command.ARM_UP)
        assert session.bear.arm_pos is ArmPos.HIGH
        session.command(Command.ARM_DOWN)
        session.command(Command.ARM_DOWN)
        session.command(Command.ARM_DOWN)
        assert session.bear.arm_pos is ArmPos.LOW
        session.bear.active_side = BearActiveSide.RIGHT
        session.command(Command.LEFT)
        assert session.bear.active_side is BearActiveSide.LEFT

    def test_select_left_arm(self):
        session = GameSession(rules=_mosquito_rules(), seed=1)
        session.select_arm(BearActiveSide.LEFT, ArmPos.LOW)
        assert session.bear.arm_pos is ArmPos.LOW
        assert session.bear.active_side is BearActiveSide.LEFT

    def test_select_right_arm_holds_child(self):
        session = GameSession(rules=_child_rules(), seed=1)
        session.advance(0)
        session.advance(1001)
        session.select_arm(BearActiveSide.RIGHT, ArmPos.MED)
        assert session.bear.active_side is BearActiveSide.RIGHT
        assert session.child.move_due == 2001

    def test_select_arm_above_held_child_pushes(self):
        session = GameSession(rules=_child_rules(), seed=1)
        session.advance(0)
        session.advance(2001)
        session.select_arm(BearActiveSide.RIGHT, ArmPos.LOW)
        events = session.select_arm(BearActiveSide.RIGHT, ArmPos.MED)
        assert _types(events) == [EVENT_CHILD_PUSHED]
        assert session.child.position is ChildPos.MED
        assert session.score == 1


class TestListeners:
    def test_removed_listener_is_not_called(self):
        recorder = RecordingListener()
        session, _ = _session_with_unguarded_mosquito()
        session.add_listener(recorder)
        session.add_listener(recorder)
        session.remove_listener(recorder)
        session.advance(1500)
        assert recorder.calls == []


class TestDeterminism:
    def _run(self, seed):
        session = GameSession(seed=seed)
        events = []
        for frame in range(1, 3600):
            events.extend(session.advance(frame * 1000.0 / 60))
        return events, session.snapshot().to_dict()

    def test_same_seed_same_game(self):
        assert self._run(7) == self._run(7)

    def test_sessions_are_independent(self):
        """Interleaving two sessions does not change either of them."""
        a, b = GameSession(seed=5), GameSession(seed=5)
        solo = GameSession(seed=5)
        for frame in range(1, 3600):
            now = frame * 1000.0 / 60
            a.advance(now)
            b.advance(now)
            solo.advance(now)
        assert a.snapshot().to_dict() == solo.snapshot().to_dict()
        assert b.snapshot().to_dict() == solo.snapshot().to_dict()


class TestSnapshot:
    def test_snapshot_is_serializable(self):
        session = GameSession(rules=_mosquito_rules(mosquito_move_interval=NEVER), seed=1)
        session.advance(1001)
        data = session.snapshot().to_dict()
        assert data["time"] == 1001.0
        assert data["score"] == 0
        assert data["lives"] == 3
        assert data["terminal"] is False
        assert data["bear"] == {"active_side": "left", "arm_pos": "med", "face_state": "happy"}
        assert data["child"]["active"] is False
        assert data["mosquitos"] == [{"row": session.active_mosquitos[0].row, "col": 0, "state": "flying"}]

    def test_fresh_session(self, flat_rules):
        session = GameSession(rules=flat_rules, seed=2)
        snap = session.snapshot()
        assert (snap.time, snap.score, snap.lives, snap.terminal) == (0.0, 0, flat_rules.starting_lives, False)
        assert snap.mosquitos == []
        assert session.mosquito_due == flat_rules.mosquito_grace_time
