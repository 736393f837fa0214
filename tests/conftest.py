"""Shared fixtures: deterministic rules and scripted random sources."""

import pytest

from pukullalat.sim.rules import GameRules


class SequenceUniform:
    """Stands in for random.Random: returns scripted uniforms and counts draws."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def random(self):
        self.draws += 1
        return self.values.pop(0)


class ConstantNormal:
    """Stands in for RandomVariate: every normal sample is the same value."""

    def __init__(self, value=0.0):
        self.value = value

    def standard_normal(self):
        return self.value


def make_flat_rules(**overrides) -> GameRules:
    """Rules with no noise and no difficulty scaling, so every interval equals its base."""
    params = dict(
        has_difficulty_scaling=False,
        mosquito_spawn_stdev=0,
        mosquito_move_stdev=0,
        child_move_stdev=0,
    )
    params.update(overrides)
    return GameRules(**params)


@pytest.fixture
def flat_rules():
    return make_flat_rules()


@pytest.fixture
def constant_normal():
    return ConstantNormal(0.0)
