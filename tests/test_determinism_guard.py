"""The determinism guard flags wall-clock time and global randomness in simulation code."""

import importlib.util
from pathlib import Path

import pytest

TOOL_PATH = Path(__file__).resolve().parents[1] / "tools" / "determinism_guard.py"


@pytest.fixture(scope="module")
def guard():
    spec = importlib.util.spec_from_file_location("determinism_guard", TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _kinds(guard, src):
    return [f["kind"] for f in guard.scan_source(src, Path("snippet.py"))]


def test_simulation_code_is_clean(guard):
    findings = guard.scan_paths(guard.DEFAULT_SCAN_PATHS, exclude=guard.DEFAULT_EXCLUDE_PATHS)
    assert findings == []


def test_main_returns_zero_when_clean(guard, capsys):
    assert guard.main([]) == 0
    assert "PASS" in capsys.readouterr().out


@pytest.mark.parametrize(
    "src,kind",
    [
        ("import pygame\n", "pygame_import"),
        ("from pygame import time\n", "pygame_import"),
        ("pygame.time.get_ticks()\n", "wall_clock_time"),
        ("import time\ntime.time()\n", "wall_clock_time"),
        ("import time\ntime.monotonic()\n", "wall_clock_time"),
        ("import datetime\ndatetime.datetime.now()\n", "wall_clock_time"),
        ("import random\nrandom.randint(0, 2)\n", "global_rng"),
        ("import random\nrandom.gauss(0, 1)\n", "global_rng"),
        ("hash('x')\n", "unstable_hash"),
        ("def broken(:\n", "parse_error"),
    ],
)
def test_flags_nondeterminism(guard, src, kind):
    assert kind in _kinds(guard, src)


def test_seeded_generators_are_allowed(guard):
    src = "import random\nrng = random.Random(3)\nrng.randrange(3)\n"
    assert _kinds(guard, src) == []
