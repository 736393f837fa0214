"""
Headless simulation runner.

Plays sessions with a scripted player (no window, no wall-clock) and prints a summary
per session plus averages, so difficulty tuning can be checked from the command line.

Usage:
  python tools/simulate.py --seconds 120 --seed 3
  python tools/simulate.py --policy swatter --sessions 20 --json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure imports work when running as `python tools/simulate.py`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pukullalat.autoplay import POLICIES, run_simulation  # noqa: E402
from pukullalat.sim.rules import GameRules  # noqa: E402


def build_rules(ns: argparse.Namespace) -> GameRules:
    return GameRules(
        has_child=not ns.no_child,
        has_lives=not ns.endless,
        has_difficulty_scaling=not ns.flat,
    )


def summarize(summaries: list[dict]) -> dict:
    n = max(1, len(summaries))
    return {
        "sessions": len(summaries),
        "avg_score": sum(s["score"] for s in summaries) / n,
        "avg_time_s": sum(s["time_ms"] for s in summaries) / n / 1000.0,
        "game_overs": sum(1 for s in summaries if s["game_over"]),
        "avg_bites": sum(s["bites"] for s in summaries) / n,
        "avg_falls": sum(s["falls"] for s in summaries) / n,
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Run headless Pukul Lalat sessions")
    ap.add_argument("--seconds", type=float, default=120.0, help="max session time per run")
    ap.add_argument("--seed", type=int, default=1, help="seed of the first session")
    ap.add_argument("--sessions", type=int, default=1, help="number of sessions (seeds seed..seed+n-1)")
    ap.add_argument("--fps", type=int, default=60, help="frames per simulated second")
    ap.add_argument("--policy", choices=sorted(POLICIES), default="keeper", help="scripted player")
    ap.add_argument("--no-child", action="store_true", help="mosquitoes only")
    ap.add_argument("--endless", action="store_true", help="life losses never end the game")
    ap.add_argument("--flat", action="store_true", help="disable difficulty scaling")
    ap.add_argument("--json", action="store_true", help="emit machine-readable JSON")
    ns = ap.parse_args(argv)

    if ns.sessions < 1 or ns.fps < 1 or ns.seconds <= 0:
        print("[simulate] ERROR: --sessions, --fps and --seconds must be positive")
        return 2

    rules = build_rules(ns)
    summaries = []
    for i in range(ns.sessions):
        s = run_simulation(seconds=ns.seconds, seed=ns.seed + i, policy=ns.policy, fps=ns.fps, rules=rules)
        summaries.append(s.to_dict())
        if not ns.json:
            print(
                f"[simulate] seed={s.seed} policy={s.policy} t={s.time_ms / 1000.0:.1f}s "
                f"score={s.score} lives={s.lives} spawned={s.mosquitos_spawned} "
                f"swats={s.swats} bites={s.bites} falls={s.falls} pushes={s.pushes}"
                + (" GAME OVER" if s.game_over else "")
            )

    totals = summarize(summaries)
    if ns.json:
        print(json.dumps({"sessions": summaries, "summary": totals}, indent=2))
    else:
        print(
            f"[simulate] DONE: sessions={totals['sessions']} avg_score={totals['avg_score']:.1f} "
            f"avg_time={totals['avg_time_s']:.1f}s game_overs={totals['game_overs']}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
