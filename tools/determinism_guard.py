"""
Determinism guard (static check).

Purpose:
- Prevent accidental reintroduction of nondeterministic dependencies into simulation logic
  (seeded replays + reproducible headless runs + independent sessions).

What we flag (in simulation code):
- Wall-clock-ish time: pygame.time.get_ticks(), time.time(), time.monotonic(), datetime.now(), etc.
- Unseeded / global RNG: random.random/randint/choice/shuffle/...
- Python's hash() (process-randomized by default)
- Importing pygame at all (the simulation must run headless)

We intentionally DO NOT scan:
- pukullalat/engine.py, pukullalat/ui/** (front end can use wall-clock time)
- pukullalat/sim/timebase.py (this is the wall-clock -> session-time adapter)
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = PROJECT_ROOT / "pukullalat"


DEFAULT_SCAN_PATHS = [
    PACKAGE_ROOT / "entities",
    PACKAGE_ROOT / "sim",
    PACKAGE_ROOT / "systems",
    PACKAGE_ROOT / "session.py",
    PACKAGE_ROOT / "autoplay.py",
]

DEFAULT_EXCLUDE_PATHS = [
    PACKAGE_ROOT / "ui",
    PACKAGE_ROOT / "engine.py",
    PACKAGE_ROOT / "sim" / "timebase.py",
]


_RANDOM_ATTRS = {
    "random",
    "randint",
    "uniform",
    "choice",
    "shuffle",
    "seed",
    "randrange",
    "gauss",
    "normalvariate",
    "expovariate",
}

_TIME_ATTRS_FORBIDDEN = {
    "time",
    "monotonic",
    "perf_counter",
}

_DATETIME_ATTRS_FORBIDDEN = {
    "now",
    "utcnow",
}


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def _iter_py_files(roots: Iterable[Path], *, exclude: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        candidates = [root] if root.is_file() else list(root.rglob("*.py"))
        for p in candidates:
            if p.suffix.lower() != ".py":
                continue
            if any(_is_under(p, ex) for ex in exclude):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """
    For Attribute chains, return list like ["pygame", "time", "get_ticks"].
    For Names, return ["name"].
    """
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _display_path(file: Path) -> str:
    try:
        return str(file.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(file)


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display_path(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def _check_import(file_path: Path, node: ast.AST) -> list[dict]:
    names: list[str] = []
    if isinstance(node, ast.Import):
        names = [a.name for a in node.names]
    elif isinstance(node, ast.ImportFrom) and node.module:
        names = [node.module]
    if any(n == "pygame" or n.startswith("pygame.") for n in names):
        return [
            _violation(
                "pygame_import",
                file_path,
                node,
                "Simulation code must run headless; keep pygame in pukullalat/engine.py or sim/timebase.py.",
            )
        ]
    return []


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": _display_path(file_path),
                "line": int(getattr(e, "lineno", 0) or 0),
                "col": int(getattr(e, "offset", 0) or 0),
                "detail": f"SyntaxError: {e}",
            }
        ]

    findings: list[dict] = []

    for node in ast.walk(tree):
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            findings.extend(_check_import(file_path, node))
            continue

        if not isinstance(node, ast.Call):
            continue

        chain = _attr_chain(node.func)
        if not chain:
            continue

        # pygame.time.get_ticks()
        if chain == ["pygame", "time", "get_ticks"]:
            findings.append(
                _violation(
                    "wall_clock_time",
                    file_path,
                    node,
                    "Pass session time (ms) in explicitly instead of pygame.time.get_ticks() in simulation logic.",
                )
            )
            continue

        # time.time() / time.monotonic()
        if len(chain) == 2 and chain[0] == "time" and chain[1] in _TIME_ATTRS_FORBIDDEN:
            findings.append(
                _violation(
                    "wall_clock_time",
                    file_path,
                    node,
                    f"Use session time; avoid time.{chain[1]}() in simulation logic.",
                )
            )
            continue

        # datetime.datetime.now()/utcnow() or datetime.now()/utcnow()
        if chain[-1] in _DATETIME_ATTRS_FORBIDDEN and ("datetime" in chain):
            findings.append(
                _violation(
                    "wall_clock_time",
                    file_path,
                    node,
                    "Avoid datetime.now()/utcnow() in simulation logic; use session time.",
                )
            )
            continue

        # random.<...>()
        if len(chain) == 2 and chain[0] == "random" and chain[1] in _RANDOM_ATTRS:
            findings.append(
                _violation(
                    "global_rng",
                    file_path,
                    node,
                    "Use pukullalat.sim.determinism.make_rng(seed, tag) instead of random.* in simulation logic.",
                )
            )
            continue

        # hash(...)
        if chain == ["hash"]:
            findings.append(
                _violation(
                    "unstable_hash",
                    file_path,
                    node,
                    "Avoid Python hash() for deterministic behavior; use a stable hash (e.g. zlib.crc32) or explicit IDs.",
                )
            )
            continue

    return findings


def scan_file(file_path: Path) -> list[dict]:
    try:
        src = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        src = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, file_path)


def scan_paths(roots: Iterable[Path], *, exclude: Iterable[Path] = ()) -> list[dict]:
    findings: list[dict] = []
    for f in _iter_py_files(roots, exclude=list(exclude)):
        findings.extend(scan_file(f))
    return findings


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (simulation code)")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans the simulation modules of pukullalat.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    roots = [Path(p) for p in ns.paths] if ns.paths else list(DEFAULT_SCAN_PATHS)
    all_findings = scan_paths(roots, exclude=DEFAULT_EXCLUDE_PATHS)

    if ns.json:
        print(json.dumps({"findings": all_findings}, indent=2))
    else:
        if not all_findings:
            print("[determinism_guard] PASS: no violations found")
        else:
            print(f"[determinism_guard] FAIL: {len(all_findings)} violation(s)")
            for v in all_findings:
                print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not all_findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
