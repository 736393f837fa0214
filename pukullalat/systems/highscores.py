"""
High score table (top 3) and its file-backed store.
"""
from __future__ import annotations

import json
import os
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, Optional

from config import DEFAULT_HIGHSCORES, HIGHSCORE_TABLE_SIZE

NAME_PATTERN = re.compile(r"^[A-Z]{3}$")
MAX_SCORE = 99999


class InvalidHighscoreError(ValueError):
    """Name or score does not fit the table (3 capital letters, 0..99999)."""


@dataclass(slots=True)
class HighscoreEntry:
    name: str
    score: int

    def to_dict(self) -> dict:
        return asdict(self)


def is_valid_name(name) -> bool:
    return isinstance(name, str) and NAME_PATTERN.match(name) is not None


def is_valid_score(score) -> bool:
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return 0 <= score <= MAX_SCORE


class HighscoreTable:
    """Top entries, best first. Equal scores keep their insertion order."""

    def __init__(self, entries: Optional[Iterable[HighscoreEntry]] = None, size: int = HIGHSCORE_TABLE_SIZE):
        self.size = int(size)
        if entries is None:
            entries = [HighscoreEntry(name, score) for name, score in DEFAULT_HIGHSCORES]
        self.entries: list[HighscoreEntry] = list(entries)
        self._sort_and_truncate()

    def _sort_and_truncate(self) -> None:
        # sorted() is stable, so ties stay in insertion order.
        self.entries = sorted(self.entries, key=lambda e: -e.score)[: self.size]

    def qualifies(self, score: int) -> bool:
        """Would `score` make it onto the table?"""
        if len(self.entries) < self.size:
            return True
        return score > self.entries[-1].score

    def add(self, name: str, score: int) -> list[HighscoreEntry]:
        if not is_valid_name(name):
            raise InvalidHighscoreError(f"name must be three capital letters, got {name!r}")
        if not is_valid_score(score):
            raise InvalidHighscoreError(f"score must be an integer in 0..{MAX_SCORE}, got {score!r}")
        self.entries.append(HighscoreEntry(name, int(score)))
        self._sort_and_truncate()
        return list(self.entries)

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entries]

    @classmethod
    def from_list(cls, raw: Iterable[dict], size: int = HIGHSCORE_TABLE_SIZE) -> "HighscoreTable":
        entries = []
        for d in raw:
            name, score = d.get("name"), d.get("score")
            if is_valid_name(name) and is_valid_score(score):
                entries.append(HighscoreEntry(name, score))
        return cls(entries, size=size)


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


class HighscoreStore:
    """
    File-backed store.

    - highscores.json: `[{"name": "ABC", "score": 500}, ...]`, best first
    - a missing or unreadable file yields the default table
    """

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> HighscoreTable:
        if not self.path.exists():
            return HighscoreTable()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            print(f"[highscores] WARN: could not read {self.path}: {e}; using defaults")
            return HighscoreTable()
        if not isinstance(raw, list):
            print(f"[highscores] WARN: unexpected content in {self.path}; using defaults")
            return HighscoreTable()
        return HighscoreTable.from_list(d for d in raw if isinstance(d, dict))

    def save(self, table: HighscoreTable) -> None:
        _atomic_write_text(self.path, json.dumps(table.to_list(), indent=2))

    def submit(self, name: str, score: int) -> list[HighscoreEntry]:
        """Load, add, save. Raises InvalidHighscoreError for bad input (nothing is written)."""
        table = self.load()
        entries = table.add(name, score)
        self.save(table)
        return entries
