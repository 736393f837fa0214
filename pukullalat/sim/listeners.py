"""
Session lifecycle observers.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pukullalat.session import GameSession


class SessionListener:
    """
    Base class for things that react to a session (sound, animation, highscore submission).

    Subclass and override what you need; every hook defaults to a no-op. Hooks are
    called synchronously from inside `GameSession.advance()` / `GameSession.command()`,
    exactly once per event, and must not call back into `advance()`.
    """

    def on_life_lost(self, session: "GameSession") -> None:
        """A mosquito bite landed or the child fell into the water."""

    def on_game_over(self, session: "GameSession") -> None:
        """Lives reached zero; the session is terminal."""

    def on_score(self, session: "GameSession", delta: int) -> None:
        """Score changed by `delta` (a swat or a push)."""


class RecordingListener(SessionListener):
    """Collects every callback in order. Handy for tools and tests."""

    def __init__(self):
        self.calls: list[tuple] = []

    def on_life_lost(self, session: "GameSession") -> None:
        self.calls.append(("life_lost", session.lives))

    def on_game_over(self, session: "GameSession") -> None:
        self.calls.append(("game_over", session.score))

    def on_score(self, session: "GameSession", delta: int) -> None:
        self.calls.append(("score", delta))

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)
