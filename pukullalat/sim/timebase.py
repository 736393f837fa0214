"""
Session time abstraction.

The simulation only ever sees explicit millisecond timestamps. This clock turns
pygame's ticks into *session* time for the front end:
- starts at 0 when a game starts
- stops advancing while paused (the session simply receives no new timestamps)
- can be driven manually (`set_now_ms`) by headless tools
"""

from __future__ import annotations

from typing import Optional

import pygame


class SceneClock:
    def __init__(self):
        self._origin_ms: Optional[int] = None
        self._paused_at_ms: Optional[int] = None
        self._manual_ms: Optional[int] = None

    @staticmethod
    def _ticks() -> int:
        return int(pygame.time.get_ticks())

    def start(self) -> None:
        self._origin_ms = self._ticks()
        self._paused_at_ms = None

    @property
    def paused(self) -> bool:
        return self._paused_at_ms is not None

    def pause(self) -> None:
        if self._paused_at_ms is None:
            self._paused_at_ms = self._ticks()

    def resume(self) -> None:
        if self._paused_at_ms is None or self._origin_ms is None:
            self._paused_at_ms = None
            return
        # Shift the origin so the paused span never reaches the session.
        self._origin_ms += self._ticks() - self._paused_at_ms
        self._paused_at_ms = None

    def set_now_ms(self, now_ms: Optional[int]) -> None:
        """Drive the clock manually. None returns to pygame ticks."""
        self._manual_ms = None if now_ms is None else int(now_ms)

    def now_ms(self) -> int:
        """Milliseconds since `start()` (0 before start)."""
        if self._manual_ms is not None:
            return self._manual_ms
        if self._origin_ms is None:
            return 0
        ref = self._paused_at_ms if self._paused_at_ms is not None else self._ticks()
        return max(0, ref - self._origin_ms)
