"""
Three-letter player name entry for the game-over screen.

Arcade style: a cursor over "___"; type letters, or cycle the letter under the cursor
with up/down. Pure state, no pygame, so it works with any input layer.
"""
from __future__ import annotations

import string

BLANK = "_"
NAME_LENGTH = 3


class NameEntry:
    def __init__(self):
        self.letters = [BLANK] * NAME_LENGTH
        self.cursor = 0

    @property
    def text(self) -> str:
        return "".join(self.letters)

    @property
    def is_complete(self) -> bool:
        return BLANK not in self.letters

    def move_cursor(self, offset: int) -> None:
        self.cursor = (self.cursor + offset) % NAME_LENGTH

    def type_letter(self, letter: str) -> None:
        letter = letter.upper()
        if len(letter) != 1 or letter not in string.ascii_uppercase:
            return
        self.letters[self.cursor] = letter
        self.move_cursor(1)

    def cycle_down(self) -> None:
        """_ -> A -> B ... -> Z -> _"""
        cur = self.letters[self.cursor]
        if cur == BLANK:
            self.letters[self.cursor] = "A"
        elif cur == "Z":
            self.letters[self.cursor] = BLANK
        else:
            self.letters[self.cursor] = chr(ord(cur) + 1)

    def cycle_up(self) -> None:
        """_ -> Z -> Y ... -> A -> _"""
        cur = self.letters[self.cursor]
        if cur == BLANK:
            self.letters[self.cursor] = "Z"
        elif cur == "A":
            self.letters[self.cursor] = BLANK
        else:
            self.letters[self.cursor] = chr(ord(cur) - 1)

    def back(self) -> None:
        self.move_cursor(-1)

    def forward(self) -> bool:
        """Move right. Returns True when the name is complete (touch devices have no Enter)."""
        self.move_cursor(1)
        return self.is_complete
