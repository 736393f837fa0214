"""
Game systems package.
"""
from .highscores import HighscoreEntry, HighscoreStore, HighscoreTable, InvalidHighscoreError
