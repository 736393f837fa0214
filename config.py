"""
Configuration settings for Pukul Lalat.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Window settings
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 482
FPS = 60
PROTOTYPE_VERSION = "1.0.0"
GAME_TITLE = f"Pukul Lalat (v{PROTOTYPE_VERSION})"

# Board layout (pixels)
GRID_ROWS = 3
GRID_COLS = 4
CELL_WIDTH = 50
CELL_HEIGHT = 70
BOARD_ORIGIN = (220, 150)
LADDER_ORIGIN = (560, 110)
RUNG_SPACING = 70

# Colors
COLOR_BG = (196, 205, 170)
COLOR_LCD_OFF = (180, 188, 156)
COLOR_LCD_ON = (30, 34, 28)
COLOR_WATER = (65, 105, 225)
COLOR_RED = (220, 20, 60)

# Mosquito settings (milliseconds)
MOSQUITO_GRACE_TIME = 3000        # first mosquito arrives after three seconds
MOSQUITO_SPAWN_INTERVAL = 3000
MOSQUITO_SPAWN_STDEV = 700
MOSQUITO_SPAWN_INCREASES = 90000  # difficulty increases by 1 every 90 secs
MOSQUITO_MOVE_INTERVAL = 700
MOSQUITO_MOVE_STDEV = 100
MOSQUITO_MOVE_INCREASES = 200000

# Child settings (milliseconds)
CHILD_MOVE_INTERVAL = 7000
CHILD_MOVE_STDEV = 1000
CHILD_MOVE_INCREASES = 150000
CHILD_WATER_TIME = 4000           # break after the child fell in the water
CHILD_WATER_NOM = 3
CHILD_APPEAR_TIME = 25000

# Session settings
STARTING_LIVES = 3
OUCH_DURATION_MS = 500            # length of the bear's shake after losing a life

# High scores shown when the player never played before
DEFAULT_HIGHSCORES = [
    ("ABC", 500),
    ("DEF", 300),
    ("GHI", 100),
]
HIGHSCORE_TABLE_SIZE = 3
HIGHSCORES_PATH = os.getenv("PL_HIGHSCORES_PATH", os.path.join(os.path.expanduser("~"), ".pukullalat", "highscores.json"))

# Determinism / debugging
SIM_SEED = int(os.getenv("PL_SIM_SEED", "1"))
DEBUG_SIM = os.getenv("PL_DEBUG_SIM", "0").strip().lower() in ("1", "true", "yes", "on")
