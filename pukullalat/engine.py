"""
Main game engine - handles the game loop, input, scenes and drawing.

Everything here is presentation: the simulation lives in `GameSession`, which this
engine feeds with session time and commands and reads back through snapshots.
"""
from enum import Enum, auto

import pygame
from config import (
    WINDOW_WIDTH, WINDOW_HEIGHT, FPS, GAME_TITLE,
    GRID_ROWS, GRID_COLS, CELL_WIDTH, CELL_HEIGHT, BOARD_ORIGIN,
    LADDER_ORIGIN, RUNG_SPACING,
    COLOR_BG, COLOR_LCD_OFF, COLOR_LCD_ON, COLOR_WATER, COLOR_RED,
    HIGHSCORES_PATH, SIM_SEED,
)
from pukullalat.session import GameSession
from pukullalat.sim.contracts import (
    ArmPos, BearActiveSide, ChildPos, Command, FaceState, MosquitoState, SessionSnapshot,
)
from pukullalat.sim.listeners import SessionListener
from pukullalat.sim.timebase import SceneClock
from pukullalat.systems.highscores import HighscoreStore, InvalidHighscoreError
from pukullalat.ui.font_cache import get_font, render_text_cached
from pukullalat.ui.name_entry import NameEntry

# WASD and arrow keys both play.
KEY_COMMANDS = {
    pygame.K_a: Command.LEFT,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_d: Command.RIGHT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_w: Command.ARM_UP,
    pygame.K_UP: Command.ARM_UP,
    pygame.K_s: Command.ARM_DOWN,
    pygame.K_DOWN: Command.ARM_DOWN,
}

START_KEYS = set(KEY_COMMANDS) | {pygame.K_RETURN, pygame.K_KP_ENTER}

# Delay between the last life lost and the name entry screen.
GAME_OVER_DELAY_MS = 2000


class Scene(Enum):
    INTRO = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    HIGHSCORES = auto()


class _EngineListener(SessionListener):
    """Remembers when the game ended so the engine can switch scenes after a pause."""

    def __init__(self):
        self.game_over_at_ms = None

    def on_game_over(self, session):
        self.game_over_at_ms = pygame.time.get_ticks()


class GameEngine:
    """Main game engine class."""

    def __init__(self, seed: int = SIM_SEED, highscores_path: str = HIGHSCORES_PATH):
        pygame.init()
        pygame.font.init()

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(GAME_TITLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.seed = int(seed)
        self.games_played = 0
        self.scene = Scene.INTRO
        self.scene_clock = SceneClock()
        self.session = None
        self.listener = None
        self.name_entry = NameEntry()
        self.highscore_store = HighscoreStore(highscores_path)
        self.highscores = self.highscore_store.load().entries

    # ------------------------------------------------------------------
    # Scenes
    # ------------------------------------------------------------------

    def start_game(self):
        """Start a fresh session (new seed stream per game)."""
        self.listener = _EngineListener()
        self.session = GameSession(seed=self.seed + self.games_played, listeners=[self.listener])
        self.games_played += 1
        self.scene_clock.start()
        self.scene = Scene.PLAYING

    def submit_name(self):
        try:
            self.highscores = self.highscore_store.submit(self.name_entry.text, self.session.score)
        except InvalidHighscoreError as e:
            print(f"Warning: highscore rejected: {e}")
        except OSError as e:
            print(f"Warning: could not save highscores: {e}")
        self.scene = Scene.HIGHSCORES

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_events(self):
        """Process input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event)

    def handle_keydown(self, event):
        """Handle keyboard input for the active scene."""
        if self.scene is Scene.INTRO:
            if event.key in START_KEYS:
                self.start_game()

        elif self.scene is Scene.PLAYING:
            if event.key == pygame.K_ESCAPE:
                if self.scene_clock.paused:
                    self.scene_clock.resume()
                else:
                    self.scene_clock.pause()
                return
            cmd = KEY_COMMANDS.get(event.key)
            if cmd is not None and not self.scene_clock.paused:
                self.session.command(cmd)

        elif self.scene is Scene.GAME_OVER:
            self.handle_name_key(event)

        elif self.scene is Scene.HIGHSCORES:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.scene = Scene.INTRO
                self.name_entry = NameEntry()

    def handle_name_key(self, event):
        entry = self.name_entry
        if pygame.K_a <= event.key <= pygame.K_z:
            entry.type_letter(chr(event.key))
        elif event.key in (pygame.K_BACKSPACE, pygame.K_LEFT):
            entry.back()
        elif event.key == pygame.K_RIGHT:
            if entry.forward():
                self.submit_name()
        elif event.key == pygame.K_DOWN:
            entry.cycle_down()
        elif event.key == pygame.K_UP:
            entry.cycle_up()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if entry.is_complete:
                self.submit_name()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self):
        """Update game state."""
        if self.scene is not Scene.PLAYING or self.scene_clock.paused:
            return
        self.session.advance(self.scene_clock.now_ms())
        if self.listener.game_over_at_ms is not None:
            if pygame.time.get_ticks() - self.listener.game_over_at_ms >= GAME_OVER_DELAY_MS:
                self.scene = Scene.GAME_OVER

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self):
        """Render the active scene."""
        self.screen.fill(COLOR_BG)
        if self.scene is Scene.INTRO:
            self._render_centered(["Pukul Lalat", "", "WASD/Arrows => Play"])
        elif self.scene is Scene.PLAYING:
            self.render_board(self.session.snapshot())
            if self.scene_clock.paused:
                self._render_centered(["Paused"])
        elif self.scene is Scene.GAME_OVER:
            self._render_centered([
                "Game over...",
                f"Score {self.session.score:05d}",
                "Your name:",
                " ".join(self.name_entry.text),
                " ".join("^" if i == self.name_entry.cursor else " " for i in range(3)),
            ])
        elif self.scene is Scene.HIGHSCORES:
            lines = ["Highscores", ""]
            lines += [f"{e.name}  {e.score:05d}" for e in self.highscores]
            self._render_centered(lines)
        pygame.display.flip()

    def _render_centered(self, lines):
        y = WINDOW_HEIGHT // 2 - len(lines) * 15
        for line in lines:
            if line:
                surf = render_text_cached(28, line, COLOR_LCD_ON)
                self.screen.blit(surf, (WINDOW_WIDTH // 2 - surf.get_width() // 2, y))
            y += 30

    def render_board(self, snap: SessionSnapshot):
        """Draw the LCD-style board: mosquito grid, bear arms, ladder, HUD."""
        ox, oy = BOARD_ORIGIN

        # Mosquito cells (unlit segments first, lit ones on top)
        lit = {(m.row, m.col): m for m in snap.mosquitos if m.col < GRID_COLS}
        for row in range(GRID_ROWS):
            for col in range(GRID_COLS):
                center = (ox + col * CELL_WIDTH + 15, oy + row * CELL_HEIGHT + 15)
                m = lit.get((row, col))
                pygame.draw.circle(self.screen, COLOR_LCD_ON if m else COLOR_LCD_OFF, center, 15)
                if m is not None and m.state is MosquitoState.DYING:
                    pygame.draw.line(self.screen, COLOR_RED, (center[0] - 12, center[1] - 12), (center[0] + 12, center[1] + 12), 3)
                    pygame.draw.line(self.screen, COLOR_RED, (center[0] - 12, center[1] + 12), (center[0] + 12, center[1] - 12), 3)

        # Bear body and arms
        body_x = ox + GRID_COLS * CELL_WIDTH + 30
        pygame.draw.rect(self.screen, COLOR_LCD_ON, (body_x, oy + 20, 90, 160), 2)
        for side, arm_x in ((BearActiveSide.LEFT, body_x - 25), (BearActiveSide.RIGHT, body_x + 95)):
            for arm in ArmPos:
                on = snap.bear.active_side is side and snap.bear.arm_pos is arm
                pygame.draw.rect(self.screen, COLOR_LCD_ON if on else COLOR_LCD_OFF, (arm_x, oy + int(arm) * CELL_HEIGHT, 20, 40))
        face = {FaceState.HAPPY: ":)", FaceState.HMM: ":/", FaceState.OUCH: ":O"}[snap.bear.face_state]
        self.screen.blit(render_text_cached(36, face, COLOR_LCD_ON), (body_x + 30, oy + 40))

        # Ladder + water
        lx, ly = LADDER_ORIGIN
        for pos in ChildPos:
            rect = (lx, ly + (int(pos) - 1) * RUNG_SPACING, 40, 30)
            color = COLOR_WATER if pos is ChildPos.WATER else COLOR_LCD_OFF
            pygame.draw.rect(self.screen, color, rect, 0 if pos is ChildPos.WATER else 2)
        if snap.child.active and snap.child.visible:
            center = (lx + 20, ly + (int(snap.child.position) - 1) * RUNG_SPACING + 15)
            pygame.draw.circle(self.screen, COLOR_LCD_ON, center, 12)

        # HUD
        self.screen.blit(get_font(32).render(f"{snap.score:05d}", True, COLOR_LCD_ON), (ox + 180, 40))
        for i in range(snap.lives):
            pygame.draw.rect(self.screen, COLOR_RED, (ox + i * 24, 44, 18, 18))

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self):
        """Main game loop."""
        while self.running:
            self.clock.tick(FPS)
            self.handle_events()
            self.update()
            self.render()

        pygame.quit()
