from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

import pygame

from models import Difficulty, GameConfig
from rendering import GameRenderer
from scoreboard import Leaderboard, LeaderboardSaveError
from session import GameSession
from username import accept_text, backspace, is_startable, normalize_username

logger = logging.getLogger(__name__)

# Simulation ticks allowed to catch up in one frame after a stall.
MAX_CATCH_UP_TICKS = 10


class Game:
    """Top-level game orchestration (screens, input, fixed-rate ticks, render)."""

    START = "start"
    PLAYING = "playing"
    RESULTS = "results"

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.leaderboard = Leaderboard(Path(self.config.scores_dir))
        self.rng = rng

        self.state = self.START
        self.username = ""
        self.difficulty = Difficulty.EASY
        self.warning: Optional[str] = None
        self.session: Optional[GameSession] = None
        self.final_score = 0
        self.save_warning: Optional[str] = None
        self._tick_accumulator_ms = 0
        self._ignore_text_until_next_batch = False

        self._init_pygame()
        self.renderer = GameRenderer(self.config)

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        window = self.config.window
        self.screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        pygame.key.start_text_input()
        pygame.key.set_repeat(250, 60)
        self.clock = pygame.time.Clock()

    # ----------------------------
    # Screen transitions
    # ----------------------------

    def start_game(self) -> None:
        """Begin a new session with the selected difficulty."""
        cfg = self.config
        self.session = GameSession(
            self.difficulty.profile,
            cfg.window.width,
            cfg.paddle.width,
            entity_size=cfg.objects.size,
            lives=cfg.lives,
            rng=self.rng,
        )
        self._tick_accumulator_ms = 0
        self.state = self.PLAYING
        logger.info(
            "starting %s game for %s", self.difficulty.name, normalize_username(self.username)
        )

    def _finish_game(self, score: int) -> None:
        """Record the final score and switch to the results screen."""
        self.final_score = score
        self.save_warning = None
        try:
            self.leaderboard.add_score(
                normalize_username(self.username), self.difficulty, score
            )
        except LeaderboardSaveError:
            self.save_warning = "Score could not be saved to disk"
        self.state = self.RESULTS

    def back_to_start(self) -> None:
        self.session = None
        self.username = ""
        self.warning = None
        # The key press that left the results screen also produces a TEXTINPUT.
        self._ignore_text_until_next_batch = True
        self.state = self.START

    # ----------------------------
    # Simulation
    # ----------------------------

    def step(self) -> None:
        """Run one simulation tick."""
        if self.session is None:
            return
        cfg = self.config
        result = self.session.tick(cfg.paddle.y, cfg.paddle.height, cfg.window.height)
        if result.ended and result.final_score is not None:
            self._finish_game(result.final_score)

    def update(self, elapsed_ms: int) -> None:
        """Advance the simulation at its fixed tick rate, independent of FPS."""
        if self.state != self.PLAYING:
            return
        tick_ms = self.config.tick_ms
        self._tick_accumulator_ms = min(
            self._tick_accumulator_ms + elapsed_ms, tick_ms * MAX_CATCH_UP_TICKS
        )
        while self._tick_accumulator_ms >= tick_ms and self.state == self.PLAYING:
            self._tick_accumulator_ms -= tick_ms
            self.step()

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_text(self, text: str) -> None:
        """Handle TEXTINPUT events (username entry on the start screen)."""
        if self.state != self.START or self._ignore_text_until_next_batch:
            return
        self.username, self.warning = accept_text(
            self.username, text, self.config.username_max_length
        )

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False

        if self.state == self.START:
            if key == pygame.K_BACKSPACE:
                self.username = backspace(self.username)
                self.warning = None
            elif key == pygame.K_UP:
                self.difficulty = self.difficulty.cycle(-1)
            elif key == pygame.K_DOWN:
                self.difficulty = self.difficulty.cycle(1)
            elif key in (pygame.K_RETURN, pygame.K_KP_ENTER) and is_startable(self.username):
                self.start_game()
        elif self.state == self.PLAYING and self.session is not None:
            step = self.config.paddle.step
            if key == pygame.K_LEFT:
                self.session.move_paddle(-step)
            elif key == pygame.K_RIGHT:
                self.session.move_paddle(step)
        elif self.state == self.RESULTS:
            if key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_r):
                self.back_to_start()
        return True

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the game should exit, True otherwise.
        """
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.TEXTINPUT:
                self._handle_text(e.text)
            if e.type == pygame.KEYDOWN:
                if not self._handle_keydown(e.key):
                    return False
        self._ignore_text_until_next_batch = False
        return True

    def render(self) -> None:
        if self.state == self.PLAYING and self.session is not None:
            self.renderer.render_play(self.screen, self.session)
        elif self.state == self.RESULTS:
            self.renderer.render_results(
                self.screen,
                normalize_username(self.username),
                self.difficulty,
                self.final_score,
                self.leaderboard.get_top(self.difficulty),
                self.save_warning,
            )
        else:
            self.renderer.render_start(
                self.screen,
                self.username,
                self.difficulty,
                self.warning,
                is_startable(self.username),
                self.leaderboard.best(self.difficulty),
            )

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            elapsed_ms = self.clock.tick(self.config.fps)
            running = self._handle_events()
            if not running:
                break
            self.update(elapsed_ms)
            self.render()

        pygame.quit()
