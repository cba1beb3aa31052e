from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pygame

from game_types import Color
from models import Difficulty, GameConfig, LeaderboardEntry
from session import GameSession

TITLE_COLOR: Color = (46, 139, 87)
TEXT_COLOR: Color = (51, 51, 51)
MUTED_COLOR: Color = (47, 79, 79)
WARNING_COLOR: Color = (200, 30, 30)
PANEL_BG: Color = (240, 248, 255)


def _vertical_gradient_surface(
    size: Tuple[int, int], top: Color, bottom: Color
) -> pygame.Surface:
    """Create a vertical gradient surface from top to bottom."""
    w, h = size
    grad = pygame.Surface((w, h))

    def lerp(a: int, b: int, t: float) -> int:
        return int(a + (b - a) * t)

    for y in range(h):
        t = y / max(1, h - 1)
        color = (
            lerp(top[0], bottom[0], t),
            lerp(top[1], bottom[1], t),
            lerp(top[2], bottom[2], t),
        )
        grad.fill(color, pygame.Rect(0, y, w, 1))
    return grad


def _blit_centered(
    surf: pygame.Surface, font: pygame.font.Font, text: str, color: Color, y: int
) -> int:
    """Draw text horizontally centered at y; returns the y below it."""
    rendered = font.render(text, True, color)
    rect = rendered.get_rect(midtop=(surf.get_width() // 2, y))
    surf.blit(rendered, rect.topleft)
    return rect.bottom


def _blit_lines(
    surf: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    color: Color,
    y: int,
    gap: int = 4,
) -> int:
    for line in lines:
        y = _blit_centered(surf, font, line, color, y) + gap
    return y


def draw_paddle(surf: pygame.Surface, session: GameSession, config: GameConfig) -> None:
    paddle = config.paddle
    rect = pygame.Rect(session.paddle_x, paddle.y, paddle.width, paddle.height)
    pygame.draw.rect(surf, paddle.color, rect, border_radius=10)


def draw_objects(surf: pygame.Surface, session: GameSession, color: Color) -> None:
    for entity in session.entities:
        if entity.y + entity.size < 0:
            continue
        pygame.draw.ellipse(surf, color, pygame.Rect(entity.x, entity.y, entity.size, entity.size))


def draw_hud(surf: pygame.Surface, hud_font: pygame.font.Font, score: int, lives: int) -> None:
    """Draw score and lives in the top-left corner."""
    surf.blit(hud_font.render(f"Score: {score}", True, TEXT_COLOR), (15, 10))
    surf.blit(hud_font.render(f"Lives: {lives}", True, TEXT_COLOR), (15, 10 + hud_font.get_height()))


def format_rankings(entries: Sequence[LeaderboardEntry]) -> List[str]:
    """Numbered "1. name: score" lines for display."""
    if not entries:
        return ["No scores yet"]
    return [f"{i}. {e.username}: {e.score}" for i, e in enumerate(entries, start=1)]


class GameRenderer:
    """Draws the start, play and results screens."""

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.window_w = config.window.width
        self.window_h = config.window.height
        self.title_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 22)
        self.hud_font = pygame.font.Font(None, 26)
        self._background = _vertical_gradient_surface(
            (self.window_w, self.window_h),
            config.window.bg_top,
            config.window.bg_bottom,
        )

    def render_start(
        self,
        screen: pygame.Surface,
        username: str,
        difficulty: Difficulty,
        warning: Optional[str],
        can_start: bool,
        best: Optional[LeaderboardEntry],
    ) -> None:
        screen.fill(PANEL_BG)
        y = _blit_centered(screen, self.title_font, "Falling Frenzy", TITLE_COLOR, 30) + 20
        y = _blit_lines(
            screen,
            self.small_font,
            ["Use LEFT and RIGHT to catch the red balls.", "Don't let them hit the bottom!"],
            TEXT_COLOR,
            y,
        )

        y = _blit_centered(screen, self.font, "Enter your username:", TEXT_COLOR, y + 20) + 6
        field = pygame.Rect(0, y, 220, self.font.get_height() + 10)
        field.centerx = self.window_w // 2
        pygame.draw.rect(screen, (255, 255, 255), field, border_radius=4)
        pygame.draw.rect(screen, MUTED_COLOR, field, width=1, border_radius=4)
        text = self.font.render(username + "_", True, TEXT_COLOR)
        screen.blit(text, (field.x + 8, field.y + 5))
        y = field.bottom + 6
        if warning:
            y = _blit_centered(screen, self.small_font, warning, WARNING_COLOR, y)

        y = _blit_centered(screen, self.font, "Difficulty (UP/DOWN):", TEXT_COLOR, y + 20) + 6
        y = _blit_centered(screen, self.font, f"< {difficulty.label} >", TITLE_COLOR, y)
        if best is not None:
            y = _blit_centered(
                screen, self.small_font, f"Best: {best.username} {best.score}", MUTED_COLOR, y + 6
            )

        hint = "Press ENTER to start" if can_start else "Type a name to start"
        _blit_centered(screen, self.font, hint, TITLE_COLOR if can_start else MUTED_COLOR, y + 30)
        pygame.display.flip()

    def render_play(self, screen: pygame.Surface, session: GameSession) -> None:
        screen.blit(self._background, (0, 0))
        draw_paddle(screen, session, self.config)
        draw_objects(screen, session, self.config.objects.color)
        draw_hud(screen, self.hud_font, session.score, session.lives)
        pygame.display.flip()

    def render_results(
        self,
        screen: pygame.Surface,
        username: str,
        difficulty: Difficulty,
        score: int,
        rankings: Sequence[LeaderboardEntry],
        warning: Optional[str],
    ) -> None:
        screen.fill(PANEL_BG)
        y = _blit_centered(screen, self.title_font, "Game Over", (0, 0, 255), 50) + 25
        y = _blit_lines(
            screen,
            self.font,
            [f"Thanks for playing: {username}", f"Difficulty: {difficulty.name}, Score: {score}"],
            TEXT_COLOR,
            y,
        )
        y = _blit_centered(screen, self.font, "Top 5 Scores:", MUTED_COLOR, y + 16) + 4
        y = _blit_lines(screen, self.small_font, format_rankings(rankings), MUTED_COLOR, y)
        if warning:
            y = _blit_centered(screen, self.small_font, warning, WARNING_COLOR, y + 8)
        _blit_lines(
            screen, self.small_font, ["ENTER: play again", "ESC: quit"], TITLE_COLOR, y + 24
        )
        pygame.display.flip()
