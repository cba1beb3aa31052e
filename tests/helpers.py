from __future__ import annotations

from falling import FallingEntity
from session import GameSession, TickResult

PLAY_WIDTH = 400
PLAY_HEIGHT = 470
PADDLE_WIDTH = 60
PADDLE_HEIGHT = 20
PADDLE_Y = 450


def park(entity: FallingEntity) -> None:
    """Move an entity so far up that it cannot be caught or missed for a while."""
    entity.x = 0
    entity.y = -10_000
    entity.speed = 2


def tick(s: GameSession) -> TickResult:
    return s.tick(PADDLE_Y, PADDLE_HEIGHT, PLAY_HEIGHT)
