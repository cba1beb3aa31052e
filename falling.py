from __future__ import annotations

import random
from typing import Optional

from models import SpeedRange

SPAWN_HEIGHT = 200
DEFAULT_SIZE = 20


class FallingEntity:
    """One falling ball; reused for the whole session, never destroyed."""

    def __init__(
        self,
        x: int = 0,
        y: int = 0,
        size: int = DEFAULT_SIZE,
        speed: int = 3,
        rng: Optional[random.Random] = None,
    ) -> None:
        if size <= 0:
            raise ValueError(f"Entity size must be positive: {size}")
        self.x = x
        self.y = y
        self.size = size
        self.speed = speed
        self._rng = rng if rng is not None else random

    def __repr__(self) -> str:
        return f"FallingEntity(x={self.x}, y={self.y}, size={self.size}, speed={self.speed})"

    def advance(self) -> None:
        """Move the entity down by its speed."""
        self.y += self.speed

    def reset_above(self, play_width: int, speed_range: SpeedRange) -> None:
        """Respawn above the visible area with a fresh x position and speed.

        Args:
            play_width: Width of the play area; must exceed the entity size.
            speed_range: Inclusive range the new speed is drawn from.

        Raises:
            ValueError: If play_width leaves no room for the entity.
        """
        if play_width <= self.size:
            raise ValueError(
                f"Play width {play_width} leaves no room for an entity of size {self.size}"
            )
        self.x = self._rng.randrange(0, play_width - self.size)
        self.y = self._rng.randrange(-SPAWN_HEIGHT, 0)
        self.speed = speed_range.pick(self._rng)
