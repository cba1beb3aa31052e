from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from falling import DEFAULT_SIZE, FallingEntity
from models import DifficultyProfile
from utils import clamp_int

logger = logging.getLogger(__name__)

STARTING_LIVES = 3


@dataclass(frozen=True)
class TickResult:
    """Outcome of one simulation step.

    ``ended`` is only true on the tick that drove lives to zero; later ticks
    return an empty result.
    """

    caught: int = 0
    missed: int = 0
    ended: bool = False
    final_score: Optional[int] = None


class GameSession:
    """One playthrough: falling entities, paddle, score and lives."""

    def __init__(
        self,
        profile: DifficultyProfile,
        play_width: int,
        paddle_width: int,
        *,
        entity_size: int = DEFAULT_SIZE,
        lives: int = STARTING_LIVES,
        rng: Optional[random.Random] = None,
    ) -> None:
        if play_width <= entity_size:
            raise ValueError(
                f"Play width {play_width} must exceed the entity size {entity_size}"
            )
        if paddle_width <= 0 or paddle_width > play_width:
            raise ValueError(
                f"Paddle width {paddle_width} must be in (0, {play_width}]"
            )
        if lives <= 0:
            raise ValueError(f"Starting lives must be positive: {lives}")

        self.profile = profile
        self.play_width = play_width
        self.paddle_width = paddle_width
        self.paddle_x = (play_width - paddle_width) // 2
        self.score = 0
        self.lives = lives
        self.ended = False

        self.entities: List[FallingEntity] = []
        for _ in range(profile.object_count):
            entity = FallingEntity(size=entity_size, rng=rng)
            entity.reset_above(play_width, profile.speed_range)
            self.entities.append(entity)

        logger.debug(
            "session started: %s objects, speeds %s..%s, width %s",
            profile.object_count,
            profile.speed_range.minimum,
            profile.speed_range.maximum,
            play_width,
        )

    @property
    def max_paddle_x(self) -> int:
        return self.play_width - self.paddle_width

    def move_paddle(self, delta: int) -> None:
        """Shift the paddle horizontally, keeping it inside the play area."""
        if self.ended:
            return
        self.paddle_x = clamp_int(self.paddle_x + delta, 0, self.max_paddle_x)

    def _is_caught(self, entity: FallingEntity, paddle_y: int) -> bool:
        # Bounding square of the ball against the paddle's x span, below its top edge.
        return (
            entity.y + entity.size >= paddle_y
            and entity.x + entity.size >= self.paddle_x
            and entity.x <= self.paddle_x + self.paddle_width
        )

    def tick(self, paddle_y: int, paddle_height: int, play_height: int) -> TickResult:
        """Advance every entity one step and resolve catches and misses.

        Args:
            paddle_y: Top edge of the paddle.
            paddle_height: Paddle height; the catch test only uses the top edge.
            play_height: Bottom boundary; an entity below it is a miss.

        Returns:
            What happened this tick, including the termination signal.
        """
        if self.ended:
            return TickResult()

        caught = 0
        missed = 0
        for entity in self.entities:
            entity.advance()

            if self._is_caught(entity, paddle_y):
                self.score += 1
                caught += 1
                logger.debug("caught %r, score=%s", entity, self.score)
                entity.reset_above(self.play_width, self.profile.speed_range)
                continue

            if entity.y > play_height:
                self.lives -= 1
                missed += 1
                logger.debug("missed %r, lives=%s", entity, self.lives)
                entity.reset_above(self.play_width, self.profile.speed_range)

                if self.lives <= 0:
                    self.lives = 0
                    self.ended = True
                    logger.info("game over with score %s", self.score)
                    return TickResult(caught, missed, True, self.score)

        return TickResult(caught, missed)
