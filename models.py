from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from game_types import Color


@dataclass(frozen=True)
class SpeedRange:
    """Inclusive range of fall speeds, in pixels per tick."""

    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum <= 0 or self.maximum <= 0:
            raise ValueError(f"Speed range bounds must be positive: {self}")
        if self.minimum > self.maximum:
            raise ValueError(f"Speed range minimum exceeds maximum: {self}")

    def pick(self, rng: random.Random) -> int:
        return rng.randint(self.minimum, self.maximum)


@dataclass(frozen=True)
class DifficultyProfile:
    object_count: int
    speed_range: SpeedRange

    def __post_init__(self) -> None:
        if self.object_count <= 0:
            raise ValueError(f"Object count must be positive: {self.object_count}")


class Difficulty(Enum):
    """Fixed difficulty tiers; each member's value is its profile."""

    EASY = DifficultyProfile(3, SpeedRange(2, 4))
    MEDIUM = DifficultyProfile(4, SpeedRange(2, 5))
    HARD = DifficultyProfile(5, SpeedRange(3, 6))

    @property
    def profile(self) -> DifficultyProfile:
        return self.value

    @property
    def object_count(self) -> int:
        return self.value.object_count

    @property
    def speed_range(self) -> SpeedRange:
        return self.value.speed_range

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Parse a tier name case-insensitively ("easy", "HARD", ...)."""
        key = str(name).strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name!r}") from None

    def cycle(self, step: int = 1) -> "Difficulty":
        members = list(Difficulty)
        return members[(members.index(self) + step) % len(members)]


@dataclass(frozen=True)
class LeaderboardEntry:
    username: str
    score: int


@dataclass(frozen=True)
class WindowConfig:
    width: int
    height: int
    title: str
    bg_top: Color
    bg_bottom: Color


@dataclass(frozen=True)
class PaddleConfig:
    y: int
    width: int
    height: int
    step: int
    color: Color


@dataclass(frozen=True)
class ObjectsConfig:
    size: int
    color: Color


@dataclass(frozen=True)
class GameConfig:
    window: WindowConfig
    paddle: PaddleConfig
    objects: ObjectsConfig
    lives: int
    tick_ms: int
    fps: int
    scores_dir: str
    username_max_length: int
    log_level: str
