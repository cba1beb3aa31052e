from __future__ import annotations

import random

import pytest

from helpers import PADDLE_WIDTH, PLAY_WIDTH, park
from models import Difficulty
from session import GameSession


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def session(rng: random.Random) -> GameSession:
    """EASY session with every entity parked far above the play area."""
    s = GameSession(Difficulty.EASY.profile, PLAY_WIDTH, PADDLE_WIDTH, rng=rng)
    for entity in s.entities:
        park(entity)
    return s
