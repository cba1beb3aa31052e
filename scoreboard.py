from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from models import Difficulty, LeaderboardEntry

logger = logging.getLogger(__name__)

TOP_LIMIT = 5


class LeaderboardSaveError(OSError):
    """Raised when a tier's score file could not be written."""


# Characters that would split or corrupt a "username:score" line.
UNSAFE_USERNAME_CHARS = (":", "\n", "\r")


def parse_score_lines(lines: Iterable[str]) -> List[LeaderboardEntry]:
    """Parse ``username:score`` lines, skipping malformed ones."""
    entries: List[LeaderboardEntry] = []
    for line in lines:
        if not line.strip():
            continue
        parts = line.split(":")
        if len(parts) != 2:
            logger.debug("skipping score line with %s fields: %r", len(parts), line)
            continue
        user, sc = parts
        try:
            entries.append(LeaderboardEntry(user, int(sc)))
        except ValueError:
            logger.debug("skipping score line with bad score: %r", line)
            continue
    return entries


def format_score_lines(entries: Iterable[LeaderboardEntry]) -> str:
    return "".join(f"{e.username}:{e.score}\n" for e in entries)


def rank(entries: Iterable[LeaderboardEntry], limit: int = TOP_LIMIT) -> List[LeaderboardEntry]:
    """Sort by score, highest first, keeping insertion order among ties."""
    return sorted(entries, key=lambda e: e.score, reverse=True)[:limit]


class Leaderboard:
    """Per-difficulty top scores, one plain text file per tier.

    Every mutation is written straight through to disk, so there is nothing
    to flush on shutdown.
    """

    def __init__(self, root: Path, limit: int = TOP_LIMIT) -> None:
        if limit <= 0:
            raise ValueError(f"Leaderboard limit must be positive: {limit}")
        self.root = Path(root)
        self.limit = limit
        self._scores: Dict[Difficulty, List[LeaderboardEntry]] = {}
        for tier in Difficulty:
            self.load(tier)

    def path_for(self, tier: Difficulty) -> Path:
        return self.root / f"{tier.name}.txt"

    def load(self, tier: Difficulty) -> List[LeaderboardEntry]:
        """Read the tier's file into memory; a missing file means no scores yet."""
        path = self.path_for(tier)
        entries: List[LeaderboardEntry] = []
        if path.exists():
            try:
                entries = parse_score_lines(path.read_text(encoding="utf-8").splitlines())
            except (OSError, UnicodeDecodeError):
                logger.warning("could not read scores from %s, starting empty", path, exc_info=True)
                entries = []

        self._scores[tier] = rank(entries, self.limit)
        logger.debug("loaded %s %s scores from %s", len(self._scores[tier]), tier.name, path)
        return list(self._scores[tier])

    def save(self, tier: Difficulty) -> None:
        """Overwrite the tier's file with the current ranking.

        Raises:
            LeaderboardSaveError: If the directory or file cannot be written.
        """
        path = self.path_for(tier)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(format_score_lines(self._scores[tier]), encoding="utf-8")
        except OSError as e:
            logger.error("could not save %s scores to %s: %s", tier.name, path, e)
            raise LeaderboardSaveError(f"Could not save scores to {path}: {e}") from e

    def add_score(self, username: str, tier: Difficulty, score: int) -> None:
        """Insert a score, keep the top entries and persist them.

        The in-memory ranking is updated even when writing fails.

        Raises:
            ValueError: If the username contains ":" or a line break.
            LeaderboardSaveError: If the tier file cannot be written.
        """
        if any(ch in username for ch in UNSAFE_USERNAME_CHARS):
            raise ValueError(f"Username cannot contain ':' or line breaks: {username!r}")
        entries = self._scores[tier]
        entries.append(LeaderboardEntry(username, int(score)))
        self._scores[tier] = rank(entries, self.limit)
        logger.info("recorded %s for %s on %s", score, username, tier.name)
        self.save(tier)

    def get_top(self, tier: Difficulty) -> List[LeaderboardEntry]:
        return list(self._scores.get(tier, []))

    def best(self, tier: Difficulty) -> Optional[LeaderboardEntry]:
        top = self._scores.get(tier)
        return top[0] if top else None
