from __future__ import annotations

from typing import Optional, Tuple

DEFAULT_USERNAME = "Player"
# ':' separates name and score in the score files.
FORBIDDEN_CHARS = ":"


def accept_text(current: str, text: str, max_length: int) -> Tuple[str, Optional[str]]:
    """Append typed text to a username field.

    Returns:
        (new_value, warning). The value is unchanged when the input is refused;
        the warning is None when the input was accepted.
    """
    cleaned = "".join(ch for ch in text if ch.isprintable() and ch not in FORBIDDEN_CHARS)
    if not cleaned:
        if any(ch in FORBIDDEN_CHARS for ch in text):
            return current, f"Username cannot contain '{FORBIDDEN_CHARS}'"
        return current, None
    if len(current) + len(cleaned) > max_length:
        return current, f"Username cannot exceed {max_length} characters"
    return current + cleaned, None


def backspace(current: str) -> str:
    return current[:-1]


def is_startable(current: str) -> bool:
    return bool(current.strip())


def normalize_username(current: str) -> str:
    """Trim whitespace; a blank name becomes the default player name."""
    return current.strip() or DEFAULT_USERNAME
