from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from config_io import load_config_or_defaults
from models import GameConfig, ObjectsConfig, PaddleConfig, WindowConfig
from utils import as_color, as_int, deep_get

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_window_config(cfg: Dict[str, Any]) -> WindowConfig:
    """Parse window settings from config data.

    Args:
        cfg: Full config dictionary.

    Returns:
        WindowConfig with defaults applied and sizes clamped.
    """
    title_raw = deep_get(cfg, "window.title", "Falling Frenzy")
    title = str(title_raw).strip() if title_raw is not None else ""
    return WindowConfig(
        width=as_int(deep_get(cfg, "window.width", 400), 400, 160, 3840),
        height=as_int(deep_get(cfg, "window.height", 470), 470, 160, 2160),
        title=title or "Falling Frenzy",
        bg_top=as_color(deep_get(cfg, "window.bg_top", None), (230, 242, 255)),
        bg_bottom=as_color(deep_get(cfg, "window.bg_bottom", None), (207, 232, 255)),
    )


def parse_paddle_config(cfg: Dict[str, Any], window: WindowConfig) -> PaddleConfig:
    """Parse paddle settings; the paddle always fits inside the window."""
    width = as_int(deep_get(cfg, "paddle.width", 60), 60, 1, window.width)
    height = as_int(deep_get(cfg, "paddle.height", 20), 20, 1, window.height)
    # Keep the whole paddle on screen.
    y = as_int(deep_get(cfg, "paddle.y", 450), 450, 0, window.height - height)
    return PaddleConfig(
        y=y,
        width=width,
        height=height,
        step=as_int(deep_get(cfg, "paddle.step", 40), 40, 1, window.width),
        color=as_color(deep_get(cfg, "paddle.color", None), (30, 144, 255)),
    )


def parse_objects_config(cfg: Dict[str, Any], window: WindowConfig) -> ObjectsConfig:
    return ObjectsConfig(
        size=as_int(deep_get(cfg, "objects.size", 20), 20, 2, window.width - 1),
        color=as_color(deep_get(cfg, "objects.color", None), (255, 76, 76)),
    )


def _parse_log_level(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip().upper() in _LOG_LEVELS:
        return raw.strip().upper()
    return "INFO"


def parse_game_config(cfg: Dict[str, Any]) -> GameConfig:
    """Parse the whole game config, applying defaults for anything missing."""
    window = parse_window_config(cfg)
    scores_dir = cfg.get("scores_dir", "scores")
    if not isinstance(scores_dir, str) or not scores_dir.strip():
        scores_dir = "scores"
    return GameConfig(
        window=window,
        paddle=parse_paddle_config(cfg, window),
        objects=parse_objects_config(cfg, window),
        lives=as_int(cfg.get("lives", 3), 3, 1, 99),
        tick_ms=as_int(cfg.get("tick_ms", 30), 30, 5, 1000),
        fps=as_int(cfg.get("fps", 60), 60, 10, 240),
        scores_dir=scores_dir.strip(),
        username_max_length=as_int(cfg.get("username_max_length", 15), 15, 1, 64),
        log_level=_parse_log_level(cfg.get("log_level")),
    )


def log_level_value(config: GameConfig) -> int:
    return getattr(logging, config.log_level, logging.INFO)


def load_game_config(path: Path) -> GameConfig:
    """Read and parse the config file; a missing file gives the defaults."""
    return parse_game_config(load_config_or_defaults(path))
