from __future__ import annotations

import logging
from pathlib import Path

from config_parsing import load_game_config, log_level_value
from models import GameConfig


def configure_logging(config: GameConfig) -> None:
    """Set up root logging at the level named by the config's log_level."""
    logging.basicConfig(
        level=log_level_value(config),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entrypoint for running the game from the command line."""
    import sys

    cfg_path = Path(sys.argv[1]) if len(sys.argv) >= 2 else Path("config.json")
    config = load_game_config(cfg_path)
    configure_logging(config)
    from game import Game  # local import keeps module load side effects minimal

    Game(config).run()


if __name__ == "__main__":
    main()
