"""
Command line entry point: ``python -m pacxon`` or ``pacxon``.
"""

import argparse
import logging
import sys

from pacxon.app import PacxonApp
from pacxon.config import GameConfig
from pacxon.game import PacxonGame


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pacxon",
        description="Pacxon for an 84x28 flipdot panel, previewed in a pygame window.",
    )
    parser.add_argument("--fps", type=int, default=GameConfig.FPS,
                        help="Ticks per second (default: %(default)s)")
    parser.add_argument("--scale", type=float, default=GameConfig.WINDOW_SCALE,
                        help="Preview window scale factor (default: %(default)s)")
    parser.add_argument("--scores-file", default=GameConfig.HIGH_SCORES_FILE,
                        help="High score JSON file (default: %(default)s)")
    parser.add_argument("--dev", action="store_true",
                        help="Enable shortcuts: N skips a level, 3 starts at level 3")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(FPS=args.fps, WINDOW_SCALE=args.scale,
                        HIGH_SCORES_FILE=args.scores_file)

    game = PacxonGame(config)
    app = PacxonApp(game, config, dev=args.dev)
    try:
        app.run()
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Exiting...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
