"""
Play Apophis in an Arcade window

    python -m game.apophis --seed 42
"""

import argparse

from .log import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Play Apophis")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a replayable run")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--fullscreen", action="store_true", help="Open fullscreen")
    parser.add_argument("--mute", action="store_true", help="Disable synthesized sound")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    # Imported late so --help works without a display
    from .render import run

    run(
        width=args.width,
        height=args.height,
        seed=args.seed,
        fullscreen=args.fullscreen,
        mute=args.mute,
    )


if __name__ == "__main__":
    main()
