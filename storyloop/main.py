"""Main entry point for Storyloop."""

import argparse
import logging
import sys

from .config import AppConfig, reload_config

logger = logging.getLogger(__name__)


def setup_paths(config: AppConfig) -> None:
    """Ensure required directories exist."""
    config.paths.saves.mkdir(parents=True, exist_ok=True)
    config.logging.file.parent.mkdir(parents=True, exist_ok=True)


def setup_logging(config: AppConfig) -> None:
    """Send log records to the configured file; the terminal belongs to the UI."""
    logging.basicConfig(
        filename=config.logging.file,
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Provider SDKs are chatty at INFO
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="storyloop",
        description="Turn-based adventures and guessing games with an AI game master.",
    )
    parser.add_argument(
        "--game",
        choices=("adventure", "questions"),
        default=None,
        help="Game to play (default: from config, usually adventure)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: ./config.yaml)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_args(argv)
    try:
        config = reload_config(args.config)
        setup_paths(config)
        setup_logging(config)
        logger.info(f"Starting storyloop ({args.game or config.game.default_variant})")

        from .ui.app import StoryloopApp

        app = StoryloopApp(variant=args.game, config=config)
        app.run()
        return 0

    except KeyboardInterrupt:
        print("\nGoodbye, adventurer!")
        return 0
    except Exception as e:
        logger.exception("Fatal error")
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
