"""Entry point for Polaroid."""

import argparse
import logging
import sys
from typing import List, Optional

from .config.loader import load_config, load_logging_config
from .config.settings import DEFAULT_CONFIG_FILENAME
from .core.session import SessionDriver
from .utils.exceptions import ConfigError, DriverError
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI usage."""
    parser = argparse.ArgumentParser(
        prog="polaroid",
        description="Send commands to IGV to make PNG snapshots of genomic locations.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--logging-config",
        metavar="PATH",
        help="YAML file with a 'logging' section",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Override the logging level (e.g. DEBUG)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_argument_parser().parse_args(argv)

    # Setup logging
    try:
        logging_config = load_logging_config(args.logging_config)
        if args.log_level:
            logging_config.level = args.log_level
        setup_logging(logging_config)
    except ConfigError as e:
        print(f"Error loading logging configuration: {e}", file=sys.stderr)
        return 1

    # Load configuration
    try:
        settings = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Error loading configuration: {e}")
        return 1

    try:
        SessionDriver().run(settings)
    except DriverError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("\nReceived interrupt signal, shutting down...")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
