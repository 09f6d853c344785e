"""Logging configuration."""

import logging
import sys
from pathlib import Path

from ..config.settings import LoggingConfig
from .exceptions import ConfigError


def setup_logging(config: LoggingConfig) -> None:
    """
    Set up logging configuration.

    Progress goes to stdout through the console handler. A log file is
    written as well when config.file is set.

    Args:
        config: Logging configuration.

    Raises:
        ConfigError: If the level name is unknown.
    """
    level = getattr(logging, str(config.level).upper(), None)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level: {config.level}")

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    # File handler
    if config.file:
        log_file = Path(config.file)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not open log file {log_file}: {e}") from e
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console handler
    if config.console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logging.debug(f"Logging configured: level={config.level}, file={config.file}")
