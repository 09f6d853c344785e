"""Configuration loaders for the snapshot run and for logging."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .settings import (
    Settings,
    LoggingConfig,
    BAM_EXTENSION,
)
from ..utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = re.compile(r"\s+")
_INTEGER = re.compile(r"[+-]?[0-9]+")

REQUIRED_KEYS = ("snapshot_directory", "igv_ip", "igv_port", "delay")
INTEGER_KEYS = ("igv_port", "delay")


def _parse_int(key: str, value: str, config_path: Path, line_number: int) -> int:
    if not _INTEGER.fullmatch(value):
        raise ConfigError(
            f"{config_path}:{line_number}: {key} must be an integer, got {value!r}"
        )
    return int(value)


def _parse_timeout(value: str, config_path: Path, line_number: int) -> float:
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigError(
            f"{config_path}:{line_number}: timeout must be a number, got {value!r}"
        ) from e
    if timeout <= 0:
        raise ConfigError(f"{config_path}:{line_number}: timeout must be positive")
    return timeout


def _read_lines(config_path: Path) -> List[str]:
    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e


def load_config(config_path: Union[str, Path]) -> Settings:
    """
    Load snapshot run settings from a flat key/value configuration file.

    Blank lines and lines starting with '#' are skipped. A line with a single
    field is a genomic location, a line with two fields is a key and its
    value. Anything else is ignored with a warning.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If the file is missing or any entry is invalid.
    """
    config_path = Path(config_path)
    bam_files: List[str] = []
    locations: List[str] = []
    values: Dict[str, object] = {}

    for line_number, raw_line in enumerate(_read_lines(config_path), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        fields = _FIELD_SEPARATOR.split(line)

        if len(fields) == 1:
            if not line.lower().startswith("chr"):
                raise ConfigError(
                    f"{config_path}:{line_number}: unrecognized location: {line}"
                )
            locations.append(fields[0])
        elif len(fields) == 2:
            key = fields[0].lower()
            value = fields[1]
            if key == "bam":
                bam_files.append(value)
            elif key in ("snapshot_directory", "igv_ip"):
                values[key] = value
            elif key in INTEGER_KEYS:
                values[key] = _parse_int(key, value, config_path, line_number)
            elif key == "timeout":
                values[key] = _parse_timeout(value, config_path, line_number)
            else:
                logger.warning(
                    f"Warning: ignoring unrecognized configuration line {line_number}: {line}"
                )
        else:
            logger.warning(
                f"Warning: ignoring unexpected number of fields on configuration "
                f"line {line_number}: {line}"
            )

    for key in REQUIRED_KEYS:
        if key not in values:
            raise ConfigError(f"{config_path}: didn't read {key} from the configuration file")
    for key in INTEGER_KEYS:
        if values[key] < 0:
            raise ConfigError(f"{config_path}: invalid {key}: {values[key]}")

    if not bam_files:
        raise ConfigError(f"{config_path}: must specify some BAM files to read")
    for filename in bam_files:
        if not filename.lower().endswith(BAM_EXTENSION):
            raise ConfigError(f"invalid file extension for {filename}")
        if not Path(filename).is_file():
            raise ConfigError(f"invalid BAM file, check filename: {filename}")

    if not locations:
        raise ConfigError(f"{config_path}: must specify some genomic locations")

    snapshot_directory = values["snapshot_directory"]
    if not Path(snapshot_directory).is_dir():
        raise ConfigError(f"check snapshot directory {snapshot_directory}")

    settings = Settings(
        bam_files=tuple(bam_files),
        locations=tuple(locations),
        snapshot_directory=snapshot_directory,
        igv_ip=values["igv_ip"],
        igv_port=values["igv_port"],
        delay=values["delay"],
        timeout=values.get("timeout"),
    )
    logger.debug(
        f"Loaded {len(settings.bam_files)} BAM file(s) and "
        f"{len(settings.locations)} location(s) from {config_path}"
    )
    return settings


def load_logging_config(config_path: Optional[Union[str, Path]] = None) -> LoggingConfig:
    """
    Load logging configuration from a YAML file.

    Args:
        config_path: Path to a YAML file with a 'logging' section. If None,
            defaults are returned.

    Returns:
        LoggingConfig with loaded configuration.

    Raises:
        ConfigError: If the file doesn't exist or is not a valid YAML mapping.
    """
    if config_path is None:
        return LoggingConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Logging configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    log_data = config_data.get("logging") or {}
    if not isinstance(log_data, dict):
        raise ConfigError(f"{config_path}: 'logging' must be a mapping")

    defaults = LoggingConfig()
    return LoggingConfig(
        level=log_data.get("level", defaults.level),
        file=log_data.get("file", defaults.file),
        console=log_data.get("console", defaults.console),
        format=log_data.get("format", defaults.format),
    )
