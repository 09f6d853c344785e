"""Configuration settings dataclasses."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_CONFIG_FILENAME = "polaroid.config"

BAM_EXTENSION = ".bam"
SNAPSHOT_EXTENSION = ".png"


@dataclass(frozen=True)
class Settings:
    """Settings for one snapshot run, read from the configuration file."""

    bam_files: Tuple[str, ...]
    locations: Tuple[str, ...]
    snapshot_directory: str
    igv_ip: str
    igv_port: int
    delay: int
    timeout: Optional[float] = None

    def get_snapshot_path(self) -> Path:
        """Get snapshot directory as a Path."""
        return Path(self.snapshot_directory)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    console: bool = True
    format: str = "%(message)s"
