"""Custom exception classes for Polaroid."""

from typing import Optional


class PolaroidError(Exception):
    """Base exception for Polaroid."""

    pass


class ConfigError(PolaroidError):
    """Exception raised for configuration errors."""

    pass


class DriverError(PolaroidError):
    """Exception raised when talking to IGV fails."""

    def __init__(self, message: str, response: Optional[str] = None):
        super().__init__(message)
        self.response = response
