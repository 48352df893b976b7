"""Stamp build artifacts with git version metadata."""

from gitstamp.config import GenerateOptions, GitQueryRequest, validate_options
from gitstamp.errors import ConfigError, NotARepositoryError, UnsupportedFormatError
from gitstamp.generator import VersionStamper, generate_version
from gitstamp.record import VersionRecord

__all__ = [
    "ConfigError",
    "GenerateOptions",
    "GitQueryRequest",
    "NotARepositoryError",
    "UnsupportedFormatError",
    "VersionRecord",
    "VersionStamper",
    "generate_version",
    "validate_options",
]
