"""Configuration constants and option validation for version generation.

Every option the pipeline understands lives on GenerateOptions. Callers
build one through validate_options(), which merges overrides onto the
defaults and raises ConfigError before any git query or file write happens.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gitstamp.errors import ConfigError

# ---------------------------------------------------------------------------
# Fixed constants
# ---------------------------------------------------------------------------

# Seconds a collected RepoInfo stays valid in the cache.
CACHE_WINDOW = 5.0

# Seconds to wait for a single git query before falling back.
QUERY_TIMEOUT = 5.0

UNKNOWN = "unknown"

# Strips everything up to and including the last dash: "release-2.3" -> "2.3"
DEFAULT_RULE = re.compile(r".+-")

DEFAULT_PATH = "public"
DEFAULT_TIME_ZONE = "Asia/Shanghai"
DEFAULT_FILES = ("json", "js", "txt")

LOG_LEVELS = {"error": 0, "warn": 1, "info": 2, "debug": 3}


# ---------------------------------------------------------------------------
# Option objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GitQueryRequest:
    """Which optional git fields to collect and render."""

    include_author: bool = True
    include_commit_date: bool = True


@dataclass(frozen=True)
class GenerateOptions:
    """Validated options for one generation run."""

    path: str = DEFAULT_PATH
    rule: re.Pattern = DEFAULT_RULE
    files: tuple[str, ...] = DEFAULT_FILES
    include_author: bool = True
    include_commit_date: bool = True
    time_zone: str = DEFAULT_TIME_ZONE
    custom_fields: Mapping = field(default_factory=dict)
    silent: bool = False
    log_level: str = "info"

    @property
    def request(self) -> GitQueryRequest:
        return GitQueryRequest(
            include_author=self.include_author,
            include_commit_date=self.include_commit_date,
        )


def compile_rule(rule) -> re.Pattern:
    """Return *rule* as a compiled pattern, compiling strings. Raises ConfigError."""
    if isinstance(rule, re.Pattern):
        return rule
    if isinstance(rule, str):
        try:
            return re.compile(rule)
        except re.error as exc:
            raise ConfigError(f"rule is not a valid regular expression: {exc}") from exc
    raise ConfigError("rule must be a regular expression")


def validate_path(path) -> str:
    if not isinstance(path, str) or not path.strip():
        raise ConfigError("path must be a non-empty string")
    return path


def validate_time_zone(time_zone) -> str:
    if not isinstance(time_zone, str) or not time_zone:
        raise ConfigError("time_zone must be a non-empty string")
    try:
        ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown time zone: {time_zone!r}") from exc
    return time_zone


def parse_custom_fields(pairs: list[str]) -> dict:
    """Parse ['key=value', ...] into a dict. Later keys win.

    Pure function. Raises ConfigError for an entry without '=' or with an
    empty key.
    """
    fields = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Custom field must look like key=value, got {pair!r}")
        fields[key] = value
    return fields


def validate_options(**overrides) -> GenerateOptions:
    """Merge *overrides* onto the defaults and validate the result.

    Unknown format names in ``files`` are allowed through; the emitter skips
    them with a warning so one bad entry never blocks the others.
    """
    unknown = set(overrides) - set(GenerateOptions.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    options = replace(GenerateOptions(), **overrides)

    files = options.files
    if isinstance(files, str) or not isinstance(files, (list, tuple)):
        raise ConfigError("files must be a list of format names")
    if not all(isinstance(f, str) for f in files):
        raise ConfigError("files must only contain strings")

    if not isinstance(options.custom_fields, Mapping):
        raise ConfigError("custom_fields must be a mapping")

    if options.log_level not in LOG_LEVELS:
        allowed = ", ".join(LOG_LEVELS)
        raise ConfigError(f"log_level must be one of: {allowed}")

    return replace(
        options,
        path=validate_path(options.path),
        rule=compile_rule(options.rule),
        files=tuple(files),
        time_zone=validate_time_zone(options.time_zone),
        custom_fields=dict(options.custom_fields),
    )
