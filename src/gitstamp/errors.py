"""Exception types raised by the generation pipeline."""


class GitstampError(Exception):
    """Base class for every error gitstamp raises on purpose."""


class ConfigError(GitstampError):
    """Caller-supplied configuration is malformed. Raised before any work starts."""


class NotARepositoryError(GitstampError):
    """The working directory is not inside a git repository."""


class UnsupportedFormatError(GitstampError):
    """An output format tag outside the supported set was requested."""

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Unsupported output format: {fmt!r}")
