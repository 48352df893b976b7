"""Version information for gitstamp itself."""

PACKAGE_VERSION = "0.1.0"


def get_version() -> str:
    """Return version string like 'gitstamp 0.1.0'."""
    return f"gitstamp {PACKAGE_VERSION}"
