import pytest

from gitstamp.utils import configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Log settings are process-wide; give every test the defaults."""
    configure_logging("info", silent=False)
    yield
    configure_logging("info", silent=False)
