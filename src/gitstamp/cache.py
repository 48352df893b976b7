"""Time-bounded memoization of repository info.

One RepoInfoCache is owned by whoever drives a build (normally a
VersionStamper) and passed into record building. It holds at most one
entry; there is no locking, so callers drive it from a single sequence.
"""

import time
from collections.abc import Callable

from gitstamp.config import CACHE_WINDOW, GitQueryRequest
from gitstamp.git_helpers import RepoInfo, collect_repo_info
from gitstamp.utils import log


class RepoInfoCache:
    """Reuse the last collected RepoInfo while it is younger than *window* seconds."""

    def __init__(
        self,
        collector: Callable[[GitQueryRequest], RepoInfo] = collect_repo_info,
        window: float = CACHE_WINDOW,
        clock: Callable[[], float] = time.time,
    ):
        self._collector = collector
        self._window = window
        self._clock = clock
        self._info: RepoInfo | None = None
        self._timestamp = 0.0

    @property
    def window(self) -> float:
        return self._window

    def _is_fresh(self, now: float) -> bool:
        return self._info is not None and now - self._timestamp < self._window

    def get_or_collect(self, request: GitQueryRequest | None = None) -> RepoInfo:
        """Return the cached info while it is fresh, else collect anew with *request*.

        A fresh entry is returned whatever *request* asks for; clear() first to
        force a collection with different optional fields.
        """
        request = request or GitQueryRequest()
        now = self._clock()
        if self._is_fresh(now):
            log("debug", f"Repository info cache hit (age {now - self._timestamp:.3f}s)")
            return self._info

        log("debug", "Repository info cache miss, querying git")
        info = self._collector(request)
        self._info = info
        self._timestamp = now
        return info

    def clear(self) -> None:
        """Drop the cached entry unconditionally."""
        self._info = None
        self._timestamp = 0.0

    def status(self) -> dict:
        """Snapshot of the cache for diagnostics: cached, timestamp, age, valid."""
        now = self._clock()
        cached = self._info is not None
        return {
            "cached": cached,
            "timestamp": self._timestamp,
            "age": now - self._timestamp if cached else 0.0,
            "valid": self._is_fresh(now),
        }
