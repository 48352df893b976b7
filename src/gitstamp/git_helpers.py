"""Git query helpers: fallback-safe command runner and repository info collector."""

import subprocess
from dataclasses import dataclass

from gitstamp.config import QUERY_TIMEOUT, UNKNOWN, GitQueryRequest
from gitstamp.utils import log

# Queries issued on every collection, keyed by the field they fill.
BASE_QUERIES = {
    "branch": ["rev-parse", "--abbrev-ref", "HEAD"],
    "commit_hash": ["rev-parse", "--short", "HEAD"],
    "full_commit_hash": ["rev-parse", "HEAD"],
    "tag": ["describe", "--tags", "--exact-match", "HEAD"],
    "tag_fallback": ["describe", "--tags", "--abbrev=0"],
}

COMMIT_DATE_QUERY = ["log", "-1", "--format=%cd", "--date=iso"]
AUTHOR_QUERY = ["log", "-1", "--format=%an"]

_TAG_KEYS = {"tag", "tag_fallback"}


@dataclass(frozen=True)
class RepoInfo:
    """Normalized facts about HEAD, as returned by one collection cycle."""

    branch: str
    commit_hash: str
    full_commit_hash: str
    tag: str | None
    commit_date: str | None = None
    author: str | None = None


def run_git_query(args: list[str], fallback: str = "", timeout: float = QUERY_TIMEOUT, cwd: str | None = None) -> str:
    """Run 'git <args>' and return its trimmed stdout, or *fallback* on any failure.

    Never raises: a missing git binary, a timeout and a non-zero exit all
    log a warning and return *fallback*.
    """
    cmd = ["git", *args]
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        log("warn", f"Git query failed: {' '.join(cmd)} ({exc.__class__.__name__}), using fallback {fallback!r}")
        return fallback
    if result.returncode != 0:
        log("warn", f"Git query failed: {' '.join(cmd)}, using fallback {fallback!r}")
        return fallback
    return result.stdout.strip()


def is_git_repository(cwd: str | None = None) -> bool:
    """Cheap probe: is *cwd* (default: the current directory) inside a git work tree?"""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--git-dir"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=QUERY_TIMEOUT,
            cwd=cwd,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0


def resolve_tag(exact: str, nearest: str) -> str | None:
    """Pick the tag to report.

    Pure function: the tag exactly at HEAD wins; otherwise the nearest
    ancestor tag; None when neither query produced anything.
    """
    return exact or nearest or None


def build_query_plan(request: GitQueryRequest) -> dict[str, list[str]]:
    """Return the ordered field -> git args mapping for *request*."""
    plan = dict(BASE_QUERIES)
    if request.include_commit_date:
        plan["commit_date"] = COMMIT_DATE_QUERY
    if request.include_author:
        plan["author"] = AUTHOR_QUERY
    return plan


def collect_repo_info(request: GitQueryRequest | None = None, cwd: str | None = None) -> RepoInfo:
    """Issue the fixed batch of git queries and normalize the answers.

    Non-tag fields fall back to 'unknown'; the two tag queries fall back to
    an empty string so resolve_tag() can tell "not tagged" apart. Does not
    check that *cwd* is a repository: callers probe first.
    """
    request = request or GitQueryRequest()
    raw = {}
    for key, args in build_query_plan(request).items():
        fallback = "" if key in _TAG_KEYS else UNKNOWN
        raw[key] = run_git_query(args, fallback, cwd=cwd)

    return RepoInfo(
        branch=raw["branch"],
        commit_hash=raw["commit_hash"],
        full_commit_hash=raw["full_commit_hash"],
        tag=resolve_tag(raw["tag"], raw["tag_fallback"]),
        commit_date=raw.get("commit_date"),
        author=raw.get("author"),
    )
