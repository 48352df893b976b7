"""Version record assembly: repository info + derived version + build time + custom fields."""

import re
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from gitstamp.cache import RepoInfoCache
from gitstamp.config import DEFAULT_TIME_ZONE, UNKNOWN, GitQueryRequest, validate_path, validate_time_zone
from gitstamp.errors import ConfigError, NotARepositoryError
from gitstamp.git_helpers import RepoInfo, is_git_repository
from gitstamp.utils import log

# Field names of the generated artifact, in the order they are written.
RECORD_FIELDS = (
    "version",
    "tag",
    "branch",
    "commitHash",
    "fullCommitHash",
    "commitDate",
    "author",
    "buildTime",
    "buildTimeFormatted",
    "generatedAt",
)


class VersionRecord(Mapping):
    """Immutable, ordered mapping of the fields written to every artifact.

    Behaves like a read-only dict (so json.dumps(dict(record)) works) and
    exposes the standard fields as attributes.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping):
        self._data = dict(data)

    def __getitem__(self, key: str):
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"VersionRecord({self._data!r})"

    def to_dict(self) -> dict:
        return dict(self._data)

    @property
    def custom_fields(self) -> dict:
        """Fields that are not part of the standard record shape."""
        return {k: v for k, v in self._data.items() if k not in RECORD_FIELDS}

    @property
    def version(self) -> str:
        return self._data.get("version")

    @property
    def tag(self) -> str | None:
        return self._data.get("tag")

    @property
    def branch(self) -> str:
        return self._data.get("branch")

    @property
    def commit_hash(self) -> str:
        return self._data.get("commitHash")

    @property
    def full_commit_hash(self) -> str:
        return self._data.get("fullCommitHash")

    @property
    def commit_date(self) -> str | None:
        return self._data.get("commitDate")

    @property
    def author(self) -> str | None:
        return self._data.get("author")

    @property
    def build_time(self) -> str:
        return self._data.get("buildTime")

    @property
    def build_time_formatted(self) -> str:
        return self._data.get("buildTimeFormatted")

    @property
    def generated_at(self) -> str:
        return self._data.get("generatedAt")


def derive_version(branch: str, rule: re.Pattern) -> str:
    """Remove the first match of *rule* from *branch*.

    Pure function: 'release-2.3' with '.+-' gives '2.3'; a branch the rule
    does not match is returned unchanged.
    """
    return rule.sub("", branch, count=1)


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a 'Z' suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_build_time(moment: datetime, time_zone: str = DEFAULT_TIME_ZONE) -> str:
    """Render *moment* as 'YYYY/MM/DD HH:MM:SS' in *time_zone*."""
    return moment.astimezone(ZoneInfo(time_zone)).strftime("%Y/%m/%d %H:%M:%S")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _repo_fields(info: RepoInfo, rule: re.Pattern, request: GitQueryRequest) -> dict:
    fields = {
        "version": derive_version(info.branch, rule),
        "tag": info.tag or None,
        "branch": info.branch,
        "commitHash": info.commit_hash,
        "fullCommitHash": info.full_commit_hash,
    }
    if request.include_commit_date and info.commit_date:
        fields["commitDate"] = info.commit_date
    if request.include_author and info.author:
        fields["author"] = info.author
    return fields


def _degraded_fields() -> dict:
    return {
        "version": UNKNOWN,
        "tag": None,
        "branch": UNKNOWN,
        "commitHash": UNKNOWN,
        "fullCommitHash": UNKNOWN,
    }


def build_version_record(
    output_path: str,
    version_pattern: re.Pattern,
    request: GitQueryRequest | None = None,
    cache: RepoInfoCache | None = None,
    time_zone: str = DEFAULT_TIME_ZONE,
    custom_fields: Mapping | None = None,
    now: Callable[[], datetime] = _utc_now,
) -> VersionRecord:
    """Assemble the canonical VersionRecord for the current checkout.

    Raises ConfigError when *output_path* is not a non-empty string or
    *version_pattern* is not a compiled pattern. Outside a git repository a
    degraded record (all repository fields 'unknown', tag None) is returned
    instead of raising. Custom fields are merged last and win on collision.
    """
    validate_path(output_path)
    if not isinstance(version_pattern, re.Pattern):
        raise ConfigError("version_pattern must be a compiled regular expression")
    validate_time_zone(time_zone)
    request = request or GitQueryRequest()
    cache = cache or RepoInfoCache()

    try:
        if not is_git_repository():
            raise NotARepositoryError("Current directory is not a git repository")
        fields = _repo_fields(cache.get_or_collect(request), version_pattern, request)
    except NotARepositoryError as exc:
        log("warn", f"{exc}; generating basic version info without git metadata")
        fields = _degraded_fields()

    moment = now()
    build_time = iso_timestamp(moment)
    fields["buildTime"] = build_time
    fields["buildTimeFormatted"] = format_build_time(moment, time_zone)
    fields["generatedAt"] = build_time
    fields.update(custom_fields or {})
    return VersionRecord(fields)
