"""Pipeline entry points: generate_version() and the build-once VersionStamper."""

from gitstamp.cache import RepoInfoCache
from gitstamp.config import GenerateOptions, validate_options
from gitstamp.emitter import clear_version_files, emit_version_files
from gitstamp.record import VersionRecord, build_version_record
from gitstamp.utils import configure_logging, log


def generate_version(
    output_path: str | None = None,
    version_pattern=None,
    options: GenerateOptions | None = None,
    cache: RepoInfoCache | None = None,
) -> VersionRecord:
    """Collect git metadata, build the record, write every requested artifact.

    *output_path* and *version_pattern* override the matching fields of
    *options*; left as None they come from *options* (default "public" and
    ".+-"). Raises ConfigError for malformed input before any
    git query runs; every other failure degrades to a warning.
    """
    base = options or GenerateOptions()
    options = validate_options(
        path=base.path if output_path is None else output_path,
        rule=base.rule if version_pattern is None else version_pattern,
        files=base.files,
        include_author=base.include_author,
        include_commit_date=base.include_commit_date,
        time_zone=base.time_zone,
        custom_fields=base.custom_fields,
        silent=base.silent,
        log_level=base.log_level,
    )
    configure_logging(options.log_level, options.silent)

    record = build_version_record(
        options.path,
        options.rule,
        request=options.request,
        cache=cache,
        time_zone=options.time_zone,
        custom_fields=options.custom_fields,
    )
    emit_version_files(record, options.path, options.files, request=options.request)
    return record


class VersionStamper:
    """Build-once facade for build-tool hooks.

    Owns one RepoInfoCache for the lifetime of a build. generate() runs the
    pipeline the first time and returns the same record afterwards, so it is
    safe to call from several hooks.
    """

    def __init__(self, options: GenerateOptions | None = None, cache: RepoInfoCache | None = None, **overrides):
        if options is not None and overrides:
            raise TypeError("Pass either options or keyword overrides, not both")
        self.options = options if options is not None else validate_options(**overrides)
        self.cache = cache or RepoInfoCache()
        self._record: VersionRecord | None = None

    @property
    def version_info(self) -> VersionRecord | None:
        """The last record generated, or None before the first generate()."""
        return self._record

    def generate(self) -> VersionRecord:
        if self._record is not None:
            return self._record
        self._record = generate_version(self.options.path, self.options.rule, self.options, cache=self.cache)
        log("info", f"Version info generated: {self._record.get('version')}", style="bold cyan")
        return self._record

    def reset(self) -> None:
        """Forget the generated record and drop cached repository info."""
        self._record = None
        self.cache.clear()

    def clean(self) -> list[str]:
        """No-generation path: reset and remove stale artifacts for the configured formats."""
        self.reset()
        return clear_version_files(self.options.path, self.options.files)
