"""Write rendered artifacts to the output directory."""

import os

from gitstamp.config import GitQueryRequest
from gitstamp.errors import UnsupportedFormatError
from gitstamp.record import VersionRecord
from gitstamp.renderers import OutputFormat, build_provenance, parse_format, render
from gitstamp.utils import log


def resolve_output_dir(output_path: str) -> str:
    """Resolve *output_path* against the current directory."""
    return os.path.abspath(os.path.join(os.getcwd(), os.path.expanduser(output_path)))


def _write_text(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)


def _log_summary(record: VersionRecord) -> None:
    log("info", "Version files generated.", style="bold green")
    log("info", f"  Version:    {record.get('version') or 'unknown'}")
    log("info", f"  Tag:        {record.get('tag') or 'none'}")
    log("info", f"  Branch:     {record.get('branch') or 'unknown'}")
    log("info", f"  Commit:     {record.get('commitHash') or 'unknown'}")
    log("info", f"  Build time: {record.get('buildTimeFormatted', '')}")


def emit_version_files(
    record: VersionRecord,
    output_path: str,
    formats,
    request: GitQueryRequest | None = None,
) -> list[str]:
    """Render and write version.<ext> for each requested format.

    Creates *output_path* if needed and overwrites existing files. Unknown
    formats, render errors and write errors are logged and skipped; an
    output directory that cannot be created yields an empty list. Returns
    the absolute paths actually written, in request order; a partial list
    means some formats failed.
    """
    output_dir = resolve_output_dir(output_path)
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as exc:
        log("error", f"Cannot create output directory {output_dir}: {exc}", style="red")
        return []
    provenance = build_provenance()

    written = []
    for tag in formats:
        try:
            fmt = parse_format(tag)
        except UnsupportedFormatError as exc:
            log("warn", f"{exc}, skipping", style="yellow")
            continue

        file_path = os.path.join(output_dir, fmt.filename)
        if file_path in written:
            continue
        try:
            _write_text(file_path, render(record, fmt, request, provenance))
        except Exception as exc:
            log("error", f"Failed to write {file_path}: {exc}", style="red")
            continue
        written.append(file_path)
        log("info", f"Version file written: {file_path}", style="green")

    if written:
        _log_summary(record)
    return written


def clear_version_files(output_path: str, formats=None) -> list[str]:
    """Delete previously generated version.<ext> files. Returns the removed paths.

    Missing files and unknown formats are ignored. Idempotent.
    """
    output_dir = resolve_output_dir(output_path)
    if formats is None:
        formats = list(OutputFormat)

    removed = []
    for tag in formats:
        try:
            fmt = parse_format(tag)
        except UnsupportedFormatError:
            continue
        file_path = os.path.join(output_dir, fmt.filename)
        try:
            os.remove(file_path)
        except FileNotFoundError:
            continue
        except OSError as exc:
            log("warn", f"Could not remove {file_path}: {exc}", style="yellow")
            continue
        removed.append(file_path)
        log("debug", f"Removed stale version file: {file_path}")
    return removed
