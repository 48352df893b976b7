"""Render a VersionRecord into each supported artifact format.

Every renderer embeds the same JSON serialization of the record, so the
formats cannot drift apart: json.loads() on the JSON file, on the literal
inside version.js, and on the literal inside version.ts all give the same
dict.
"""

import json
import os
import platform
from collections.abc import Callable
from enum import Enum

from gitstamp.config import GitQueryRequest
from gitstamp.errors import UnsupportedFormatError
from gitstamp.record import VersionRecord

GLOBAL_NAME = "VERSION_INFO"


class OutputFormat(str, Enum):
    """Supported artifacts; the value doubles as the file extension."""

    JSON = "json"
    JS = "js"
    TXT = "txt"
    TS = "ts"

    @property
    def filename(self) -> str:
        return f"version.{self.value}"


def parse_format(tag) -> OutputFormat:
    """Map a tag like 'json' to its OutputFormat. Raises UnsupportedFormatError."""
    try:
        return OutputFormat(tag)
    except ValueError:
        raise UnsupportedFormatError(str(tag)) from None


def build_provenance() -> dict[str, str]:
    """Describe the environment the artifact was generated in."""
    return {
        "Build environment": os.environ.get("BUILD_ENV") or "development",
        "Python version": platform.python_version(),
    }


def serialize(record: VersionRecord) -> str:
    """Canonical JSON text of the record: insertion order, two-space indent."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def _request_from_record(record: VersionRecord) -> GitQueryRequest:
    return GitQueryRequest(
        include_author="author" in record,
        include_commit_date="commitDate" in record,
    )


def _header(record: VersionRecord) -> str:
    return (
        "// Auto-generated version info - do not edit by hand\n"
        f"// Generated at: {record.get('buildTimeFormatted', '')}\n"
    )


def _registrations(indent: str) -> str:
    """Assign versionInfo under every host convention we know of."""
    lines = [
        "// Browser",
        "if (typeof window !== 'undefined') {",
        f"  window.{GLOBAL_NAME} = versionInfo;",
        "}",
        "",
        "// CommonJS",
        "if (typeof module !== 'undefined' && module.exports) {",
        "  module.exports = versionInfo;",
        "}",
        "",
        "// AMD",
        "if (typeof define === 'function' && define.amd) {",
        "  define(function () { return versionInfo; });",
        "}",
        "",
        "// Namespace export",
        "if (typeof exports === 'object') {",
        "  Object.assign(exports, versionInfo);",
        "}",
    ]
    return "\n".join(f"{indent}{line}" if line else "" for line in lines)


def render_json(record: VersionRecord, request: GitQueryRequest, provenance: dict[str, str]) -> str:
    return serialize(record) + "\n"


def render_js(record: VersionRecord, request: GitQueryRequest, provenance: dict[str, str]) -> str:
    return (
        _header(record)
        + "\n"
        + ";(function () {\n"
        + "  'use strict';\n\n"
        + f"  var versionInfo = {_indent_json(serialize(record), '  ')};\n\n"
        + _registrations("  ")
        + "\n})();\n"
    )


def _indent_json(text: str, indent: str) -> str:
    """Indent every line but the first, so the literal lines up after an assignment."""
    return text.replace("\n", "\n" + indent)


def _text_value(value, default: str = "unknown") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def render_txt(record: VersionRecord, request: GitQueryRequest, provenance: dict[str, str]) -> str:
    lines = [
        "Project version info",
        "====================",
        f"Version: {_text_value(record.get('version'))}",
        f"Tag: {_text_value(record.get('tag'), 'none')}",
        f"Branch: {_text_value(record.get('branch'))}",
        f"Commit: {_text_value(record.get('commitHash'))}",
        f"Full commit: {_text_value(record.get('fullCommitHash'))}",
    ]
    if record.get("commitDate") is not None:
        lines.append(f"Commit date: {_text_value(record['commitDate'])}")
    if record.get("author") is not None:
        lines.append(f"Author: {_text_value(record['author'])}")
    for key, value in record.custom_fields.items():
        lines.append(f"{key}: {_text_value(value, 'null')}")
    lines.append(f"Build time: {_text_value(record.get('buildTimeFormatted'))}")
    lines.append(f"Build time (ISO): {_text_value(record.get('buildTime'))}")
    lines.append(f"Generated at: {_text_value(record.get('generatedAt'))}")
    lines.extend(f"{label}: {value}" for label, value in provenance.items())
    return "\n".join(lines) + "\n"


def _ts_interface(record: VersionRecord, request: GitQueryRequest) -> str:
    members = [
        "version: string;",
        "tag: string | null;",
        "branch: string;",
        "commitHash: string;",
        "fullCommitHash: string;",
    ]
    if request.include_commit_date:
        members.append("commitDate?: string;")
    if request.include_author:
        members.append("author?: string;")
    members += [
        "buildTime: string;",
        "buildTimeFormatted: string;",
        "generatedAt: string;",
    ]
    if record.custom_fields:
        members.append("[key: string]: unknown;")
    body = "\n".join(f"  {m}" for m in members)
    return f"export interface VersionInfo {{\n{body}\n}}\n"


def render_ts(record: VersionRecord, request: GitQueryRequest, provenance: dict[str, str]) -> str:
    return (
        _header(record)
        + "\n"
        + "declare const module: any;\n"
        + "declare const define: any;\n"
        + "declare const exports: any;\n\n"
        + _ts_interface(record, request)
        + "\n"
        + f"export const {GLOBAL_NAME}: VersionInfo = {serialize(record)};\n\n"
        + f"export default {GLOBAL_NAME};\n\n"
        + "declare global {\n"
        + "  interface Window {\n"
        + f"    {GLOBAL_NAME}: VersionInfo;\n"
        + "  }\n"
        + "}\n\n"
        + "(function (versionInfo: VersionInfo) {\n"
        + _registrations("  ")
        + f"\n}})({GLOBAL_NAME});\n"
    )


Renderer = Callable[[VersionRecord, GitQueryRequest, dict[str, str]], str]

RENDERERS: dict[OutputFormat, Renderer] = {
    OutputFormat.JSON: render_json,
    OutputFormat.JS: render_js,
    OutputFormat.TXT: render_txt,
    OutputFormat.TS: render_ts,
}

def render(
    record: VersionRecord,
    fmt,
    request: GitQueryRequest | None = None,
    provenance: dict[str, str] | None = None,
) -> str:
    """Return the content of the *fmt* artifact for *record*.

    *fmt* may be an OutputFormat or its string tag. When *request* is not
    given it is inferred from which optional fields the record carries.
    Raises UnsupportedFormatError for an unknown tag.
    """
    output_format = fmt if isinstance(fmt, OutputFormat) else parse_format(fmt)
    if request is None:
        request = _request_from_record(record)
    if provenance is None:
        provenance = build_provenance()
    return RENDERERS[output_format](record, request, provenance)
