"""Read a generated version.json back and compare version strings."""

import json
import os
import re


def load_version_info(path: str) -> dict:
    """Load a version.json file, or version.json inside *path* if it is a directory.

    Raises FileNotFoundError when missing and ValueError when the content is
    not a JSON object.
    """
    if os.path.isdir(path):
        path = os.path.join(path, "version.json")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


def _version_parts(version: str) -> list[int]:
    parts = []
    for piece in re.sub(r"^v", "", version).split("."):
        match = re.match(r"\d+", piece)
        parts.append(int(match.group()) if match else 0)
    return parts


def compare_versions(version1: str, version2: str) -> int:
    """Compare dotted versions numerically: -1, 0 or 1.

    Pure function. A leading 'v' is ignored, missing parts count as 0 and
    non-numeric parts as 0. Returns 0 when either side is empty.
    """
    if not version1 or not version2:
        return 0
    parts1 = _version_parts(version1)
    parts2 = _version_parts(version2)
    width = max(len(parts1), len(parts2))
    parts1 += [0] * (width - len(parts1))
    parts2 += [0] * (width - len(parts2))
    if parts1 < parts2:
        return -1
    if parts1 > parts2:
        return 1
    return 0


def version_summary(info: dict) -> str:
    """One-line description like 'v2.3 (v2.3.0) release-2.3 @abc1234'."""
    parts = [f"v{info.get('version', 'unknown')}"]
    tag = info.get("tag")
    if tag and tag != "unknown":
        parts.append(f"({tag})")
    parts.append(str(info.get("branch", "unknown")))
    parts.append(f"@{info.get('commitHash', 'unknown')}")
    return " ".join(parts)
