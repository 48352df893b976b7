"""Tests for the gitstamp command line."""

import json

import pytest
from typer.testing import CliRunner

import gitstamp.cli as cli_mod
import gitstamp.git_helpers as gh
import gitstamp.record as record_mod
from gitstamp.cli import _split_formats, app
from gitstamp.version import PACKAGE_VERSION

runner = CliRunner()

_ANSWERS = {
    "rev-parse --abbrev-ref HEAD": "release-2.3",
    "rev-parse --short HEAD": "abc1234",
    "rev-parse HEAD": "abc1234def5678abc1234def5678abc1234def56",
    "describe --tags --exact-match HEAD": "v2.3.0",
}


@pytest.fixture
def fake_git(monkeypatch):
    monkeypatch.setattr(gh, "run_git_query", lambda args, fallback="", **kw: _ANSWERS.get(" ".join(args), fallback))
    monkeypatch.setattr(record_mod, "is_git_repository", lambda: True)
    monkeypatch.setattr(cli_mod, "check_command", lambda name: True)


# --- _split_formats ---

def test_split_formats_accepts_commas_and_repeats():
    assert _split_formats(["json,ts", "txt", " js , "]) == ["json", "ts", "txt", "js"]


# --- --version ---

def test_version_flag_prints_package_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert PACKAGE_VERSION in result.output


# --- generate ---

def test_generate_writes_files_and_prints_summary(tmp_path, fake_git):
    out = tmp_path / "public"
    result = runner.invoke(
        app,
        ["generate", "--path", str(out), "--files", "json,ts", "--field", "team=web", "--time-zone", "UTC"],
    )

    assert result.exit_code == 0, result.output
    assert "v2.3 (v2.3.0) release-2.3 @abc1234" in result.output
    data = json.loads((out / "version.json").read_text(encoding="utf-8"))
    assert data["team"] == "web"
    assert data["version"] == "2.3"
    assert (out / "version.ts").is_file()
    assert not (out / "version.js").exists()


def test_generate_without_author_and_commit_date(tmp_path, fake_git):
    result = runner.invoke(
        app, ["generate", "--path", str(tmp_path), "--files", "json", "--no-author", "--no-commit-date"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "version.json").read_text(encoding="utf-8"))
    assert "author" not in data
    assert "commitDate" not in data


def test_generate_reads_path_from_environment(tmp_path, fake_git, monkeypatch):
    monkeypatch.setenv("GITSTAMP_PATH", str(tmp_path / "env-out"))
    result = runner.invoke(app, ["generate", "--files", "json", "--silent"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "env-out" / "version.json").is_file()


def test_generate_bad_rule_exits_with_config_error(tmp_path, fake_git):
    result = runner.invoke(app, ["generate", "--path", str(tmp_path), "--rule", "("])
    assert result.exit_code == 2
    assert "Configuration error" in result.output
    assert list(tmp_path.iterdir()) == []


def test_generate_bad_field_exits_with_config_error(tmp_path, fake_git):
    result = runner.invoke(app, ["generate", "--path", str(tmp_path), "--field", "oops"])
    assert result.exit_code == 2


# --- show ---

def test_show_prints_fields(tmp_path):
    info = {"version": "2.3", "tag": None, "branch": "release-2.3", "commitHash": "abc1234"}
    (tmp_path / "version.json").write_text(json.dumps(info), encoding="utf-8")

    result = runner.invoke(app, ["show", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "release-2.3" in result.output
    assert "abc1234" in result.output


def test_show_missing_file_exits_1(tmp_path):
    result = runner.invoke(app, ["show", str(tmp_path)])
    assert result.exit_code == 1


# --- compare ---

@pytest.mark.parametrize("v1, v2, expected", [("1.2", "1.10", "-1"), ("v2.0", "2", "0"), ("3", "2.9", "1")])
def test_compare_prints_result(v1, v2, expected):
    result = runner.invoke(app, ["compare", v1, v2])
    assert result.exit_code == 0
    assert result.output.strip() == expected


# --- clean ---

def test_clean_removes_version_files(tmp_path):
    (tmp_path / "version.json").write_text("{}", encoding="utf-8")
    (tmp_path / "version.js").write_text("", encoding="utf-8")
    (tmp_path / "app.js").write_text("", encoding="utf-8")

    result = runner.invoke(app, ["clean", "--path", str(tmp_path)])

    assert result.exit_code == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == ["app.js"]


def test_clean_with_nothing_to_remove(tmp_path):
    result = runner.invoke(app, ["clean", "--path", str(tmp_path)])
    assert result.exit_code == 0
    assert "No version files" in result.output
