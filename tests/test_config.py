"""Tests for option defaults, validation and custom field parsing."""

import re

import pytest

from gitstamp.config import (
    DEFAULT_RULE,
    GenerateOptions,
    GitQueryRequest,
    compile_rule,
    parse_custom_fields,
    validate_options,
)
from gitstamp.errors import ConfigError


# --- defaults ---

def test_defaults_match_documented_values():
    options = validate_options()
    assert options.path == "public"
    assert options.rule.pattern == ".+-"
    assert options.files == ("json", "js", "txt")
    assert options.include_author is True
    assert options.include_commit_date is True
    assert options.time_zone == "Asia/Shanghai"
    assert options.custom_fields == {}
    assert options.log_level == "info"


def test_request_descriptor_reflects_flags():
    options = GenerateOptions(include_author=False, include_commit_date=True)
    assert options.request == GitQueryRequest(include_author=False, include_commit_date=True)


# --- validate_options ---

def test_overrides_are_applied():
    options = validate_options(path="dist", files=["ts"], time_zone="UTC")
    assert options.path == "dist"
    assert options.files == ("ts",)
    assert options.time_zone == "UTC"


def test_unknown_formats_pass_validation():
    assert validate_options(files=["json", "xml"]).files == ("json", "xml")


def test_string_rule_is_compiled():
    assert validate_options(rule=r"^feature/").rule.pattern == "^feature/"


@pytest.mark.parametrize(
    "overrides",
    [
        {"path": ""},
        {"path": 3},
        {"rule": 3},
        {"rule": "("},
        {"files": "json"},
        {"files": ["json", 1]},
        {"time_zone": "Mars/Olympus_Mons"},
        {"log_level": "verbose"},
        {"custom_fields": ["a", "b"]},
        {"no_such_option": True},
    ],
)
def test_invalid_options_raise_config_error(overrides):
    with pytest.raises(ConfigError):
        validate_options(**overrides)


def test_custom_fields_are_copied():
    fields = {"team": "web"}
    options = validate_options(custom_fields=fields)
    fields["team"] = "changed"
    assert options.custom_fields == {"team": "web"}


# --- compile_rule ---

def test_compile_rule_returns_pattern_unchanged():
    assert compile_rule(DEFAULT_RULE) is DEFAULT_RULE


def test_compile_rule_compiles_string():
    assert isinstance(compile_rule("v"), re.Pattern)


# --- parse_custom_fields ---

def test_parse_custom_fields_splits_on_first_equals():
    assert parse_custom_fields(["team=web", "url=https://x?a=b"]) == {"team": "web", "url": "https://x?a=b"}


def test_parse_custom_fields_last_key_wins():
    assert parse_custom_fields(["a=1", "a=2"]) == {"a": "2"}


def test_parse_custom_fields_allows_empty_value():
    assert parse_custom_fields(["note="]) == {"note": ""}


@pytest.mark.parametrize("pair", ["novalue", "=x", "  =x"])
def test_parse_custom_fields_rejects_malformed(pair):
    with pytest.raises(ConfigError):
        parse_custom_fields([pair])
