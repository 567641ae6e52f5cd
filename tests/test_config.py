# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for option parsing and report configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swclint.config import (
    PROJECT_CONFIG_NAME,
    FilterConfig,
    build_report_config,
    load_project_config,
    normalize_rule_id,
    parse_id_blacklist,
    parse_severity_threshold,
)
from swclint.core.severity import DiagnosticLevel, level_from_native
from swclint.errors import ConfigError


@pytest.mark.parametrize(
    ("native", "level"),
    [("High", 2), ("Medium", 1), ("Low", 1), ("Informational", 1), (None, 1)],
)
def test_native_severity_mapping(native: str | None, level: int) -> None:
    assert level_from_native(native) == level


@pytest.mark.parametrize(
    ("value", "threshold"),
    [("error", 2), ("ERROR", 2), ("warning", 1), ("whatever", 1), (None, 1), (2, 2)],
)
def test_severity_threshold(value: object, threshold: int) -> None:
    assert parse_severity_threshold(value) == threshold


def test_numeric_threshold_outside_levels_is_rejected() -> None:
    with pytest.raises(ConfigError):
        parse_severity_threshold(7)


def test_blacklist_normalisation() -> None:
    assert parse_id_blacklist("101, 103,SWC-110") == ("SWC-101", "SWC-103", "SWC-110")
    assert parse_id_blacklist([101, "swc-104"]) == ("SWC-101", "SWC-104")
    assert parse_id_blacklist(None) == ()
    assert parse_id_blacklist("") == ()
    assert normalize_rule_id(" 107 ") == "SWC-107"
    assert FilterConfig(id_blacklist="105").id_blacklist == ("SWC-105",)


def test_explicit_options_override_project_defaults() -> None:
    project = {"min-severity": "error", "swc-blacklist": "101", "style": "json"}

    config = build_report_config({"swc-blacklist": "103", "style": None}, project)

    assert config.filters.severity_threshold == DiagnosticLevel.ERROR
    assert config.filters.id_blacklist == ("SWC-103",)
    assert config.style == "json"
    assert not config.space_limited


def test_default_config_is_space_limited() -> None:
    config = build_report_config({})

    assert config.style == "stylish"
    assert config.space_limited
    assert config.filters.severity_threshold == 1
    assert config.debug == 0


def test_invalid_debug_level_raises() -> None:
    with pytest.raises(ConfigError):
        build_report_config({"debug": "loud"})


def test_load_project_config(tmp_path: Path) -> None:
    assert load_project_config(tmp_path) == {}

    (tmp_path / PROJECT_CONFIG_NAME).write_text(json.dumps({"style": "tap"}), encoding="utf-8")
    assert load_project_config(tmp_path) == {"style": "tap"}

    (tmp_path / PROJECT_CONFIG_NAME).write_text("[1, 2", encoding="utf-8")
    assert load_project_config(tmp_path) == {}

    (tmp_path / PROJECT_CONFIG_NAME).write_text("[1, 2]", encoding="utf-8")
    assert load_project_config(tmp_path) == {}
