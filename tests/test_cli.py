# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the ``swclint report`` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from conftest import SOURCE_PATH, make_build, make_issue, make_result
from swclint.cli.app import app, build_jobs, parse_results
from swclint.cli.shared import CLIError


def _write(path: Path, payload: Any) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _invoke(tmp_path: Path, results: Any, *extra: str, build: dict[str, Any] | None = None) -> tuple[int, Any]:
    build_path = _write(tmp_path / "SimpleStore.json", build or make_build())
    results_path = _write(tmp_path / "results.json", results)
    output = tmp_path / "report.json"
    result = CliRunner().invoke(
        app,
        ["report", str(build_path), str(results_path), "--output", str(output), "--no-emoji", "--no-color", *extra],
    )
    payload = json.loads(output.read_text(encoding="utf-8")) if output.exists() else None
    return result.exit_code, payload


def test_report_with_findings_exits_one(tmp_path: Path) -> None:
    code, payload = _invoke(tmp_path, make_result(make_issue("10:1:0")))

    assert code == 1
    assert payload[0]["filePath"] == SOURCE_PATH
    assert payload[0]["errorCount"] == 1
    assert payload[0]["messages"][0]["line"] == 8


def test_clean_report_exits_zero(tmp_path: Path) -> None:
    code, payload = _invoke(tmp_path, make_result())

    assert code == 0
    assert payload == [
        {
            "filePath": SOURCE_PATH,
            "errorCount": 0,
            "warningCount": 0,
            "fixableErrorCount": 0,
            "fixableWarningCount": 0,
            "messages": [],
        },
    ]


def test_min_severity_and_blacklist_options(tmp_path: Path) -> None:
    results = make_result(
        make_issue("11:1:0", severity="Medium", swc_id="SWC-103"),
        make_issue("10:1:0", swc_id="SWC-107"),
    )

    code, payload = _invoke(tmp_path, results, "--min-severity", "error", "--swc-blacklist", "107")

    assert code == 0
    assert payload[0]["messages"] == []


def test_project_config_supplies_defaults(tmp_path: Path) -> None:
    (tmp_path / "swclint.json").write_text(json.dumps({"swc-blacklist": "101"}), encoding="utf-8")

    code, payload = _invoke(tmp_path, make_result(make_issue("10:1:0")))

    assert code == 0
    assert payload[0]["messages"] == []


def test_results_keyed_by_contract(tmp_path: Path) -> None:
    results = {"SimpleStore": make_result(make_issue("11:1:0", severity="Low"))}

    code, payload = _invoke(tmp_path, results, "--contract", "SimpleStore", "--contract", "Missing")

    assert code == 1
    assert payload[0]["warningCount"] == 1


def test_inconsistent_build_is_reported_per_contract(tmp_path: Path) -> None:
    build = make_build(deployedSourceMap="0:186:0:-;;")

    code, payload = _invoke(tmp_path, make_result(make_issue("10:1:0")), build=build)

    assert code == 1
    assert payload == []


def test_unreadable_results_exit_two(tmp_path: Path) -> None:
    build_path = _write(tmp_path / "SimpleStore.json", make_build())
    results_path = tmp_path / "results.json"
    results_path.write_text("{not json", encoding="utf-8")

    result = CliRunner().invoke(app, ["report", str(build_path), str(results_path), "--no-emoji"])

    assert result.exit_code == 2


def test_invalid_bytecode_is_reported_per_contract(tmp_path: Path) -> None:
    code, payload = _invoke(tmp_path, make_result(), build=make_build(deployedBytecode="0xzz"))

    assert code == 1
    assert payload == []


def test_parse_results_layouts() -> None:
    single = make_result()

    assert list(parse_results(single)) == [None]
    assert len(parse_results([single, single])[None]) == 2
    keyed = parse_results({"A": single, "B": [single]})
    assert sorted(keyed) == ["A", "B"]
    with pytest.raises(CLIError):
        parse_results("nope")


def test_unkeyed_results_need_a_single_contract() -> None:
    with pytest.raises(CLIError):
        build_jobs([], parse_results(make_result()))
