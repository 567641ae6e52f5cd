# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for build record loading and contract bookkeeping."""

from __future__ import annotations

from typing import Any

from conftest import COMPACT_AST, DEPLOYED_BYTECODE, DEPLOYED_SOURCE_MAP, SOURCE, SOURCE_PATH, make_build
from swclint.artifacts import (
    CompiledArtifact,
    found_contract_names,
    is_multi_contract_build,
    load_artifacts,
    not_analyzed_contracts,
    not_found_contracts,
    unique_contracts,
)

LIBRARY = "contracts/lib/Helper.sol"


def _multi_build() -> dict[str, Any]:
    contract = {
        "contractName": "SimpleStore",
        "deployedBytecode": DEPLOYED_BYTECODE,
        "deployedSourceMap": DEPLOYED_SOURCE_MAP,
    }
    return {
        "compiler": {"version": "0.5.0"},
        "sources": {
            SOURCE_PATH: {"source": SOURCE, "ast": COMPACT_AST, "id": 0, "contracts": [contract]},
            LIBRARY: {
                "source": "library Helper {}\n",
                "id": 1,
                "contracts": [{"contractName": "Helper"}, {"contractName": "Helper"}],
            },
        },
    }


def test_single_build_synthesizes_source_table(build: dict[str, Any]) -> None:
    artifact = CompiledArtifact.from_build(build)

    assert artifact.contract_name == "SimpleStore"
    assert artifact.compiler_version == "0.5.0+commit.1d4f565a"
    assert artifact.source_list() == [SOURCE_PATH]
    assert artifact.sources[SOURCE_PATH].source == SOURCE
    assert artifact.sources[SOURCE_PATH].tree == COMPACT_AST


def test_multi_contract_build_is_split() -> None:
    build = _multi_build()

    assert is_multi_contract_build(build)
    assert not is_multi_contract_build(make_build())
    artifacts = load_artifacts(build)

    assert [artifact.contract_name for artifact in artifacts] == ["SimpleStore", "Helper", "Helper"]
    assert artifacts[1].source_path == LIBRARY
    assert artifacts[1].source == "library Helper {}\n"
    assert artifacts[0].source_list() == [SOURCE_PATH, LIBRARY]
    assert artifacts[0].compiler_version == "0.5.0"


def test_unique_contracts_drops_repeats() -> None:
    artifacts = unique_contracts(load_artifacts(_multi_build()))

    assert [artifact.contract_name for artifact in artifacts] == ["SimpleStore", "Helper"]


def test_contract_name_bookkeeping() -> None:
    artifacts = unique_contracts(load_artifacts(_multi_build()))

    found = found_contract_names(artifacts, ["Helper", "Missing"])

    assert found == ["Helper"]
    assert found_contract_names(artifacts, None) == ["SimpleStore", "Helper"]
    assert not_found_contracts(["Helper", "Missing"], found) == ["Missing"]
    assert not_found_contracts(None, found) == []
    assert not_analyzed_contracts(["Helper"], ["SimpleStore", "Helper"]) == ["SimpleStore"]
    assert not_analyzed_contracts([], None) == []
