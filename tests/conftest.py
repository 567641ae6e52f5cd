# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from swclint.artifacts import CompiledArtifact
from swclint.findings import IssueNormalizer

SOURCE_PATH = "contracts/SimpleStore.sol"

SOURCE = (
    "pragma solidity ^0.5.0;\n"
    "\n"
    "contract SimpleStore {\n"
    "    uint256[] public values;\n"
    "    uint256 total;\n"
    "\n"
    "    function add(uint256 v) public {\n"
    "        values.push(v);\n"
    "        total += v;\n"
    "    }\n"
    "}\n"
)

# PUSH1 80 PUSH1 40 MSTORE CALLVALUE DUP1 ISZERO PUSH2 0010 JUMPI STOP JUMPDEST POP STOP
DEPLOYED_BYTECODE = "0x608060405234801561001057005b5000"

DEPLOYED_SOURCE_MAP = "0:186:0:-;;;97:86;;142:14;:::i;166:10:0:-;;52:23;-1:-1:-1;"

COMPACT_AST: dict[str, Any] = {
    "nodeType": "SourceUnit",
    "src": "0:186:0",
    "nodes": [
        {"nodeType": "PragmaDirective", "src": "0:23:0", "literals": ["solidity", "^", "0.5", ".0"]},
        {
            "nodeType": "ContractDefinition",
            "src": "25:160:0",
            "name": "SimpleStore",
            "nodes": [
                {
                    "nodeType": "VariableDeclaration",
                    "src": "52:23:0",
                    "name": "values",
                    "stateVariable": True,
                    "visibility": "public",
                    "typeName": {
                        "nodeType": "ArrayTypeName",
                        "src": "52:9:0",
                        "length": None,
                        "baseType": {"nodeType": "ElementaryTypeName", "src": "52:7:0", "name": "uint256"},
                    },
                },
                {
                    "nodeType": "VariableDeclaration",
                    "src": "81:13:0",
                    "name": "total",
                    "stateVariable": True,
                    "visibility": "internal",
                    "typeName": {"nodeType": "ElementaryTypeName", "src": "81:7:0", "name": "uint256"},
                },
                {
                    "nodeType": "FunctionDefinition",
                    "src": "97:86:0",
                    "name": "add",
                    "parameters": {
                        "nodeType": "ParameterList",
                        "src": "113:11:0",
                        "parameters": [
                            {
                                "nodeType": "VariableDeclaration",
                                "src": "114:9:0",
                                "name": "v",
                                "stateVariable": False,
                                "visibility": "internal",
                            },
                        ],
                    },
                    "body": {"nodeType": "Block", "src": "132:51:0", "statements": []},
                },
            ],
        },
    ],
}

LEGACY_AST: dict[str, Any] = {
    "name": "SourceUnit",
    "src": "0:186:0",
    "attributes": {"absolutePath": SOURCE_PATH},
    "children": [
        {"name": "PragmaDirective", "src": "0:23:0", "attributes": {}},
        {
            "name": "ContractDefinition",
            "src": "25:160:0",
            "attributes": {"name": "SimpleStore"},
            "children": [
                {
                    "name": "VariableDeclaration",
                    "src": "52:23:0",
                    "attributes": {"name": "values", "stateVariable": True, "visibility": "public"},
                    "children": [
                        {
                            "name": "ArrayTypeName",
                            "src": "52:9:0",
                            "attributes": {},
                            "children": [
                                {"name": "ElementaryTypeName", "src": "52:7:0", "attributes": {"name": "uint256"}},
                            ],
                        },
                    ],
                },
                {
                    "name": "VariableDeclaration",
                    "src": "81:13:0",
                    "attributes": {"name": "total", "stateVariable": True, "visibility": "internal"},
                    "children": [
                        {"name": "ElementaryTypeName", "src": "81:7:0", "attributes": {"name": "uint256"}},
                    ],
                },
                {
                    "name": "FunctionDefinition",
                    "src": "97:86:0",
                    "attributes": {"name": "add"},
                    "children": [
                        {"name": "ParameterList", "src": "113:11:0", "children": []},
                        {"name": "Block", "src": "132:51:0", "children": []},
                    ],
                },
            ],
        },
    ],
}


def make_build(**overrides: Any) -> dict[str, Any]:
    """Return a single-contract build record for ``SimpleStore``."""

    build: dict[str, Any] = {
        "contractName": "SimpleStore",
        "bytecode": DEPLOYED_BYTECODE,
        "deployedBytecode": DEPLOYED_BYTECODE,
        "sourceMap": DEPLOYED_SOURCE_MAP,
        "deployedSourceMap": DEPLOYED_SOURCE_MAP,
        "sourcePath": SOURCE_PATH,
        "source": SOURCE,
        "ast": copy.deepcopy(COMPACT_AST),
        "compiler": {"name": "solc", "version": "0.5.0+commit.1d4f565a"},
    }
    build.update(overrides)
    return build


def make_result(*issues: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Return an analysis result payload attributed to ``SOURCE_PATH``."""

    result: dict[str, Any] = {
        "sourceType": "raw-bytecode",
        "sourceFormat": "evm-byzantium-bytecode",
        "sourceList": [SOURCE_PATH],
        "issues": list(issues),
        "meta": {"logs": [], "error": [], "warning": []},
    }
    result.update(overrides)
    return result


def make_issue(
    location: str,
    *,
    swc_id: str = "SWC-101",
    severity: str = "High",
    head: str = "Integer overflow.",
    tail: str = "The arithmetic operation can overflow.",
) -> dict[str, Any]:
    """Return a raw engine finding with a single location."""

    return {
        "swcID": swc_id,
        "swcTitle": "Integer Overflow and Underflow",
        "description": {"head": head, "tail": tail},
        "severity": severity,
        "locations": [{"sourceMap": location}],
        "extra": {},
    }


@pytest.fixture
def build() -> dict[str, Any]:
    """Return a fresh single-contract build record."""
    return make_build()


@pytest.fixture
def artifact(build: dict[str, Any]) -> CompiledArtifact:
    """Return the compiled ``SimpleStore`` artifact."""
    return CompiledArtifact.from_build(build)


@pytest.fixture
def normalizer(artifact: CompiledArtifact) -> IssueNormalizer:
    """Return a normaliser over the ``SimpleStore`` artifact."""
    return IssueNormalizer(artifact)
