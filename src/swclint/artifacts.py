# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compiled contract artifacts and contract bookkeeping helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ArtifactSource(BaseModel):
    """Source file entry of a compiled build record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = ""
    ast: dict[str, Any] | None = None
    legacy_ast: dict[str, Any] | None = Field(default=None, alias="legacyAST")
    id: int | None = None

    @property
    def tree(self) -> dict[str, Any] | None:
        """Return the preferred syntax tree (legacy schema first)."""

        return self.legacy_ast or self.ast


class CompiledArtifact(BaseModel):
    """One compiled contract together with the sources it was built from."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    contract_name: str = Field(default="", alias="contractName")
    bytecode: str = ""
    deployed_bytecode: str = Field(default="", alias="deployedBytecode")
    source_map: str = Field(default="", alias="sourceMap")
    deployed_source_map: str = Field(default="", alias="deployedSourceMap")
    source_path: str = Field(default="", alias="sourcePath")
    source: str = ""
    ast: dict[str, Any] | None = None
    legacy_ast: dict[str, Any] | None = Field(default=None, alias="legacyAST")
    compiler_version: str | None = Field(default=None, alias="compilerVersion")
    sources: dict[str, ArtifactSource] = Field(default_factory=dict)

    @classmethod
    def from_build(cls, build: Mapping[str, Any]) -> CompiledArtifact:
        """Create an artifact from a single-contract build record.

        Records without a ``sources`` table get one synthesized from their
        ``sourcePath``/``source``/``ast`` fields so every artifact can be
        treated as multi-file.

        Args:
            build: Truffle-style build JSON for one contract.

        Returns:
            CompiledArtifact: Immutable artifact.
        """

        compiler = build.get("compiler")
        version = compiler.get("version") if isinstance(compiler, Mapping) else build.get("compilerVersion")
        legacy_ast = build.get("legacyAST", build.get("legacyAst"))
        source_path = build.get("sourcePath") or ""
        sources = build.get("sources")
        if not isinstance(sources, Mapping) or not sources:
            sources = {
                source_path: {
                    "source": build.get("source") or "",
                    "ast": build.get("ast"),
                    "legacyAST": legacy_ast,
                    "id": 0,
                },
            }
        main = sources.get(source_path) if isinstance(sources.get(source_path), Mapping) else {}
        return cls.model_validate(
            {
                "contractName": build.get("contractName") or "",
                "bytecode": build.get("bytecode") or "",
                "deployedBytecode": build.get("deployedBytecode") or "",
                "sourceMap": build.get("sourceMap") or "",
                "deployedSourceMap": build.get("deployedSourceMap") or "",
                "sourcePath": source_path,
                "source": build.get("source") or main.get("source") or "",
                "ast": build.get("ast") or main.get("ast"),
                "legacyAST": legacy_ast or main.get("legacyAST"),
                "compilerVersion": version,
                "sources": {path: _source_payload(entry) for path, entry in sources.items()},
            },
        )

    def source_list(self) -> list[str]:
        """Return source paths ordered by compiler source id."""

        indexed = list(self.sources.items())
        return [
            path
            for path, _ in sorted(
                indexed,
                key=lambda item: (item[1].id is None, item[1].id if item[1].id is not None else 0),
            )
        ]


def _source_payload(entry: Any) -> dict[str, Any]:
    if not isinstance(entry, Mapping):
        return {}
    return {
        "source": entry.get("source") or "",
        "ast": entry.get("ast"),
        "legacyAST": entry.get("legacyAST", entry.get("legacyAst")),
        "id": entry.get("id"),
    }


def is_multi_contract_build(build: Mapping[str, Any]) -> bool:
    """Return ``True`` when ``build`` lists contracts per source file."""

    sources = build.get("sources")
    if not isinstance(sources, Mapping):
        return False
    return any(isinstance(entry, Mapping) and isinstance(entry.get("contracts"), list) for entry in sources.values())


def split_build_by_contract(build: Mapping[str, Any]) -> list[CompiledArtifact]:
    """Split a multi-contract build record into one artifact per contract.

    Every artifact shares the full source table of the build so findings in
    imported files can still be resolved.

    Args:
        build: Build record with ``sources.<path>.contracts`` lists.

    Returns:
        list[CompiledArtifact]: Artifacts in source then declaration order.
    """

    sources: Mapping[str, Any] = build.get("sources") or {}
    shared = {path: _source_payload(entry) for path, entry in sources.items()}
    artifacts: list[CompiledArtifact] = []
    for source_path, entry in sources.items():
        if not isinstance(entry, Mapping):
            continue
        for contract in entry.get("contracts") or ():
            artifacts.append(
                CompiledArtifact.from_build(
                    {
                        **contract,
                        "sourcePath": source_path,
                        "source": entry.get("source") or "",
                        "ast": entry.get("ast"),
                        "legacyAST": entry.get("legacyAST", entry.get("legacyAst")),
                        "compiler": build.get("compiler"),
                        "sources": shared,
                    },
                ),
            )
    return artifacts


def load_artifacts(build: Mapping[str, Any]) -> list[CompiledArtifact]:
    """Return the artifacts described by either build record layout."""

    if is_multi_contract_build(build):
        return split_build_by_contract(build)
    return [CompiledArtifact.from_build(build)]


def unique_contracts(artifacts: Iterable[CompiledArtifact]) -> list[CompiledArtifact]:
    """Drop artifacts repeating an earlier ``(source_path, contract_name)`` pair."""

    seen: dict[tuple[str, str], CompiledArtifact] = {}
    for artifact in artifacts:
        seen.setdefault((artifact.source_path, artifact.contract_name), artifact)
    return list(seen.values())


def found_contract_names(artifacts: Iterable[CompiledArtifact], requested: Sequence[str] | None) -> list[str]:
    """Return artifact contract names, restricted to ``requested`` when given."""

    return [
        artifact.contract_name
        for artifact in artifacts
        if not requested or artifact.contract_name in requested
    ]


def not_found_contracts(requested: Sequence[str] | None, found: Sequence[str]) -> list[str]:
    """Return requested contract names with no matching artifact."""

    if not requested:
        return []
    return [name for name in requested if name not in found]


def not_analyzed_contracts(analyzed: Iterable[str], requested: Sequence[str] | None) -> list[str]:
    """Return requested contract names that produced no analysis result."""

    if not requested:
        return []
    done = set(analyzed)
    return [name for name in requested if name not in done]


__all__ = [
    "ArtifactSource",
    "CompiledArtifact",
    "found_contract_names",
    "is_multi_contract_build",
    "load_artifacts",
    "not_analyzed_contracts",
    "not_found_contracts",
    "split_build_by_contract",
    "unique_contracts",
]
