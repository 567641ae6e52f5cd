# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-contract conversion of engine findings into diagnostic records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..artifacts import CompiledArtifact
from ..config import FilterConfig
from ..core.models import DiagnosticFileReport, DiagnosticRecord, FindingGroup, RawFinding, SourceLocation, SourceSpan
from ..core.severity import level_from_native
from ..diagnostics.dedupe import count_levels
from ..diagnostics.filtering import keep
from ..sourcemap.bytecode import InstructionIndex
from ..sourcemap.encoding import PositionalEncoding
from ..sourcemap.linebreaks import LineBreakIndex
from ..sourcemap.resolver import LocationResolver, SourceFormat, coerce_source_format
from ..syntax.heuristics import FalsePositiveHeuristic
from ..syntax.nodes import AstNodeView, wrap_ast
from .remap import MISSING_ID

LOGGER = logging.getLogger(__name__)


class IssueNormalizer:
    """Owns the decoding tables of one compiled artifact.

    All tables are built in the constructor and never mutated, so one
    instance may be shared by concurrent readers.

    Args:
        artifact: Compiled contract whose findings will be converted.

    Raises:
        InvalidBytecodeError: If the deployed bytecode is not valid hex.
        InvalidLocationError: If the deployed source map is malformed.
    """

    def __init__(self, artifact: CompiledArtifact) -> None:
        self.artifact = artifact
        self.instruction_index = InstructionIndex.from_hex(artifact.deployed_bytecode, field="deployedBytecode")
        self.encoding = PositionalEncoding.parse(artifact.deployed_source_map)
        self.line_breaks: dict[str, LineBreakIndex] = {}
        self.asts: dict[str, AstNodeView] = {}
        for path, source in artifact.sources.items():
            text = source.source or (artifact.source if path == artifact.source_path else "")
            self.line_breaks[path] = LineBreakIndex.from_source(text)
            tree = wrap_ast(source.tree)
            if tree is not None:
                self.asts[path] = tree
        main_tree = wrap_ast(artifact.legacy_ast or artifact.ast)
        if main_tree is not None:
            self.asts.setdefault(artifact.source_path, main_tree)
        self.resolver = LocationResolver(
            instruction_index=self.instruction_index,
            encoding=self.encoding,
            line_breaks=self.line_breaks,
            source_names=artifact.source_list(),
        )
        self.heuristic = FalsePositiveHeuristic(self.asts)

    @classmethod
    def from_build(cls, build: Mapping[str, Any]) -> IssueNormalizer:
        """Return a normaliser for a single-contract build record."""

        return cls(CompiledArtifact.from_build(build))

    @property
    def contract_name(self) -> str:
        """Return the contract name of the underlying artifact."""

        return self.artifact.contract_name

    def _location_format(self, location: SourceLocation, source_format: str | None) -> str | None:
        return location.source_format or source_format

    def resolve(
        self,
        finding: RawFinding,
        source_format: str | SourceFormat | None = None,
        source_name: str | None = None,
    ) -> SourceSpan:
        """Return the span of the first location of ``finding`` that resolves.

        Args:
            finding: Engine finding.
            source_format: Default location format; a per-location format wins.
            source_name: Source path the finding was attributed to.

        Returns:
            SourceSpan: First resolved span, or the unresolved sentinel.

        Raises:
            InvalidLocationError: If a location string is malformed.
            InconsistentSourceMapError: If bytecode and source map disagree.
        """

        default_format = source_format.value if isinstance(source_format, SourceFormat) else source_format
        for location in finding.locations:
            span = self.resolver.resolve(
                location.source_map,
                self._location_format(location, default_format),
                source_name,
            )
            if span.resolved:
                return span
        return SourceSpan.unresolved()

    def is_ignorable(
        self,
        location: SourceLocation | str,
        source_format: str | SourceFormat | None = None,
        source_name: str | None = None,
    ) -> bool:
        """Return ``True`` when ``location`` matches a known false positive.

        Only the syntax tree of the file the location points at is searched.
        Bytecode locations use the file named by their source-map entry; text
        locations use ``source_name`` and then the file index of the location.
        When no file can be named the location is not ignorable.

        Args:
            location: Finding location or bare location string.
            source_format: Format used when ``location`` carries none.
            source_name: Source path the finding was attributed to.

        Returns:
            bool: ``True`` only when the location sits on a public dynamic
            array state variable of its own file.
        """

        if isinstance(location, SourceLocation):
            raw, fmt = location.source_map, location.source_format or source_format
        else:
            raw, fmt = location, source_format
        kind = coerce_source_format(fmt)
        if kind is None:
            return False
        entry = self.resolver.source_entry(raw, kind)
        if entry is None:
            return False
        if kind is SourceFormat.BYTECODE:
            target = self.resolver.source_name_for(entry)
        else:
            target = source_name or self.resolver.source_name_for(entry)
        if target is None:
            LOGGER.debug("location %r names no known source file; not ignorable", raw)
            return False
        return self.heuristic.is_ignorable(entry, target)

    def finding_is_ignorable(
        self,
        finding: RawFinding,
        source_format: str | None = None,
        source_name: str | None = None,
    ) -> bool:
        """Return ``True`` when any location of ``finding`` is ignorable."""

        return any(self.is_ignorable(location, source_format, source_name) for location in finding.locations)

    def to_diagnostic(
        self,
        finding: RawFinding,
        space_limited: bool = False,
        *,
        source_format: str | None = None,
        source_name: str | None = None,
    ) -> DiagnosticRecord:
        """Convert ``finding`` into an ESLint-style record.

        Args:
            finding: Engine finding.
            space_limited: Keep only the short description when ``True``.
            source_format: Default location format of the finding group.
            source_name: Source path the finding was attributed to.

        Returns:
            DiagnosticRecord: Record with resolved span and numeric severity.
        """

        description = finding.description
        message = description.head if space_limited else f"{description.head} {description.tail}".strip()
        span = self.resolve(finding, source_format, source_name)
        return DiagnosticRecord(
            rule_id=finding.swc_id or MISSING_ID,
            message=message,
            severity=int(level_from_native(finding.severity)),
            native_severity=finding.severity,
            line=span.start.line,
            column=span.start.column,
            end_line=span.end.line if span.end is not None else None,
            end_col=span.end.column if span.end is not None else None,
            fatal=False,
        )

    def to_file_report(
        self,
        group: FindingGroup,
        filter_config: FilterConfig | None = None,
        space_limited: bool = False,
    ) -> DiagnosticFileReport:
        """Convert a finding group into a per-file report.

        Ignorable findings and records rejected by ``filter_config`` are left out.

        Args:
            group: Findings attributed to one source file.
            filter_config: Severity threshold and blacklist.
            space_limited: Keep only the short description when ``True``.

        Returns:
            DiagnosticFileReport: Report for ``group.source``.
        """

        config = filter_config or FilterConfig()
        messages: list[DiagnosticRecord] = []
        for finding in group.issues:
            if self.finding_is_ignorable(finding, group.source_format, group.source):
                continue
            record = self.to_diagnostic(
                finding,
                space_limited,
                source_format=group.source_format,
                source_name=group.source,
            )
            if keep(record, config):
                messages.append(record)
        errors, warnings = count_levels(messages)
        return DiagnosticFileReport(
            file_path=group.source,
            error_count=errors,
            warning_count=warnings,
            messages=tuple(messages),
        )


__all__ = ["IssueNormalizer"]
