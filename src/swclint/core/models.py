# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the swclint package."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineColumn(BaseModel):
    """1-based line and 0-based column of a source position."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


UNRESOLVED_START: Final[LineColumn] = LineColumn(line=-1, column=0)


class SourceSpan(BaseModel):
    """Start and optional end position of a resolved location."""

    model_config = ConfigDict(frozen=True)

    start: LineColumn = UNRESOLVED_START
    end: LineColumn | None = None

    @classmethod
    def unresolved(cls) -> SourceSpan:
        """Return the sentinel span used when a location cannot be mapped."""

        return cls(start=UNRESOLVED_START, end=None)

    @property
    def resolved(self) -> bool:
        """Return ``True`` when the span start maps to a real line."""

        return self.start.line >= 0

    def as_pair(self) -> tuple[dict[str, int], dict[str, int]]:
        """Return ``(start, end)`` mappings with ``{}`` for an empty end."""

        end = self.end.model_dump() if self.end is not None else {}
        return self.start.model_dump(), end


def _none_to_empty_tuple(value: object) -> object:
    return () if value is None else value


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


class SourceLocation(BaseModel):
    """One location attached to an engine finding."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_map: str = Field(default="", alias="sourceMap")
    source_format: str | None = Field(default=None, alias="sourceFormat")
    source_type: str | None = Field(default=None, alias="sourceType")
    source_list: tuple[str, ...] = Field(default_factory=tuple, alias="sourceList")

    @field_validator("source_list", mode="before")
    @classmethod
    def _coerce_source_list(cls, value: object) -> object:
        return _none_to_empty_tuple(value)


class FindingDescription(BaseModel):
    """Short and long form of a finding description."""

    model_config = ConfigDict(frozen=True)

    head: str = ""
    tail: str = ""


class RawFinding(BaseModel):
    """Issue reported by the analysis engine before normalisation."""

    model_config = ConfigDict(populate_by_name=True)

    swc_id: str | None = Field(default=None, alias="swcID")
    swc_title: str | None = Field(default=None, alias="swcTitle")
    description: FindingDescription = Field(default_factory=FindingDescription)
    severity: str | None = None
    locations: list[SourceLocation] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("locations", mode="before")
    @classmethod
    def _coerce_locations(cls, value: object) -> object:
        return _none_to_empty_list(value)

    @field_validator("extra", mode="before")
    @classmethod
    def _coerce_extra(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, str):
            return {"head": value}
        return value


class EngineLog(BaseModel):
    """Log line emitted by the analysis engine."""

    level: str = "info"
    msg: str = ""


class AnalysisMeta(BaseModel):
    """Metadata block attached to an analysis result."""

    logs: list[EngineLog] = Field(default_factory=list)
    error: list[Any] = Field(default_factory=list)
    warning: list[Any] = Field(default_factory=list)

    @field_validator("logs", "error", "warning", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]


class AnalysisResult(BaseModel):
    """Raw result of one analysis run as received from the engine."""

    model_config = ConfigDict(populate_by_name=True)

    source_type: str | None = Field(default=None, alias="sourceType")
    source_format: str | None = Field(default=None, alias="sourceFormat")
    source_list: list[str] = Field(default_factory=list, alias="sourceList")
    issues: list[RawFinding] = Field(default_factory=list)
    meta: AnalysisMeta = Field(default_factory=AnalysisMeta)
    source: str | None = None

    @field_validator("source_list", "issues", mode="before")
    @classmethod
    def _coerce_lists(cls, value: object) -> object:
        return _none_to_empty_list(value)

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: object) -> object:
        return {} if value is None else value


class FindingGroup(BaseModel):
    """Findings attributed to one source file of an analysis result."""

    model_config = ConfigDict(populate_by_name=True)

    source_index: int = Field(alias="sourceIndex")
    source: str
    source_type: str | None = Field(default=None, alias="sourceType")
    source_format: str | None = Field(default=None, alias="sourceFormat")
    issues: list[RawFinding] = Field(default_factory=list)


class DiagnosticRecord(BaseModel):
    """ESLint-style message describing one finding at one location."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rule_id: str = Field(alias="ruleId")
    message: str
    severity: int
    native_severity: str | None = Field(default=None, alias="nativeSeverity")
    line: int = -1
    column: int = 0
    end_line: int | None = Field(default=None, alias="endLine")
    end_col: int | None = Field(default=None, alias="endCol")
    fatal: bool = False


class DiagnosticFileReport(BaseModel):
    """ESLint-style per-file result bundle."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_path: str = Field(alias="filePath")
    error_count: int = Field(default=0, alias="errorCount")
    warning_count: int = Field(default=0, alias="warningCount")
    fixable_error_count: int = Field(default=0, alias="fixableErrorCount")
    fixable_warning_count: int = Field(default=0, alias="fixableWarningCount")
    messages: tuple[DiagnosticRecord, ...] = Field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping using ESLint field names."""

        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "AnalysisMeta",
    "AnalysisResult",
    "DiagnosticFileReport",
    "DiagnosticRecord",
    "EngineLog",
    "FindingDescription",
    "FindingGroup",
    "LineColumn",
    "RawFinding",
    "SourceLocation",
    "SourceSpan",
    "UNRESOLVED_START",
]
