# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge per-file reports coming from different analysis batches."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import cmp_to_key

from ..core.models import DiagnosticFileReport, DiagnosticRecord

_EMPTY_POSITION = (-1, -1)


def compare_line_column(line1: int, column1: int, line2: int, column2: int) -> int:
    """Compare two positions by line, then column.

    Returns:
        int: Negative, zero, or positive like a classic comparator.
    """

    return column1 - column2 if line1 == line2 else line1 - line2


def _end_position(record: DiagnosticRecord) -> tuple[int, int]:
    if record.end_line is None or record.end_col is None:
        return _EMPTY_POSITION
    return record.end_line, record.end_col


def compare_message_ranges(first: DiagnosticRecord, second: DiagnosticRecord) -> int:
    """Compare two records by start position, then by end position.

    Records without an end position sort before those with one.
    """

    result = compare_line_column(first.line, first.column, second.line, second.column)
    if result:
        return result
    return compare_line_column(*_end_position(first), *_end_position(second))


def sort_messages(messages: Iterable[DiagnosticRecord]) -> list[DiagnosticRecord]:
    """Return ``messages`` stably sorted by :func:`compare_message_ranges`."""

    return sorted(messages, key=cmp_to_key(compare_message_ranges))


@dataclass(slots=True)
class _Accumulator:
    """Running totals for one file path."""

    error_count: int = 0
    warning_count: int = 0
    fixable_error_count: int = 0
    fixable_warning_count: int = 0
    messages: list[DiagnosticRecord] = field(default_factory=list)

    def add(self, report: DiagnosticFileReport) -> None:
        self.error_count += report.error_count
        self.warning_count += report.warning_count
        self.fixable_error_count += report.fixable_error_count
        self.fixable_warning_count += report.fixable_warning_count
        self.messages.extend(report.messages)


def merge_by_path(reports: Iterable[DiagnosticFileReport]) -> list[DiagnosticFileReport]:
    """Merge reports sharing a ``file_path``.

    Counts are summed and message lists concatenated then sorted. Output order
    follows the first appearance of each path.

    Args:
        reports: Reports from any number of batches.

    Returns:
        list[DiagnosticFileReport]: One report per distinct path.
    """

    merged: dict[str, _Accumulator] = {}
    for report in reports:
        merged.setdefault(report.file_path, _Accumulator()).add(report)
    return [
        DiagnosticFileReport(
            file_path=path,
            error_count=acc.error_count,
            warning_count=acc.warning_count,
            fixable_error_count=acc.fixable_error_count,
            fixable_warning_count=acc.fixable_warning_count,
            messages=tuple(sort_messages(acc.messages)),
        )
        for path, acc in merged.items()
    ]


__all__ = ["compare_line_column", "compare_message_ranges", "merge_by_path", "sort_messages"]
