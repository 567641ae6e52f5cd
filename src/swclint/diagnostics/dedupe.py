# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exact-match deduplication of diagnostic records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.models import DiagnosticFileReport, DiagnosticRecord
from ..core.severity import DiagnosticLevel


def is_error(record: DiagnosticRecord) -> bool:
    """Return ``True`` when ``record`` counts as an error (fatal or severity 2)."""

    return record.fatal or record.severity == DiagnosticLevel.ERROR


def count_levels(records: Iterable[DiagnosticRecord]) -> tuple[int, int]:
    """Return ``(errors, warnings)`` for ``records``."""

    errors = warnings = 0
    for record in records:
        if is_error(record):
            errors += 1
        else:
            warnings += 1
    return errors, warnings


def dedupe_messages(records: Iterable[DiagnosticRecord]) -> list[DiagnosticRecord]:
    """Return ``records`` without structural duplicates, keeping first-seen order."""

    seen: set[DiagnosticRecord] = set()
    unique: list[DiagnosticRecord] = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)
    return unique


def dedupe_report(report: DiagnosticFileReport) -> DiagnosticFileReport:
    """Return ``report`` with duplicate messages removed and counts recomputed."""

    messages = dedupe_messages(report.messages)
    errors, warnings = count_levels(messages)
    return report.model_copy(
        update={
            "messages": tuple(messages),
            "error_count": errors,
            "warning_count": warnings,
        },
    )


def dedupe_reports(reports: Sequence[DiagnosticFileReport]) -> list[DiagnosticFileReport]:
    """Apply :func:`dedupe_report` to every report."""

    return [dedupe_report(report) for report in reports]


__all__ = ["count_levels", "dedupe_messages", "dedupe_report", "dedupe_reports", "is_error"]
