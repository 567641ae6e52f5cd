# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity-threshold and rule-id blacklist filtering."""

from __future__ import annotations

from collections.abc import Iterable

from ..config import FilterConfig
from ..core.models import DiagnosticRecord


def keep(diagnostic: DiagnosticRecord, config: FilterConfig) -> bool:
    """Return ``True`` when ``diagnostic`` passes ``config``.

    Args:
        diagnostic: Record to test.
        config: Severity threshold and normalised rule-id blacklist.

    Returns:
        bool: ``False`` when the record is below the threshold or blacklisted.
    """

    if config.severity_threshold is not None and diagnostic.severity < config.severity_threshold:
        return False
    if diagnostic.rule_id in config.id_blacklist:
        return False
    return True


def filter_diagnostics(diagnostics: Iterable[DiagnosticRecord], config: FilterConfig) -> list[DiagnosticRecord]:
    """Return the records of ``diagnostics`` kept by ``config``, in order."""

    return [diagnostic for diagnostic in diagnostics if keep(diagnostic, config)]


__all__ = ["filter_diagnostics", "keep"]
