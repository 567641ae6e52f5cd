# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class NativeSeverity(str, Enum):
    """Severity vocabulary reported by the analysis engine."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DiagnosticLevel(IntEnum):
    """Numeric ESLint severity levels used in diagnostic records."""

    WARNING = 1
    ERROR = 2


_NATIVE_TO_LEVEL: Final[dict[str, DiagnosticLevel]] = {
    NativeSeverity.HIGH.value: DiagnosticLevel.ERROR,
    NativeSeverity.MEDIUM.value: DiagnosticLevel.WARNING,
}

_LEVEL_NAMES: Final[dict[str, DiagnosticLevel]] = {
    "error": DiagnosticLevel.ERROR,
    "warning": DiagnosticLevel.WARNING,
}


def level_from_native(severity: str | None) -> DiagnosticLevel:
    """Map an engine severity onto a numeric diagnostic level.

    Args:
        severity: Engine-native severity such as ``High`` or ``Low``.

    Returns:
        DiagnosticLevel: ``ERROR`` for ``High``; ``WARNING`` for everything else.
    """

    if severity is None:
        return DiagnosticLevel.WARNING
    return _NATIVE_TO_LEVEL.get(severity, DiagnosticLevel.WARNING)


def level_from_name(name: str | None, default: DiagnosticLevel = DiagnosticLevel.WARNING) -> DiagnosticLevel:
    """Return the level named by ``name`` (``error`` or ``warning``).

    Args:
        name: Level name supplied by a user, case insensitive.
        default: Level returned when ``name`` is empty or unknown.

    Returns:
        DiagnosticLevel: Matching level or ``default``.
    """

    if not name:
        return default
    return _LEVEL_NAMES.get(name.strip().lower(), default)


__all__ = [
    "DiagnosticLevel",
    "NativeSeverity",
    "level_from_name",
    "level_from_native",
]
