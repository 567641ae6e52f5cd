# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by swclint."""

from __future__ import annotations


class SwcLintError(Exception):
    """Base class for errors surfaced to swclint callers."""


class InvalidBytecodeError(SwcLintError, ValueError):
    """Raised when a bytecode string is not valid hexadecimal."""

    def __init__(self, field: str, reason: str) -> None:
        """Initialise the error with the offending artifact field.

        Args:
            field: Artifact field holding the malformed bytecode.
            reason: Short description of the problem.
        """

        super().__init__(f"invalid bytecode in {field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidLocationError(SwcLintError, ValueError):
    """Raised when a finding location string cannot be parsed."""

    def __init__(self, field: str, value: str) -> None:
        """Initialise the error with the field and raw value.

        Args:
            field: Name of the location field being parsed.
            value: Raw value that failed to parse.
        """

        super().__init__(f"invalid location in {field}: {value!r}")
        self.field = field
        self.value = value


class InconsistentSourceMapError(SwcLintError):
    """Raised when an instruction has no entry in the positional encoding.

    This means the bytecode and the source map were produced by different
    builds, so any line information derived from them would be wrong.
    """

    def __init__(self, instruction: int, entry_count: int) -> None:
        """Initialise the error with the instruction that failed to map.

        Args:
            instruction: Instruction number looked up in the source map.
            entry_count: Number of entries available in the source map.
        """

        super().__init__(
            f"inconsistent source map: instruction {instruction} is outside the {entry_count} mapped entries",
        )
        self.instruction = instruction
        self.entry_count = entry_count


class ConfigError(SwcLintError):
    """Raised when configuration input is invalid."""


__all__ = [
    "ConfigError",
    "InconsistentSourceMapError",
    "InvalidBytecodeError",
    "InvalidLocationError",
    "SwcLintError",
]
