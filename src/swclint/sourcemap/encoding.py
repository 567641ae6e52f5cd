# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decode compiler source maps (``start:length:file:jump`` entries)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from ..errors import InconsistentSourceMapError, InvalidLocationError

ENTRY_SEPARATOR: Final[str] = ";"
FIELD_SEPARATOR: Final[str] = ":"
NO_FILE: Final[int] = -1


class JumpType(str, Enum):
    """Jump annotation attached to a source-map entry."""

    INTO = "i"
    OUT = "o"
    REGULAR = "-"


@dataclass(frozen=True, slots=True)
class PositionalEntry:
    """One decoded source-map entry."""

    start: int
    length: int
    file_index: int = NO_FILE
    jump_type: JumpType = JumpType.REGULAR

    @property
    def has_source(self) -> bool:
        """Return ``True`` when the entry points at real source text."""

        return self.start >= 0 and self.length >= 0


_EMPTY_ENTRY: Final[PositionalEntry] = PositionalEntry(start=-1, length=-1)


def _parse_int(raw: str, field: str, segment: str) -> int:
    try:
        return int(raw, 10)
    except ValueError as exc:
        raise InvalidLocationError(field, segment) from exc


def _parse_jump(raw: str, segment: str) -> JumpType:
    try:
        return JumpType(raw)
    except ValueError as exc:
        raise InvalidLocationError("jumpType", segment) from exc


def first_segment(location: str) -> str:
    """Return the first ``;``-delimited segment of ``location``."""

    return location.split(ENTRY_SEPARATOR, 1)[0]


def parse_entry(segment: str) -> PositionalEntry:
    """Parse a complete ``start:length[:fileIndex[:jumpType]]`` segment.

    Args:
        segment: A single source-map segment without compressed fields.

    Returns:
        PositionalEntry: Decoded entry. A missing file index becomes ``-1`` and
        a missing jump type becomes :attr:`JumpType.REGULAR`.

    Raises:
        InvalidLocationError: If start or length is missing or not an integer.
    """

    fields = segment.strip().split(FIELD_SEPARATOR)
    if len(fields) < 2 or not fields[0] or not fields[1]:
        raise InvalidLocationError("sourceMap", segment)
    start = _parse_int(fields[0], "sourceMap", segment)
    length = _parse_int(fields[1], "sourceMap", segment)
    file_index = _parse_int(fields[2], "sourceMap", segment) if len(fields) > 2 and fields[2] else NO_FILE
    jump_type = _parse_jump(fields[3], segment) if len(fields) > 3 and fields[3] else JumpType.REGULAR
    return PositionalEntry(start=start, length=length, file_index=file_index, jump_type=jump_type)


def file_index_of(location: str) -> int | None:
    """Return the file index field of ``location`` without validating the rest.

    Args:
        location: Engine location string such as ``"30:2:0"``.

    Returns:
        int | None: The third field as an integer, or ``None`` when absent.

    Raises:
        InvalidLocationError: If the third field is present but not an integer.
    """

    fields = first_segment(location).split(FIELD_SEPARATOR)
    if len(fields) < 3 or not fields[2].strip():
        return None
    return _parse_int(fields[2].strip(), "sourceMap", location)


def _inherit(segment: str, previous: PositionalEntry) -> PositionalEntry:
    """Decode a compressed segment, taking omitted fields from ``previous``."""

    if not segment:
        return previous
    fields = segment.split(FIELD_SEPARATOR)
    updates: dict[str, object] = {}
    if fields[0]:
        updates["start"] = _parse_int(fields[0], "sourceMap", segment)
    if len(fields) > 1 and fields[1]:
        updates["length"] = _parse_int(fields[1], "sourceMap", segment)
    if len(fields) > 2 and fields[2]:
        updates["file_index"] = _parse_int(fields[2], "sourceMap", segment)
    if len(fields) > 3 and fields[3]:
        updates["jump_type"] = _parse_jump(fields[3], segment)
    return replace(previous, **updates) if updates else previous


@dataclass(frozen=True, slots=True)
class PositionalEncoding:
    """Fully decompressed per-instruction source map."""

    entries: tuple[PositionalEntry, ...]

    @classmethod
    def parse(cls, compact: str | None) -> PositionalEncoding:
        """Decompress ``compact`` into one entry per instruction.

        Args:
            compact: Compiler source map; ``None`` or ``""`` yields no entries.

        Returns:
            PositionalEncoding: Decoded entries indexed by instruction number.

        Raises:
            InvalidLocationError: If a present field is not an integer or a
                known jump type.
        """

        if not compact:
            return cls(entries=())
        decoded: list[PositionalEntry] = []
        previous = _EMPTY_ENTRY
        for segment in compact.split(ENTRY_SEPARATOR):
            previous = _inherit(segment.strip(), previous)
            decoded.append(previous)
        return cls(entries=tuple(decoded))

    def entry_at(self, instruction: int) -> PositionalEntry:
        """Return the entry for ``instruction``.

        Raises:
            InconsistentSourceMapError: If the encoding has no such entry.
        """

        if instruction < 0 or instruction >= len(self.entries):
            raise InconsistentSourceMapError(instruction, len(self.entries))
        return self.entries[instruction]

    def __getitem__(self, index: int) -> PositionalEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[PositionalEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "JumpType",
    "PositionalEncoding",
    "PositionalEntry",
    "file_index_of",
    "first_segment",
    "parse_entry",
]
