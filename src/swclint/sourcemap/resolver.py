# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve engine finding locations into source line/column spans."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import PurePosixPath
from typing import Final

from ..core.models import SourceSpan
from ..errors import InvalidLocationError
from .bytecode import InstructionIndex
from .encoding import FIELD_SEPARATOR, PositionalEncoding, PositionalEntry, first_segment, parse_entry
from .linebreaks import LineBreakIndex

LOGGER = logging.getLogger(__name__)


class SourceFormat(str, Enum):
    """Location formats produced by the analysis engine."""

    BYTECODE = "evm-byzantium-bytecode"
    TEXT = "text"


def coerce_source_format(value: str | SourceFormat | None) -> SourceFormat | None:
    """Return the :class:`SourceFormat` for ``value`` or ``None`` if unknown."""

    if value is None or isinstance(value, SourceFormat):
        return value
    try:
        return SourceFormat(value)
    except ValueError:
        return None


def bytecode_offset(location: str) -> int:
    """Return the leading bytecode offset of an engine location string.

    Raises:
        InvalidLocationError: If the first field is not an integer.
    """

    raw = first_segment(location).split(FIELD_SEPARATOR, 1)[0].strip()
    try:
        return int(raw, 10)
    except ValueError as exc:
        raise InvalidLocationError("sourceMap", location) from exc


def source_basename(name: str) -> str:
    """Return the file name of ``name``, accepting POSIX or Windows separators."""

    return PurePosixPath(name.replace("\\", "/")).name


_UNKNOWN_FORMAT_MESSAGE: Final[str] = "unsupported location format %r; location %r left unresolved"


class LocationResolver:
    """Convert bytecode-offset or source-text locations into spans.

    Args:
        instruction_index: Offset-to-instruction table of the deployed bytecode.
        encoding: Decompressed deployed source map.
        line_breaks: Line-break tables keyed by source path.
        source_names: Source paths ordered by compiler source id.
    """

    def __init__(
        self,
        *,
        instruction_index: InstructionIndex,
        encoding: PositionalEncoding,
        line_breaks: Mapping[str, LineBreakIndex],
        source_names: Sequence[str],
    ) -> None:
        self._instruction_index = instruction_index
        self._encoding = encoding
        self._line_breaks = dict(line_breaks)
        self._source_names = tuple(source_names)

    @property
    def source_names(self) -> tuple[str, ...]:
        """Return source paths ordered by compiler source id."""

        return self._source_names

    def source_entry(self, location: str, source_format: str | SourceFormat | None) -> PositionalEntry | None:
        """Return the source-map entry designated by ``location``.

        Args:
            location: Engine location string.
            source_format: Format tag selecting the interpretation of ``location``.

        Returns:
            PositionalEntry | None: Decoded entry, or ``None`` when the bytecode
            offset is not an instruction boundary or the format is unknown.

        Raises:
            InvalidLocationError: If ``location`` cannot be parsed.
            InconsistentSourceMapError: If the instruction has no source-map entry.
        """

        fmt = coerce_source_format(source_format)
        if fmt is SourceFormat.BYTECODE:
            offset = bytecode_offset(location)
            instruction = self._instruction_index.get(offset)
            if instruction is None:
                LOGGER.debug("bytecode offset %d is not an instruction boundary", offset)
                return None
            return self._encoding.entry_at(instruction)
        if fmt is SourceFormat.TEXT:
            return parse_entry(first_segment(location))
        LOGGER.debug(_UNKNOWN_FORMAT_MESSAGE, source_format, location)
        return None

    def source_name_for(self, entry: PositionalEntry) -> str | None:
        """Return the artifact source path referenced by ``entry``'s file index."""

        if 0 <= entry.file_index < len(self._source_names):
            return self._source_names[entry.file_index]
        return None

    def line_breaks_for(self, source_name: str | None) -> LineBreakIndex | None:
        """Return the line-break table for ``source_name``.

        Lookup tries the exact path, then a basename match, then falls back to
        the first known table.

        Args:
            source_name: Source path as named by the engine or artifact.

        Returns:
            LineBreakIndex | None: Matching table, or ``None`` when no source
            text is known at all.
        """

        if source_name is not None:
            table = self._line_breaks.get(source_name)
            if table is not None:
                return table
            wanted = source_basename(source_name)
            for name, candidate in self._line_breaks.items():
                if source_basename(name) == wanted:
                    return candidate
        if not self._line_breaks:
            return None
        fallback_name, fallback = next(iter(self._line_breaks.items()))
        LOGGER.debug("no line-break table for %r; falling back to %r", source_name, fallback_name)
        return fallback

    def resolve(
        self,
        location: str,
        source_format: str | SourceFormat | None,
        source_name: str | None = None,
    ) -> SourceSpan:
        """Return the line/column span of ``location``.

        Bytecode locations are converted against the file referenced by the
        source-map entry; text locations against ``source_name``.

        Args:
            location: Engine location string.
            source_format: Format tag of ``location``.
            source_name: Source path the location was attributed to.

        Returns:
            SourceSpan: Resolved span or the unresolved sentinel.

        Raises:
            InvalidLocationError: If ``location`` cannot be parsed.
            InconsistentSourceMapError: If the instruction has no source-map entry.
        """

        entry = self.source_entry(location, source_format)
        if entry is None or not entry.has_source:
            return SourceSpan.unresolved()
        if coerce_source_format(source_format) is SourceFormat.BYTECODE:
            target = self.source_name_for(entry) or source_name
        else:
            target = source_name or self.source_name_for(entry)
        table = self.line_breaks_for(target)
        if table is None:
            return SourceSpan.unresolved()
        return table.span(entry.start, entry.length)


__all__ = ["LocationResolver", "SourceFormat", "bytecode_offset", "coerce_source_format", "source_basename"]
