# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert source byte offsets into line and column positions."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Final

from ..core.models import LineColumn, SourceSpan

_LINE_BREAK: Final[int] = ord("\n")


@dataclass(frozen=True, slots=True)
class LineBreakIndex:
    """Ascending byte offsets of the line terminators in one source file.

    Attributes:
        breaks: Offsets of every ``\\n`` byte in the UTF-8 encoded source.
        size: Length of the encoded source in bytes.
    """

    breaks: tuple[int, ...]
    size: int

    @classmethod
    def from_source(cls, text: str) -> LineBreakIndex:
        """Build the table for ``text``.

        Offsets produced by the compiler count UTF-8 bytes, so the table does
        too.

        Args:
            text: Full source text of one file.

        Returns:
            LineBreakIndex: Table of line-break offsets.
        """

        encoded = text.encode("utf-8")
        breaks = tuple(offset for offset, byte in enumerate(encoded) if byte == _LINE_BREAK)
        return cls(breaks=breaks, size=len(encoded))

    def _locate(self, offset: int) -> tuple[int, int]:
        """Return the 0-based line and the column of ``offset``."""

        line = bisect_left(self.breaks, offset)
        previous = self.breaks[line - 1] if line else -1
        return line, offset - previous - 1

    def position(self, offset: int) -> LineColumn | None:
        """Return the 1-based line and column of ``offset``.

        Args:
            offset: Byte offset into the source.

        Returns:
            LineColumn | None: Position, or ``None`` when ``offset`` lies
            outside the source.
        """

        if offset < 0 or offset > self.size:
            return None
        line, column = self._locate(offset)
        return LineColumn(line=line + 1, column=column)

    def span(self, start: int, length: int) -> SourceSpan:
        """Return the positions of the ``[start, start + length)`` range.

        An unresolvable start yields the sentinel span. A zero length or an
        unresolvable end leaves the end empty.

        Args:
            start: Byte offset of the range start.
            length: Range length in bytes.

        Returns:
            SourceSpan: Start and end positions of the range.
        """

        begin = self.position(start)
        if begin is None or length < 0:
            return SourceSpan.unresolved()
        end = self.position(start + length) if length else None
        return SourceSpan(start=begin, end=end)


__all__ = ["LineBreakIndex"]
