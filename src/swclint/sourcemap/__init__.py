# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bytecode, source-map, and line-break decoding."""

from __future__ import annotations

from .bytecode import InstructionIndex, decode_bytecode
from .encoding import JumpType, PositionalEncoding, PositionalEntry, file_index_of, first_segment, parse_entry
from .linebreaks import LineBreakIndex
from .resolver import LocationResolver, SourceFormat, bytecode_offset, coerce_source_format, source_basename

__all__ = (
    "InstructionIndex",
    "JumpType",
    "LineBreakIndex",
    "LocationResolver",
    "PositionalEncoding",
    "PositionalEntry",
    "SourceFormat",
    "bytecode_offset",
    "coerce_source_format",
    "decode_bytecode",
    "file_index_of",
    "first_segment",
    "parse_entry",
    "source_basename",
)
