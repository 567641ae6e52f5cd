# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for compressed source-map decoding."""

from __future__ import annotations

import pytest

from conftest import DEPLOYED_SOURCE_MAP
from swclint.errors import InconsistentSourceMapError, InvalidLocationError
from swclint.sourcemap import JumpType, PositionalEncoding, PositionalEntry, file_index_of, first_segment, parse_entry


def test_omitted_fields_inherit_from_previous_entry() -> None:
    encoding = PositionalEncoding.parse(DEPLOYED_SOURCE_MAP)

    assert len(encoding) == 12
    assert encoding[1] == PositionalEntry(0, 186, 0, JumpType.REGULAR)
    assert encoding[3] == PositionalEntry(97, 86, 0, JumpType.REGULAR)
    assert encoding[5] == PositionalEntry(142, 14, 0, JumpType.REGULAR)
    assert encoding[6] == PositionalEntry(142, 14, 0, JumpType.INTO)
    assert encoding[8] == PositionalEntry(166, 10, 0, JumpType.REGULAR)
    assert encoding[9].start == 52
    assert encoding[11] == PositionalEntry(-1, -1, -1, JumpType.REGULAR)
    assert not encoding[11].has_source


def test_empty_map_has_no_entries() -> None:
    assert len(PositionalEncoding.parse("")) == 0
    assert len(PositionalEncoding.parse(None)) == 0


def test_entry_at_outside_map_is_inconsistent() -> None:
    encoding = PositionalEncoding.parse("0:186:0:-;;")

    assert encoding.entry_at(2).length == 186
    with pytest.raises(InconsistentSourceMapError) as excinfo:
        encoding.entry_at(6)

    assert excinfo.value.instruction == 6
    assert excinfo.value.entry_count == 3


def test_parse_entry_defaults() -> None:
    assert parse_entry("48:28") == PositionalEntry(48, 28, -1, JumpType.REGULAR)
    assert parse_entry("48:28:1:o") == PositionalEntry(48, 28, 1, JumpType.OUT)


@pytest.mark.parametrize("bad", ["48", "x:1:0", ":5:0", ""])
def test_parse_entry_rejects_malformed_segments(bad: str) -> None:
    with pytest.raises(InvalidLocationError):
        parse_entry(bad)


def test_non_integer_compressed_field_raises() -> None:
    with pytest.raises(InvalidLocationError):
        PositionalEncoding.parse("0:1:0:-;a")


def test_free_form_locations_use_first_segment() -> None:
    assert first_segment("10:2:0;20:4:1") == "10:2:0"
    assert file_index_of("10:2:1;20:4:0") == 1
    assert file_index_of("10:2") is None
    assert file_index_of("10:2:-1") == -1
