# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the bytecode instruction index."""

from __future__ import annotations

import pytest

from conftest import DEPLOYED_BYTECODE
from swclint.errors import InvalidBytecodeError
from swclint.sourcemap import InstructionIndex, decode_bytecode
from swclint.sourcemap.bytecode import push_operand_size


def test_push_operands_are_skipped() -> None:
    index = InstructionIndex.from_hex("60806040526020604051")

    assert dict(index) == {1: 0, 3: 1, 4: 2, 6: 3, 8: 4, 9: 5}
    assert index.instruction_count == 6


def test_push2_operand_offsets_have_no_entry() -> None:
    index = InstructionIndex.from_hex(DEPLOYED_BYTECODE)

    assert index[10] == 6
    assert index[15] == 11
    for offset in (0, 2, 8, 9):
        assert offset not in index
    assert len(index) == 12


def test_prefix_is_optional() -> None:
    assert dict(InstructionIndex.from_hex("0x6001")) == dict(InstructionIndex.from_hex("6001"))


def test_empty_bytecode_yields_empty_index() -> None:
    index = InstructionIndex.from_hex("")

    assert len(index) == 0
    assert index.instruction_count == 0


def test_truncated_push_operand_is_recorded_past_the_end() -> None:
    index = InstructionIndex.from_bytes(bytes([0x00, 0x7F, 0x01]))

    assert dict(index) == {0: 0, 33: 1}


@pytest.mark.parametrize(("opcode", "size"), [(0x5F, 0), (0x60, 1), (0x70, 17), (0x7F, 32), (0x80, 0)])
def test_push_operand_size(opcode: int, size: int) -> None:
    assert push_operand_size(opcode) == size


@pytest.mark.parametrize("bad", ["608", "60zz", "0x6g"])
def test_invalid_hex_raises(bad: str) -> None:
    with pytest.raises(InvalidBytecodeError) as excinfo:
        decode_bytecode(bad, field="bytecode")

    assert excinfo.value.field == "bytecode"
