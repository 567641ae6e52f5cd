# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map EVM bytecode offsets onto instruction numbers."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Final

from ..errors import InvalidBytecodeError

PUSH_BASE_OPCODE: Final[int] = 0x5F
PUSH1_OPCODE: Final[int] = 0x60
PUSH32_OPCODE: Final[int] = 0x7F
_HEX_PREFIX: Final[str] = "0x"
_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]*$")


def decode_bytecode(hexstr: str, *, field: str = "deployedBytecode") -> bytes:
    """Decode a hex-encoded bytecode string.

    Args:
        hexstr: Bytecode with or without a ``0x`` prefix.
        field: Artifact field name reported when decoding fails.

    Returns:
        bytes: Raw bytecode.

    Raises:
        InvalidBytecodeError: If ``hexstr`` has odd length or non-hex characters.
    """

    digits = hexstr[len(_HEX_PREFIX) :] if hexstr.lower().startswith(_HEX_PREFIX) else hexstr
    if not _HEX_DIGITS.match(digits):
        raise InvalidBytecodeError(field, "non-hexadecimal characters")
    if len(digits) % 2:
        raise InvalidBytecodeError(field, f"odd number of hex digits ({len(digits)})")
    return bytes.fromhex(digits)


def push_operand_size(opcode: int) -> int:
    """Return the number of immediate bytes following ``opcode``."""

    if PUSH1_OPCODE <= opcode <= PUSH32_OPCODE:
        return opcode - PUSH_BASE_OPCODE
    return 0


class InstructionIndex(Mapping[int, int]):
    """Read-only table from bytecode offset to instruction number.

    Each instruction is recorded at the offset reached after skipping its push
    operand, so offsets inside an immediate operand have no entry.
    """

    __slots__ = ("_table", "_count")

    def __init__(self, table: Mapping[int, int], count: int) -> None:
        self._table = MappingProxyType(dict(table))
        self._count = count

    @classmethod
    def from_bytes(cls, code: bytes) -> InstructionIndex:
        """Build the index by walking ``code`` one instruction at a time."""

        table: dict[int, int] = {}
        instruction = 0
        offset = 0
        while offset < len(code):
            offset += push_operand_size(code[offset])
            table[offset] = instruction
            instruction += 1
            offset += 1
        return cls(table, instruction)

    @classmethod
    def from_hex(cls, hexstr: str, *, field: str = "deployedBytecode") -> InstructionIndex:
        """Build the index from hex-encoded bytecode.

        Raises:
            InvalidBytecodeError: If ``hexstr`` is not valid hexadecimal.
        """

        return cls.from_bytes(decode_bytecode(hexstr, field=field))

    @property
    def instruction_count(self) -> int:
        """Return the number of decoded instructions."""

        return self._count

    def __getitem__(self, offset: int) -> int:
        return self._table[offset]

    def __iter__(self) -> Iterator[int]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"InstructionIndex(instructions={self._count})"


__all__ = ["InstructionIndex", "decode_bytecode", "push_operand_size"]
