# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Schema-agnostic views over Solidity compiler syntax trees.

The compiler has emitted two tree schemas over time. The legacy schema names
each node with ``name`` and nests its properties under ``attributes`` and its
sub-nodes under ``children``. The compact schema tags nodes with ``nodeType``
and stores properties and sub-nodes as direct keys. Both are exposed through
:class:`AstNodeView` so callers never inspect raw dictionaries.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any, Final, Protocol, runtime_checkable

VARIABLE_DECLARATION: Final[str] = "VariableDeclaration"
ARRAY_TYPE_NAME: Final[str] = "ArrayTypeName"

SourceRange = tuple[int, int]


def parse_src(src: object) -> SourceRange | None:
    """Return ``(start, length)`` from a node ``src`` attribute."""

    if not isinstance(src, str):
        return None
    fields = src.split(":")
    if len(fields) < 2:
        return None
    try:
        return int(fields[0]), int(fields[1])
    except ValueError:
        return None


@runtime_checkable
class AstNodeView(Protocol):
    """Capabilities the syntax heuristics rely on."""

    @property
    @abstractmethod
    def node_type(self) -> str | None:
        """Return the node kind, e.g. ``VariableDeclaration``."""
        raise NotImplementedError

    @property
    @abstractmethod
    def source_range(self) -> SourceRange | None:
        """Return the ``(start, length)`` byte range covered by the node."""
        raise NotImplementedError

    @abstractmethod
    def children(self) -> Iterator[AstNodeView]:
        """Yield the direct sub-nodes."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_state_variable(self) -> bool:
        """Return ``True`` for contract-level variable declarations."""
        raise NotImplementedError

    @property
    @abstractmethod
    def visibility(self) -> str | None:
        """Return the declared visibility, if any."""
        raise NotImplementedError

    @property
    @abstractmethod
    def type_name(self) -> AstNodeView | None:
        """Return the declared type node of a variable declaration."""
        raise NotImplementedError

    @property
    @abstractmethod
    def has_fixed_length(self) -> bool:
        """Return ``True`` for array type nodes carrying a length expression."""
        raise NotImplementedError


class _BaseNode:
    __slots__ = ("_raw",)

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self._raw = raw

    @property
    def source_range(self) -> SourceRange | None:
        return parse_src(self._raw.get("src"))

    def __repr__(self) -> str:
        kind = self._raw.get("nodeType", self._raw.get("name"))
        return f"{type(self).__name__}({kind!r}, src={self._raw.get('src')!r})"


class LegacyAstNode(_BaseNode):
    """View over a legacy-schema node (``name``/``attributes``/``children``)."""

    __slots__ = ()

    @property
    def node_type(self) -> str | None:
        name = self._raw.get("name")
        return name if isinstance(name, str) else None

    @property
    def _attributes(self) -> Mapping[str, Any]:
        attributes = self._raw.get("attributes")
        return attributes if isinstance(attributes, Mapping) else {}

    def children(self) -> Iterator[LegacyAstNode]:
        for child in self._raw.get("children") or ():
            if isinstance(child, Mapping):
                yield LegacyAstNode(child)

    @property
    def is_state_variable(self) -> bool:
        return self._attributes.get("stateVariable") is True

    @property
    def visibility(self) -> str | None:
        return self._attributes.get("visibility")

    @property
    def type_name(self) -> LegacyAstNode | None:
        return next(self.children(), None)

    @property
    def has_fixed_length(self) -> bool:
        # children are [baseType] or [baseType, lengthExpression]
        return sum(1 for _ in self.children()) > 1


class CompactAstNode(_BaseNode):
    """View over a compact-schema node (``nodeType`` plus direct fields)."""

    __slots__ = ()

    @property
    def node_type(self) -> str | None:
        node_type = self._raw.get("nodeType")
        return node_type if isinstance(node_type, str) else None

    def children(self) -> Iterator[CompactAstNode]:
        for value in self._raw.values():
            if isinstance(value, Mapping) and "nodeType" in value:
                yield CompactAstNode(value)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Mapping) and "nodeType" in item:
                        yield CompactAstNode(item)

    @property
    def is_state_variable(self) -> bool:
        return self._raw.get("stateVariable") is True

    @property
    def visibility(self) -> str | None:
        return self._raw.get("visibility")

    @property
    def type_name(self) -> CompactAstNode | None:
        type_name = self._raw.get("typeName")
        return CompactAstNode(type_name) if isinstance(type_name, Mapping) else None

    @property
    def has_fixed_length(self) -> bool:
        return self._raw.get("length") is not None


def wrap_ast(tree: object) -> AstNodeView | None:
    """Return a view over ``tree`` or ``None`` when its schema is unknown.

    Args:
        tree: Root node of a compiler syntax tree in either schema.

    Returns:
        AstNodeView | None: Adapter matching the schema of ``tree``.
    """

    if not isinstance(tree, Mapping):
        return None
    if isinstance(tree.get("nodeType"), str):
        return CompactAstNode(tree)
    if isinstance(tree.get("name"), str) and ("children" in tree or "attributes" in tree):
        return LegacyAstNode(tree)
    return None


def _encloses(node_range: SourceRange, start: int, length: int) -> bool:
    node_start, node_length = node_range
    return node_start <= start and node_start + node_length >= start + length


def find_enclosing(root: AstNodeView, node_type: str, start: int, length: int) -> AstNodeView | None:
    """Return the outermost ``node_type`` node enclosing ``[start, start + length)``.

    The walk only descends into nodes whose range encloses the location, so
    sibling subtrees are never visited.

    Args:
        root: Root of the tree to search.
        node_type: Node kind to look for.
        start: Byte offset of the location.
        length: Byte length of the location.

    Returns:
        AstNodeView | None: Matching node, or ``None``.
    """

    pending: list[AstNodeView] = [root]
    while pending:
        node = pending.pop()
        node_range = node.source_range
        if node_range is None:
            pending.extend(reversed(list(node.children())))
            continue
        if not _encloses(node_range, start, length):
            continue
        if node.node_type == node_type:
            return node
        pending.extend(reversed(list(node.children())))
    return None


__all__ = [
    "ARRAY_TYPE_NAME",
    "AstNodeView",
    "CompactAstNode",
    "LegacyAstNode",
    "VARIABLE_DECLARATION",
    "find_enclosing",
    "parse_src",
    "wrap_ast",
]
