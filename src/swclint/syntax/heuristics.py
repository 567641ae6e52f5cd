# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Suppress findings that match known false-positive source shapes."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..sourcemap.encoding import PositionalEntry
from ..sourcemap.resolver import source_basename
from .nodes import ARRAY_TYPE_NAME, VARIABLE_DECLARATION, AstNodeView, find_enclosing

LOGGER = logging.getLogger(__name__)


def is_public_dynamic_array(node: AstNodeView) -> bool:
    """Return ``True`` when ``node`` declares a public, dynamically sized state array.

    Args:
        node: Variable declaration node.

    Returns:
        bool: ``True`` for ``T[] public name`` state variables.
    """

    if not node.is_state_variable or node.visibility != "public":
        return False
    type_name = node.type_name
    return type_name is not None and type_name.node_type == ARRAY_TYPE_NAME and not type_name.has_fixed_length


class FalsePositiveHeuristic:
    """Flag findings located on public dynamic-array state variables.

    The analysis engine reports spurious issues on the accessor the compiler
    generates for such variables. Any doubt resolves to "not ignorable".

    Args:
        asts: Wrapped syntax trees keyed by source path.
    """

    def __init__(self, asts: Mapping[str, AstNodeView]) -> None:
        self._asts = dict(asts)

    def _tree_for(self, source_name: str | None) -> AstNodeView | None:
        if source_name is None:
            return None
        tree = self._asts.get(source_name)
        if tree is not None:
            return tree
        wanted = source_basename(source_name)
        for name, candidate in self._asts.items():
            if source_basename(name) == wanted:
                return candidate
        return None

    def is_ignorable(self, entry: PositionalEntry | None, source_name: str | None) -> bool:
        """Return ``True`` when ``entry`` lies inside a public dynamic array declaration.

        Args:
            entry: Source-map entry of the finding location.
            source_name: Source path whose tree should be searched.

        Returns:
            bool: ``True`` only on a confident match.
        """

        if entry is None or not entry.has_source:
            return False
        tree = self._tree_for(source_name)
        if tree is None:
            return False
        node = find_enclosing(tree, VARIABLE_DECLARATION, entry.start, entry.length)
        if node is None or not is_public_dynamic_array(node):
            return False
        LOGGER.debug("ignoring finding around dynamically-allocated array at %s:%d", source_name, entry.start)
        return True


__all__ = ["FalsePositiveHeuristic", "is_public_dynamic_array"]
