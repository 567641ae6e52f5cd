# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Syntax-tree views and false-positive heuristics."""

from __future__ import annotations

from .heuristics import FalsePositiveHeuristic, is_public_dynamic_array
from .nodes import AstNodeView, CompactAstNode, LegacyAstNode, find_enclosing, parse_src, wrap_ast

__all__ = (
    "AstNodeView",
    "CompactAstNode",
    "FalsePositiveHeuristic",
    "LegacyAstNode",
    "find_enclosing",
    "is_public_dynamic_array",
    "parse_src",
    "wrap_ast",
)
