"""
Conversion of interpolated template strings into placeholder messages.

A template such as ``你好，${name}！`` becomes the key
``你好，{placeholder1}！`` plus the argument list ``[("placeholder1", "name")]``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tree_sitter import Node

from .tree import SourceTree
from .types import Placeholder

# Expressions that need parentheses to stay a single object property value
_PARENTHESIZED_EXPRESSION_TYPES = frozenset({"sequence_expression"})


@dataclass(frozen=True)
class TemplateMessage:
    """Placeholder-parameterized message derived from one template string."""

    raw_text: str
    placeholders: tuple[Placeholder, ...]

    @property
    def key(self) -> str:
        return self.raw_text.strip()


def build_template_message(
    quasis: Sequence[str], expression_sources: Sequence[str]
) -> TemplateMessage:
    """
    Interleave quasis with numbered placeholder tokens.

    Args:
        quasis: Raw literal segments of the template
        expression_sources: Source text of each interpolated expression

    Returns:
        TemplateMessage whose placeholders are numbered from 1 in occurrence order

    Raises:
        ValueError: If there is not exactly one more quasi than expressions
    """
    if len(quasis) != len(expression_sources) + 1:
        raise ValueError(
            f"Template needs {len(expression_sources) + 1} quasis, got {len(quasis)}"
        )

    placeholders = tuple(
        Placeholder(index=i, expression_source=source)
        for i, source in enumerate(expression_sources, start=1)
    )
    parts = [quasis[0]]
    for placeholder, quasi in zip(placeholders, quasis[1:], strict=True):
        parts.append(placeholder.token)
        parts.append(quasi)

    return TemplateMessage(raw_text="".join(parts), placeholders=placeholders)


class PlaceholderTemplateBuilder:
    """Builds TemplateMessages from ``template_string`` nodes."""

    def __init__(self, tree: SourceTree) -> None:
        self.tree: SourceTree = tree

    def build(self, node: Node) -> TemplateMessage:
        quasis, expressions = self.tree.template_parts(node)
        return build_template_message(
            quasis, [self.expression_source(expression) for expression in expressions]
        )

    def expression_source(self, expression: Node) -> str:
        source = self.tree.text(expression)
        if expression.type in _PARENTHESIZED_EXPRESSION_TYPES:
            return f"({source})"
        return source
