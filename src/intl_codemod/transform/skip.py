"""
Exclusion decisions for candidate nodes.

The collection pass records every exclusion in a SkipDecisions table and
freezes it; the rewrite pass only reads the frozen SkipTable and never
re-derives a decision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from .script_detector import ScriptDetector
from .tree import NodeKey, SourceTree, node_key

logger = logging.getLogger(__name__)

IMPORT_CONTEXT_TYPES = frozenset({"import_statement"})
TYPE_LITERAL_CONTEXT_TYPES = frozenset({"literal_type"})

# Fields in which a string names a property rather than holding a value
PROPERTY_NAME_FIELDS = ("key", "name", "property")


@dataclass(frozen=True)
class SkipTable:
    """Read-only exclusion table handed from the collection to the rewrite pass."""

    excluded: frozenset[NodeKey] = frozenset()
    removed_comments: tuple[Node, ...] = ()

    def is_excluded(self, node: Node) -> bool:
        return node_key(node) in self.excluded


@dataclass
class SkipDecisions:
    """Mutable exclusion table built during collection. Marks are never cleared."""

    excluded: set[NodeKey] = field(default_factory=set)
    removed_comments: dict[NodeKey, Node] = field(default_factory=dict)

    def mark(self, node: Node, reason: str) -> None:
        key = node_key(node)
        if key not in self.excluded:
            logger.debug(f"Excluding {node.type} at byte {node.start_byte}: {reason}")
            self.excluded.add(key)

    def is_excluded(self, node: Node) -> bool:
        return node_key(node) in self.excluded

    def remove_comment(self, comment: Node) -> None:
        self.removed_comments[node_key(comment)] = comment

    def freeze(self) -> SkipTable:
        return SkipTable(
            excluded=frozenset(self.excluded),
            removed_comments=tuple(
                sorted(self.removed_comments.values(), key=lambda c: c.start_byte)
            ),
        )


class SkipClassifier:
    """Decides whether a candidate node is excluded from collection and rewriting."""

    def __init__(
        self,
        tree: SourceTree,
        detector: ScriptDetector,
        disable_marker: str,
        decisions: SkipDecisions | None = None,
    ) -> None:
        self.tree: SourceTree = tree
        self.detector: ScriptDetector = detector
        self.disable_marker: str = disable_marker
        self.decisions: SkipDecisions = decisions if decisions is not None else SkipDecisions()

    def classify(self, node: Node) -> bool:
        """
        Run the comment and context checks on ``node``.

        Returns:
            True if the node is excluded
        """
        self._check_disable_comments(node)
        if self.decisions.is_excluded(node):
            return True

        reason = self._excluded_context(node)
        if reason is not None:
            self.decisions.mark(node, reason)
        return self.decisions.is_excluded(node)

    def check_content(self, node: Node, text: str | None) -> bool:
        """
        Exclude ``node`` when ``text`` holds no target-script characters.

        Returns:
            True if the node is excluded
        """
        if self.decisions.is_excluded(node):
            return True
        if not self.detector(text):
            self.decisions.mark(node, "no target-script text")
            return True
        return False

    def _check_disable_comments(self, node: Node) -> None:
        for comment in self.tree.leading_comments(node):
            if self.disable_marker in self.tree.text(comment):
                self.decisions.mark(node, f"{self.disable_marker} comment")
                self.decisions.remove_comment(comment)

    def _excluded_context(self, node: Node) -> str | None:
        ancestor = self.tree.find_ancestor(
            node,
            lambda p: p.type in IMPORT_CONTEXT_TYPES or p.type in TYPE_LITERAL_CONTEXT_TYPES,
        )
        if ancestor is not None:
            return f"inside {ancestor.type}"

        parent = node.parent
        if parent is None:
            return None

        match node.type:
            case "string":
                if parent.type == "export_statement" and self.tree.is_field(node, "source"):
                    return "module specifier"
                if parent.type == "enum_body" or any(
                    self.tree.is_field(node, f) for f in PROPERTY_NAME_FIELDS
                ):
                    return "property name"
                if parent.type == "expression_statement" and self.tree.is_directive(parent):
                    return "directive"
            case "template_string":
                if parent.type == "call_expression" and self.tree.is_field(node, "arguments"):
                    return "tagged template"
            case _:
                pass
        return None
