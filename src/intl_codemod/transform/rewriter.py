"""
Rewriting of extraction sites into runtime lookup calls.

Every site becomes ``intl.formatMessage(intlMessages["<key>"])``, with a second
``{ "placeholder1": expr, ... }`` argument for interpolated templates. JSX text
children and JSX attribute values are wrapped in an expression container.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence

from tree_sitter import Node

from ..config.schema import ConventionsConfig
from .naming import ResolvedNames
from .tree import SourceTree
from .types import Edit, FragmentKind, Placeholder, TextFragment

logger = logging.getLogger(__name__)


# Lone surrogates have no UTF-8 encoding and must stay escaped
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def js_string_literal(value: str) -> str:
    """Encode ``value`` as a double-quoted JavaScript string literal."""
    literal = json.dumps(value, ensure_ascii=False)
    return _SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group()):04x}", literal)


class CallSiteRewriter:
    def __init__(
        self,
        tree: SourceTree,
        names: ResolvedNames,
        conventions: ConventionsConfig,
    ) -> None:
        self.tree: SourceTree = tree
        self.names: ResolvedNames = names
        self.conventions: ConventionsConfig = conventions

    def format_call(self, key: str, placeholders: Sequence[Placeholder] = ()) -> str:
        """Build the runtime lookup call expression for ``key``."""
        lookup = f"{self.conventions.catalog_identifier}[{js_string_literal(key)}]"
        arguments = [lookup]
        if placeholders:
            values = ", ".join(
                f"{js_string_literal(p.name)}: {p.expression_source}" for p in placeholders
            )
            arguments.append(f"{{ {values} }}")
        return (
            f"{self.names.runtime}.{self.conventions.format_function}"
            f"({', '.join(arguments)})"
        )

    def needs_expression_container(self, node: Node) -> bool:
        """JSX children and attribute values only accept expressions inside ``{}``."""
        if self.tree.is_jsx_text(node):
            return True
        parent = node.parent
        return parent is not None and parent.type == "jsx_attribute"

    def inside_catalog_declaration(self, node: Node) -> bool:
        catalog = self.conventions.catalog_identifier

        def is_catalog_declarator(candidate: Node) -> bool:
            if candidate.type != "variable_declarator":
                return False
            name = candidate.child_by_field_name("name")
            return name is not None and self.tree.text(name) == catalog

        return self.tree.find_ancestor(node, is_catalog_declarator) is not None

    def rewrite(self, node: Node, fragment: TextFragment) -> Edit | None:
        """
        Produce the edit replacing ``node`` with its lookup call.

        Returns:
            The Edit, or None when the node belongs to the catalog declaration
        """
        if self.inside_catalog_declaration(node):
            return None

        replacement = self.format_call(fragment.trimmed_key, fragment.placeholders)
        if self.needs_expression_container(node):
            replacement = f"{{{replacement}}}"

        end = node.end_byte
        if fragment.kind is FragmentKind.PLAIN_TEXT:
            end = self.tree.jsx_text_run(node)[-1].end_byte

        logger.debug(
            f"Rewriting {fragment.kind.value} at byte {node.start_byte}: {fragment.trimmed_key!r}"
        )
        return Edit(node.start_byte, end, replacement)
