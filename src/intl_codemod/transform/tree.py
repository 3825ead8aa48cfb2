"""
Syntax tree access for JavaScript and TypeScript sources.

This module wraps tree-sitter and exposes the tree capabilities the codemod
relies on: parsing by file suffix, pre-order traversal with subtree pruning,
ancestor search, leading comment discovery, literal decoding and a top-scope
binding index used for fresh identifier generation.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable, Iterator
from functools import lru_cache

from tree_sitter import Language, Node, Parser, Tree

from ..utils.core.exceptions import SourceParseError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

NodeKey = tuple[int, int, str]

SUFFIX_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

FUNCTION_NODE_TYPES = frozenset({
    "function",
    "function_expression",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
})

# Node types whose text is an identifier name, used to keep generated names unique
IDENTIFIER_NODE_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "type_identifier",
    "statement_identifier",
})

# Markup children that together form one run of JSX text
JSX_TEXT_NODE_TYPES = frozenset({"jsx_text", "html_character_reference"})
JSX_CHILD_PARENT_TYPES = frozenset({"jsx_element", "jsx_fragment"})

_JS_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def node_key(node: Node) -> NodeKey:
    """Stable identity of a node across traversals of the same tree."""
    return (node.start_byte, node.end_byte, node.type)


@lru_cache(maxsize=None)
def load_language(name: str) -> Language:
    """Load (and cache) a tree-sitter grammar by name."""
    match name:
        case "javascript":
            import tree_sitter_javascript as ts_javascript

            return Language(ts_javascript.language())
        case "typescript":
            import tree_sitter_typescript as ts_typescript

            return Language(ts_typescript.language_typescript())
        case "tsx":
            import tree_sitter_typescript as ts_typescript

            return Language(ts_typescript.language_tsx())
        case _:
            raise ValueError(f"Unknown grammar: {name}")


def language_for_suffix(suffix: str) -> str:
    """
    Resolve the grammar name for a file suffix.

    Raises:
        UnsupportedFileTypeError: If no grammar handles the suffix
    """
    name = SUFFIX_LANGUAGES.get(suffix.lower())
    if name is None:
        raise UnsupportedFileTypeError(suffix)
    return name


def parse_source(source: bytes, suffix: str = ".tsx") -> SourceTree:
    """
    Parse source bytes into a SourceTree.

    Args:
        source: UTF-8 encoded source text
        suffix: File suffix selecting the grammar (e.g. ".tsx")

    Returns:
        Parsed SourceTree

    Raises:
        UnsupportedFileTypeError: If the suffix has no grammar
        SourceParseError: If the source contains syntax errors
    """
    language = language_for_suffix(suffix)
    parser = Parser(load_language(language))
    tree = parser.parse(source)

    if tree.root_node.has_error:
        error_node = _first_error(tree.root_node)
        line, column = (
            (error_node.start_point[0] + 1, error_node.start_point[1] + 1)
            if error_node is not None
            else (None, None)
        )
        raise SourceParseError(
            f"Syntax error at line {line}, column {column}", line=line, column=column
        )

    return SourceTree(source, tree, language)


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed(node.children))
    return None


def decode_js_string(raw: str) -> str:
    """Cook the body of a quoted JavaScript string literal."""

    def replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if seq[0] == "u" and len(seq) == 5:
            return chr(int(seq[1:], 16))
        if seq[0] == "x" and len(seq) == 3:
            return chr(int(seq[1:], 16))
        if seq[0] in "01234567":
            return chr(int(seq, 8))
        if seq in _LINE_CONTINUATIONS:
            return ""
        return _SIMPLE_ESCAPES.get(seq, seq)

    cooked = _JS_ESCAPE_RE.sub(replace, raw)
    # Join surrogate pairs written as two \u escapes
    return cooked.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


class SourceTree:
    """A parsed source file plus the node helpers the codemod needs."""

    def __init__(self, source: bytes, tree: Tree, language: str) -> None:
        self.source: bytes = source
        self.tree: Tree = tree
        self.language: str = language

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        """Source text of a sub-tree."""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def traverse(self, visit: Callable[[Node], bool | None]) -> None:
        """
        Walk the tree in document pre-order.

        ``visit`` returning False prunes the node's children.
        """
        stack = [self.root]
        while stack:
            node = stack.pop()
            if visit(node) is False:
                continue
            stack.extend(reversed(node.children))

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node in document pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def find_ancestor(node: Node, predicate: Callable[[Node], bool]) -> Node | None:
        """Closest strict ancestor matching ``predicate``."""
        current = node.parent
        while current is not None:
            if predicate(current):
                return current
            current = current.parent
        return None

    @staticmethod
    def leading_comments(node: Node) -> list[Node]:
        """Comments immediately preceding ``node``, in source order."""
        comments: list[Node] = []
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "comment":
            comments.append(sibling)
            sibling = sibling.prev_sibling
        comments.reverse()
        return comments

    @staticmethod
    def is_field(node: Node, field_name: str) -> bool:
        """Whether ``node`` sits in the named field of its parent."""
        parent = node.parent
        if parent is None:
            return False
        child = parent.child_by_field_name(field_name)
        return child is not None and node_key(child) == node_key(node)

    def string_value(self, node: Node) -> str:
        """Cooked value of a ``string`` node."""
        raw = self.text(node)[1:-1]
        parent = node.parent
        if parent is not None and parent.type == "jsx_attribute":
            # JSX attribute strings have no escapes, only character references
            return html.unescape(raw)
        return decode_js_string(raw)

    @staticmethod
    def is_jsx_text(node: Node | None) -> bool:
        """Whether ``node`` is literal text (or a character reference) among JSX children."""
        if node is None or node.type not in JSX_TEXT_NODE_TYPES:
            return False
        parent = node.parent
        return parent is not None and parent.type in JSX_CHILD_PARENT_TYPES

    @staticmethod
    def starts_jsx_text_run(node: Node) -> bool:
        return SourceTree.is_jsx_text(node) and not SourceTree.is_jsx_text(node.prev_sibling)

    @staticmethod
    def jsx_text_run(node: Node) -> list[Node]:
        """
        ``node`` and the JSX text siblings directly following it.

        The grammar splits one text child at character references and line
        breaks; the run is the whole child.
        """
        run = [node]
        sibling = node.next_sibling
        while sibling is not None and SourceTree.is_jsx_text(sibling):
            run.append(sibling)
            sibling = sibling.next_sibling
        return run

    def jsx_text_value(self, node: Node) -> str:
        """Decoded text of the JSX text run starting at ``node``."""
        run = self.jsx_text_run(node)
        raw = self.source[run[0].start_byte : run[-1].end_byte].decode("utf-8")
        return html.unescape(raw)

    def template_parts(self, node: Node) -> tuple[list[str], list[Node]]:
        """
        Split a ``template_string`` into raw quasis and substitution expressions.

        Returns:
            (quasis, expressions) with ``len(quasis) == len(expressions) + 1``
        """
        quasis: list[str] = []
        expressions: list[Node] = []
        cursor = node.start_byte + 1
        for child in node.children:
            if child.type != "template_substitution":
                continue
            quasis.append(self.source[cursor : child.start_byte].decode("utf-8"))
            expression = next(
                (c for c in child.named_children if c.type != "comment"), None
            )
            if expression is None:
                raise SourceParseError("Empty template substitution", context=self.text(child))
            expressions.append(expression)
            cursor = child.end_byte
        quasis.append(self.source[cursor : node.end_byte - 1].decode("utf-8"))
        return quasis, expressions

    def top_level_statements(self) -> list[Node]:
        """Program body statements, without comments and hashbang lines."""
        return [
            child
            for child in self.root.named_children
            if child.type not in ("comment", "hash_bang_line")
        ]

    @staticmethod
    def is_directive(statement: Node) -> bool:
        """
        Whether ``statement`` belongs to a directive prologue (``"use strict";``).
        """
        if statement.type != "expression_statement":
            return False
        named = [c for c in statement.named_children if c.type != "comment"]
        if len(named) != 1 or named[0].type != "string":
            return False

        parent = statement.parent
        if parent is None:
            return False
        if parent.type == "statement_block":
            owner = parent.parent
            if owner is None or owner.type not in FUNCTION_NODE_TYPES:
                return False
        elif parent.type != "program":
            return False

        sibling = statement.prev_named_sibling
        while sibling is not None and sibling.type in ("comment", "hash_bang_line"):
            sibling = sibling.prev_named_sibling
        return sibling is None or SourceTree.is_directive(sibling)


class ScopeIndex:
    """
    Top-scope binding lookup and fresh identifier generation.

    Bindings are the names declared directly in the program scope (imports,
    variable, function, class and enum declarations, including exported ones).
    Generated identifiers avoid every identifier spelled anywhere in the file.
    """

    def __init__(self, tree: SourceTree) -> None:
        self.tree: SourceTree = tree
        self.bindings: set[str] = set()
        self.references: set[str] = set()
        self._uids: set[str] = set()

        for statement in tree.top_level_statements():
            self._collect_declaration(statement)
        for node in tree.iter_nodes():
            if node.type in IDENTIFIER_NODE_TYPES:
                self.references.add(tree.text(node))

    def has_binding(self, name: str) -> bool:
        return name in self.bindings

    def generate_uid(self, name: str) -> str:
        """Generate ``_name``, ``_name2``, ``_name3``... unused anywhere in the file."""
        base = re.sub(r"\d+$", "", re.sub(r"^_+", "", name)) or "temp"
        i = 1
        while True:
            uid = f"_{base}" if i == 1 else f"_{base}{i}"
            i += 1
            if (
                uid not in self.bindings
                and uid not in self.references
                and uid not in self._uids
            ):
                break
        self._uids.add(uid)
        return uid

    def _collect_declaration(self, node: Node) -> None:
        match node.type:
            case "import_statement":
                for clause in node.named_children:
                    if clause.type == "import_clause":
                        self._collect_import_clause(clause)
                    elif clause.type == "import_require_clause":
                        name = clause.named_children[0] if clause.named_children else None
                        if name is not None and name.type == "identifier":
                            self.bindings.add(self.tree.text(name))
            case "lexical_declaration" | "variable_declaration":
                for declarator in node.named_children:
                    if declarator.type == "variable_declarator":
                        name = declarator.child_by_field_name("name")
                        if name is not None:
                            self._collect_pattern(name)
            case (
                "function_declaration"
                | "generator_function_declaration"
                | "function_signature"
                | "class_declaration"
                | "abstract_class_declaration"
                | "enum_declaration"
            ):
                name = node.child_by_field_name("name")
                if name is not None:
                    self.bindings.add(self.tree.text(name))
            case "export_statement":
                declaration = node.child_by_field_name("declaration")
                if declaration is not None:
                    self._collect_declaration(declaration)
            case "ambient_declaration":
                for child in node.named_children:
                    self._collect_declaration(child)
            case _:
                pass

    def _collect_import_clause(self, clause: Node) -> None:
        for part in clause.named_children:
            match part.type:
                case "identifier":
                    self.bindings.add(self.tree.text(part))
                case "namespace_import":
                    for ident in part.named_children:
                        if ident.type == "identifier":
                            self.bindings.add(self.tree.text(ident))
                case "named_imports":
                    for specifier in part.named_children:
                        if specifier.type != "import_specifier":
                            continue
                        local = specifier.child_by_field_name(
                            "alias"
                        ) or specifier.child_by_field_name("name")
                        if local is not None:
                            self.bindings.add(self.tree.text(local))
                case _:
                    pass

    def _collect_pattern(self, pattern: Node) -> None:
        match pattern.type:
            case "identifier" | "shorthand_property_identifier_pattern":
                self.bindings.add(self.tree.text(pattern))
            case "pair_pattern":
                value = pattern.child_by_field_name("value")
                if value is not None:
                    self._collect_pattern(value)
            case "assignment_pattern" | "object_assignment_pattern":
                left = pattern.child_by_field_name("left")
                if left is not None:
                    self._collect_pattern(left)
            case "object_pattern" | "array_pattern" | "rest_pattern":
                for child in pattern.named_children:
                    self._collect_pattern(child)
            case _:
                pass
