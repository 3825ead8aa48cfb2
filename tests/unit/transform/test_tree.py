"""
Tests for the tree-sitter wrapper.

This module covers parsing by suffix, literal decoding, template splitting,
directive detection and the top-scope binding index.
"""

from __future__ import annotations

import pytest
from tree_sitter import Node

from intl_codemod.transform.tree import (
    ScopeIndex,
    SourceTree,
    decode_js_string,
    language_for_suffix,
    node_key,
)
from intl_codemod.utils.core.exceptions import (
    ErrorCategory,
    SourceParseError,
    UnsupportedFileTypeError,
)
from tests.utils.test_helpers import find_node, find_nodes, parse_snippet


class TestParsing:
    """Grammar selection and syntax errors."""

    @pytest.mark.parametrize(
        ("suffix", "language"),
        [
            (".js", "javascript"),
            (".jsx", "javascript"),
            (".mjs", "javascript"),
            (".cjs", "javascript"),
            (".ts", "typescript"),
            (".TSX", "tsx"),
        ],
    )
    def test_language_for_suffix(self, suffix: str, language: str) -> None:
        """Suffixes map to grammars case-insensitively."""
        assert language_for_suffix(suffix) == language

    def test_unsupported_suffix(self) -> None:
        """Unknown suffixes raise UnsupportedFileTypeError."""
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            _ = language_for_suffix(".vue")

        assert exc_info.value.suffix == ".vue"
        assert exc_info.value.category == ErrorCategory.FILE_TYPE

    def test_syntax_error_reports_position(self) -> None:
        """Syntax errors carry a one-based line number."""
        with pytest.raises(SourceParseError) as exc_info:
            _ = parse_snippet("const a = 1;\nconst = ;\n", ".ts")

        assert exc_info.value.line == 2
        assert exc_info.value.recoverable is False
        assert "Syntax error" in str(exc_info.value)

    def test_jsx_parses_as_javascript(self) -> None:
        """The JavaScript grammar accepts JSX."""
        tree = parse_snippet("const el = <b>粗体</b>;\n", ".jsx")

        assert tree.language == "javascript"
        assert tree.text(find_node(tree, "jsx_text")) == "粗体"


class TestDecodeJsString:
    """Cooking of quoted literal bodies."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("你好", "你好"),
            (r"\u4f60\u597d", "你好"),
            (r"\u{4F60}", "你"),
            (r"\x41", "A"),
            (r"a\nb", "a\nb"),
            (r"\"quoted\"", '"quoted"'),
            (r"\\", "\\"),
            ("a\\\nb", "ab"),
            (r"\ud83d\ude00", "\U0001f600"),
        ],
    )
    def test_escapes(self, raw: str, expected: str) -> None:
        """Escape sequences are resolved like a JavaScript engine would."""
        assert decode_js_string(raw) == expected


class TestSourceTree:
    """Node helpers."""

    def test_string_value_decodes_escapes(self) -> None:
        """Quoted literals lose their quotes and escapes."""
        tree = parse_snippet("const a = '\\u4f60好';\n", ".ts")

        assert tree.string_value(find_node(tree, "string")) == "你好"

    def test_jsx_attribute_value_unescapes_entities(self) -> None:
        """JSX attribute strings decode character references, not backslashes."""
        tree = parse_snippet('const el = <a title="你&amp;我" />;\n')

        assert tree.string_value(find_node(tree, "string")) == "你&我"

    def test_jsx_text_run_spans_character_references(self) -> None:
        """Text split at an entity reads back as one decoded run."""
        tree = parse_snippet("const el = <p>你好&amp;世界</p>;\n")
        first, *rest = find_nodes(tree, "jsx_text")
        reference = find_node(tree, "html_character_reference")

        assert tree.starts_jsx_text_run(first)
        assert not tree.starts_jsx_text_run(reference)
        assert not any(tree.starts_jsx_text_run(node) for node in rest)
        assert [tree.text(node) for node in tree.jsx_text_run(first)] == ["你好", "&amp;", "世界"]
        assert tree.jsx_text_value(first) == "你好&世界"

    def test_template_parts(self) -> None:
        """Templates split into one more quasi than expressions."""
        tree = parse_snippet("const s = `共${a}条，第${b.c}页`;\n", ".ts")

        quasis, expressions = tree.template_parts(find_node(tree, "template_string"))

        assert quasis == ["共", "条，第", "页"]
        assert [tree.text(e) for e in expressions] == ["a", "b.c"]

    def test_template_parts_without_substitution(self) -> None:
        """A plain template is one quasi."""
        tree = parse_snippet("const s = `纯文本`;\n", ".ts")

        quasis, expressions = tree.template_parts(find_node(tree, "template_string"))

        assert quasis == ["纯文本"]
        assert expressions == []

    def test_traverse_prunes_children(self) -> None:
        """Returning False from the visitor skips the subtree."""
        tree = parse_snippet('f("甲", g("乙"));\n', ".ts")
        seen: list[str] = []

        def visit(node: Node) -> bool:
            if node.type == "string":
                seen.append(tree.text(node))
            return not (node.type == "call_expression" and tree.text(node).startswith("g"))

        tree.traverse(visit)

        assert seen == ['"甲"']

    def test_leading_comments_in_source_order(self) -> None:
        """Adjacent comments before a node are returned first to last."""
        tree = parse_snippet('f(\n  // one\n  /* two */\n  "文本",\n);\n', ".ts")

        comments = SourceTree.leading_comments(find_node(tree, "string"))

        assert [tree.text(c) for c in comments] == ["// one", "/* two */"]

    def test_is_field(self) -> None:
        """Field membership distinguishes keys from values."""
        tree = parse_snippet('const o = { "键": "值" };\n', ".ts")
        key, value = find_nodes(tree, "string")

        assert SourceTree.is_field(key, "key") is True
        assert SourceTree.is_field(value, "key") is False
        assert SourceTree.is_field(value, "value") is True

    def test_node_key_is_stable(self) -> None:
        """Node identity survives separate traversals."""
        tree = parse_snippet('const a = "你好";\n', ".ts")

        assert node_key(find_node(tree, "string")) == node_key(find_nodes(tree, "string")[0])


class TestDirectives:
    """Directive prologue detection."""

    def test_program_prologue(self) -> None:
        """Leading string statements are directives; later ones are not."""
        tree = parse_snippet('"use strict";\n"use client";\nfoo();\n"late";\n', ".ts")
        statements = tree.top_level_statements()

        assert [SourceTree.is_directive(s) for s in statements] == [True, True, False, False]

    def test_function_prologue(self) -> None:
        """Function bodies have their own prologue."""
        tree = parse_snippet('function f() {\n  "use strict";\n  return 1;\n}\n', ".ts")
        statement = find_node(tree, "expression_statement")

        assert SourceTree.is_directive(statement) is True

    def test_block_statement_is_not_prologue(self) -> None:
        """Plain blocks have no directives."""
        tree = parse_snippet('if (x) {\n  "不是指令";\n}\n', ".ts")
        statement = find_node(tree, "expression_statement")

        assert SourceTree.is_directive(statement) is False


class TestScopeIndex:
    """Top-scope bindings and fresh names."""

    def test_collects_top_level_bindings(self) -> None:
        """Imports, declarations and exported declarations bind names."""
        tree = parse_snippet(
            'import a, { b as c, d } from "m";\n'
            'import * as ns from "n";\n'
            "const { e, f: g, ...h } = obj;\n"
            "let [i, j = 1] = arr;\n"
            "function k() {}\n"
            "export class L {}\n"
            "enum M { X }\n",
            ".ts",
        )

        index = ScopeIndex(tree)

        for name in ("a", "c", "d", "ns", "e", "g", "h", "i", "j", "k", "L", "M"):
            assert index.has_binding(name), name
        assert not index.has_binding("b")
        assert not index.has_binding("f")

    def test_nested_declarations_are_not_bindings(self) -> None:
        """Only the program scope is indexed."""
        tree = parse_snippet("function outer() {\n  const inner = 1;\n}\n", ".ts")

        index = ScopeIndex(tree)

        assert index.has_binding("outer")
        assert not index.has_binding("inner")

    def test_generate_uid_sequence(self) -> None:
        """Fresh names avoid identifiers used anywhere and each other."""
        tree = parse_snippet("const _intl = 1;\nfunction f() { return _intl3; }\n", ".ts")
        index = ScopeIndex(tree)

        assert index.generate_uid("intl") == "_intl2"
        assert index.generate_uid("intl") == "_intl4"

    def test_generate_uid_normalizes_base(self) -> None:
        """Leading underscores and trailing digits are stripped from the base."""
        index = ScopeIndex(parse_snippet("", ".ts"))

        assert index.generate_uid("__name42") == "_name"
        assert index.generate_uid("123") == "_temp"
