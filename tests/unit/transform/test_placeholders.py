"""Tests for placeholder template construction."""

from __future__ import annotations

import pytest

from intl_codemod.transform.placeholders import (
    PlaceholderTemplateBuilder,
    build_template_message,
)
from intl_codemod.transform.types import Placeholder
from tests.utils.test_helpers import find_node, parse_snippet


class TestBuildTemplateMessage:
    """Interleaving quasis and placeholder tokens."""

    def test_interleaves_tokens(self) -> None:
        """Placeholders are numbered from 1 in occurrence order."""
        message = build_template_message(["", "给", "个赞"], ["user", "n"])

        assert message.raw_text == "{placeholder1}给{placeholder2}个赞"
        assert message.placeholders == (
            Placeholder(index=1, expression_source="user"),
            Placeholder(index=2, expression_source="n"),
        )

    def test_includes_final_quasi(self) -> None:
        """Text after the last interpolation is part of the message."""
        message = build_template_message(["共", "条记录"], ["total"])

        assert message.raw_text == "共{placeholder1}条记录"

    def test_key_is_trimmed(self) -> None:
        """The key drops surrounding whitespace; the raw text keeps it."""
        message = build_template_message([" 你好 "], [])

        assert message.raw_text == " 你好 "
        assert message.key == "你好"

    def test_mismatched_parts(self) -> None:
        """Quasi and expression counts must line up."""
        with pytest.raises(ValueError):
            _ = build_template_message(["a", "b"], [])


class TestPlaceholderTemplateBuilder:
    """Building messages from template nodes."""

    def test_build_from_node(self) -> None:
        """Expression source text is kept verbatim."""
        tree = parse_snippet("const s = `你好，${user.name}！`;\n", ".ts")

        message = PlaceholderTemplateBuilder(tree).build(find_node(tree, "template_string"))

        assert message.key == "你好，{placeholder1}！"
        assert message.placeholders[0].expression_source == "user.name"
        assert message.placeholders[0].name == "placeholder1"
        assert message.placeholders[0].token == "{placeholder1}"

    def test_sequence_expression_is_parenthesized(self) -> None:
        """A bare comma expression is wrapped so it stays one value."""
        tree = parse_snippet("const s = `值${a, b}`;\n", ".ts")

        message = PlaceholderTemplateBuilder(tree).build(find_node(tree, "template_string"))

        assert message.placeholders[0].expression_source == "(a, b)"
