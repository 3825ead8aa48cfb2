"""
Type definitions for the extraction and rewrite passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .tree import NodeKey


class FragmentKind(Enum):
    """Origin of a translatable text fragment."""

    PLAIN_TEXT = "plain_text"  # JSX text child run
    LITERAL = "literal"  # quoted string literal
    TEMPLATE = "template"  # template string, possibly interpolated


FRAGMENT_NODE_KINDS: dict[str, FragmentKind] = {
    "jsx_text": FragmentKind.PLAIN_TEXT,
    "html_character_reference": FragmentKind.PLAIN_TEXT,
    "string": FragmentKind.LITERAL,
    "template_string": FragmentKind.TEMPLATE,
}


@dataclass(frozen=True)
class Placeholder:
    """A numbered substitution point standing for one template interpolation."""

    index: int
    expression_source: str

    @property
    def name(self) -> str:
        return f"placeholder{self.index}"

    @property
    def token(self) -> str:
        return f"{{{self.name}}}"


@dataclass(frozen=True)
class TextFragment:
    """A unit of translatable text found in the tree."""

    raw_text: str
    trimmed_key: str
    kind: FragmentKind
    node_key: NodeKey
    placeholders: tuple[Placeholder, ...] = ()


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``text``; ``start == end`` inserts."""

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming a single file."""

    code: str
    message_keys: tuple[str, ...] = ()
    edits: tuple[Edit, ...] = field(default=(), repr=False)

    @property
    def changed(self) -> bool:
        return bool(self.edits)
