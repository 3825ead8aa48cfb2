"""
Two-pass extraction and rewrite engine.

Pass 1 walks the whole tree, classifies every candidate node and fills the
file's MessageKeyRegistry and the skip decision table. Pass 2 consumes both,
unchanged, to rewrite each collected site. The catalog imports and declaration
are injected only when pass 1 collected at least one key. All changes are
expressed as byte-range edits spliced into the original source at the end.

Usage Examples:
    >>> from intl_codemod.transform.engine import transform_source
    >>> result = transform_source('const a = "你好";', suffix=".ts")
    >>> result.message_keys
    ('你好',)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from tree_sitter import Node

from ..config.schema import CodemodConfig
from ..utils.core.exceptions import TransformError
from .injector import CatalogInjector
from .naming import NameCollisionResolver
from .placeholders import PlaceholderTemplateBuilder
from .registry import MessageKeyRegistry
from .rewriter import CallSiteRewriter
from .script_detector import ScriptDetector
from .skip import SkipClassifier, SkipDecisions, SkipTable
from .tree import NodeKey, ScopeIndex, SourceTree, node_key, parse_source
from .types import (
    FRAGMENT_NODE_KINDS,
    Edit,
    FragmentKind,
    Placeholder,
    TextFragment,
    TransformResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionResult:
    """Everything pass 1 hands to pass 2."""

    registry: MessageKeyRegistry
    skips: SkipTable
    fragments: dict[NodeKey, TextFragment]


def comment_removal_edit(source: bytes, comment: Node) -> Edit:
    """Delete a comment, and its whole line when nothing else is on it."""
    start, end = comment.start_byte, comment.end_byte
    line_start = source.rfind(b"\n", 0, start) + 1
    line_end = source.find(b"\n", end)
    if line_end == -1:
        line_end = len(source)

    if not source[line_start:start].strip() and not source[end:line_end].strip():
        return Edit(line_start, min(line_end + 1, len(source)), "")

    while end < len(source) and source[end : end + 1] in (b" ", b"\t"):
        end += 1
    return Edit(start, end, "")


def overlaps(a: Edit, b: Edit) -> bool:
    return a.start < b.end and b.start < a.end


def apply_edits(source: bytes, edits: Iterable[Edit]) -> bytes:
    """
    Splice edits into ``source``.

    Raises:
        ValueError: If two edits overlap
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end), reverse=True)
    result = source
    boundary = len(source)
    for edit in ordered:
        if edit.end > boundary:
            raise ValueError(f"Overlapping edits at byte {edit.start}")
        result = result[: edit.start] + edit.text.encode("utf-8") + result[edit.end :]
        boundary = edit.start
    return result


class IntlTransformer:
    """Transforms one file at a time according to a CodemodConfig."""

    def __init__(self, config: CodemodConfig | None = None) -> None:
        self.config: CodemodConfig = config if config is not None else CodemodConfig()
        self.detector: ScriptDetector = ScriptDetector(self.config.script.ranges)

    def transform(self, source: str | bytes, suffix: str = ".tsx") -> TransformResult:
        """
        Transform a single source file.

        Args:
            source: File contents
            suffix: File suffix selecting the grammar

        Returns:
            TransformResult with the new code and the file's message keys

        Raises:
            UnsupportedFileTypeError: If the suffix has no grammar
            SourceParseError: If the source does not parse cleanly
            TransformError: If the computed edits cannot be applied
        """
        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        tree = parse_source(source_bytes, suffix)

        collection = self.collect(tree)
        edits: list[Edit] = []
        rewrites: list[Edit] = []

        if len(collection.registry):
            conventions = self.config.conventions
            names = NameCollisionResolver(ScopeIndex(tree)).resolve(conventions)
            edits.append(CatalogInjector(tree, names, conventions).inject(collection.registry))
            rewrites = self.rewrite(tree, collection, CallSiteRewriter(tree, names, conventions))

        # A marker comment inside a rewritten site disappears with the site
        for comment in collection.skips.removed_comments:
            removal = comment_removal_edit(source_bytes, comment)
            if not any(overlaps(removal, rewrite) for rewrite in rewrites):
                edits.append(removal)
        edits.extend(rewrites)

        try:
            code = apply_edits(source_bytes, edits).decode("utf-8")
        except ValueError as e:
            raise TransformError(f"Cannot apply edits: {e}") from e
        logger.debug(
            f"Collected {len(collection.registry)} keys, applied {len(edits)} edits"
        )
        return TransformResult(
            code=code,
            message_keys=tuple(collection.registry.keys()),
            edits=tuple(edits),
        )

    def collect(self, tree: SourceTree) -> CollectionResult:
        """Pass 1: classify candidates and register their keys."""
        decisions = SkipDecisions()
        classifier = SkipClassifier(
            tree, self.detector, self.config.conventions.disable_marker, decisions
        )
        builder = PlaceholderTemplateBuilder(tree)
        registry = MessageKeyRegistry()
        fragments: dict[NodeKey, TextFragment] = {}

        def visit(node: Node) -> bool:
            kind = FRAGMENT_NODE_KINDS.get(node.type)
            if kind is None:
                return True
            # A JSX text run is one fragment, keyed by its first node
            if kind is FragmentKind.PLAIN_TEXT and not tree.starts_jsx_text_run(node):
                return True
            if classifier.classify(node):
                return True

            placeholders: tuple[Placeholder, ...] = ()
            match kind:
                case FragmentKind.TEMPLATE:
                    message = builder.build(node)
                    text = message.raw_text
                    placeholders = message.placeholders
                case FragmentKind.PLAIN_TEXT:
                    text = tree.jsx_text_value(node)
                case FragmentKind.LITERAL:
                    text = tree.string_value(node)

            if classifier.check_content(node, text):
                return True

            fragment = TextFragment(
                raw_text=text,
                trimmed_key=text.strip(),
                kind=kind,
                node_key=node_key(node),
                placeholders=placeholders,
            )
            fragments[fragment.node_key] = fragment
            if registry.add(fragment.trimmed_key):
                logger.debug(f"Collected key {fragment.trimmed_key!r}")
            return True

        tree.traverse(visit)
        return CollectionResult(registry=registry, skips=decisions.freeze(), fragments=fragments)

    def rewrite(
        self, tree: SourceTree, collection: CollectionResult, rewriter: CallSiteRewriter
    ) -> list[Edit]:
        """Pass 2: rewrite every collected, non-excluded site."""
        edits: list[Edit] = []

        def visit(node: Node) -> bool:
            fragment = collection.fragments.get(node_key(node))
            if fragment is None or collection.skips.is_excluded(node):
                return True
            edit = rewriter.rewrite(node, fragment)
            if edit is None:
                return True
            edits.append(edit)
            # Rewritten sites are terminal
            return False

        tree.traverse(visit)
        return edits


def transform_source(
    source: str | bytes,
    *,
    suffix: str = ".tsx",
    config: CodemodConfig | None = None,
) -> TransformResult:
    """Transform one file's source with a fresh IntlTransformer."""
    return IntlTransformer(config).transform(source, suffix)


class IntlCodemod:
    """
    Plugin-style facade with a cross-file ``messageKeys`` accumulator.

    Each transformed file appends its keys (without dedup) to
    ``message_keys``, which is the list passed in by the caller when given.
    """

    def __init__(
        self,
        config: CodemodConfig | None = None,
        *,
        message_keys: list[str] | None = None,
    ) -> None:
        self.transformer: IntlTransformer = IntlTransformer(config)
        if message_keys is None:
            message_keys = self.transformer.config.message_keys
        self.message_keys: list[str] = message_keys if message_keys is not None else []

    def transform(self, source: str | bytes, suffix: str = ".tsx") -> TransformResult:
        result = self.transformer.transform(source, suffix)
        self.message_keys.extend(result.message_keys)
        return result
