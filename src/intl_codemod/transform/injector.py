"""
Injection of the catalog imports and declaration.

The two imports and the ``const intlMessages = defineMessages({...});``
declaration are inserted, in that order, right after the file's leading
import block.
"""

from __future__ import annotations

import logging

from ..config.schema import ConventionsConfig
from .naming import ResolvedNames
from .registry import MessageKeyRegistry
from .rewriter import js_string_literal
from .tree import SourceTree
from .types import Edit

logger = logging.getLogger(__name__)


class CatalogInjector:
    def __init__(
        self,
        tree: SourceTree,
        names: ResolvedNames,
        conventions: ConventionsConfig,
    ) -> None:
        self.tree: SourceTree = tree
        self.names: ResolvedNames = names
        self.conventions: ConventionsConfig = conventions

    def leading_import_count(self) -> tuple[int, int]:
        """
        Scan the program body for its directive prologue and leading imports.

        Returns:
            (directive_count, index just past the last leading import)
        """
        statements = self.tree.top_level_statements()
        index = 0
        while index < len(statements) and self.tree.is_directive(statements[index]):
            index += 1
        directive_count = index
        while index < len(statements) and statements[index].type == "import_statement":
            index += 1
        return directive_count, index

    def insertion_point(self) -> tuple[int, str, str]:
        """
        Byte offset for the injected block, plus text to put before and after it.
        """
        statements = self.tree.top_level_statements()
        _, index = self.leading_import_count()
        source = self.tree.source

        if index > 0:
            offset = statements[index - 1].end_byte
            line_end = source.find(b"\n", offset)
            if line_end == -1:
                line_end = len(source)
            # Keep a trailing comment on the anchor line with its statement
            rest = source[offset:line_end].strip()
            if not rest or rest.startswith((b"//", b"/*")):
                offset = line_end
            return offset, "\n", ""

        if statements:
            return statements[0].start_byte, "", "\n\n"

        prefix = "\n" if source and not source.endswith(b"\n") else ""
        return len(source), prefix, "\n"

    def build_imports(self) -> list[str]:
        conventions = self.conventions
        builder = conventions.builder_name
        if self.names.builder != builder:
            builder = f"{builder} as {self.names.builder}"
        return [
            f"import {{ {builder} }} from {js_string_literal(conventions.builder_module)};",
            f"import {self.names.runtime} from {js_string_literal(conventions.runtime_module)};",
        ]

    def build_declaration(self, registry: MessageKeyRegistry) -> str:
        lines = [f"const {self.conventions.catalog_identifier} = {self.names.builder}({{"]
        for entry in registry.entries():
            key = js_string_literal(entry.key)
            lines.append(f"  {key}: {{ id: {js_string_literal(entry.id)} }},")
        lines.append("});")
        return "\n".join(lines)

    def inject(self, registry: MessageKeyRegistry) -> Edit:
        """
        Build the insertion edit for a non-empty registry.

        Raises:
            ValueError: If the registry is empty
        """
        if not len(registry):
            raise ValueError("Cannot inject an empty message catalog")

        offset, prefix, suffix = self.insertion_point()
        block = "\n".join([*self.build_imports(), self.build_declaration(registry)])
        logger.debug(f"Injecting catalog with {len(registry)} entries at byte {offset}")
        return Edit(offset, offset, f"{prefix}{block}{suffix}")
