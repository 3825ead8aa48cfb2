"""Selection of non-colliding names for the injected imports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from ..config.schema import ConventionsConfig

logger = logging.getLogger(__name__)


class ScopeCapability(Protocol):
    """Binding lookup and fresh-name generation over a file's top scope."""

    def has_binding(self, name: str) -> bool: ...

    def generate_uid(self, name: str) -> str: ...


@dataclass(frozen=True)
class ResolvedNames:
    """Local names used for the imported builder function and runtime object."""

    builder: str
    runtime: str


class NameCollisionResolver:
    def __init__(self, scope: ScopeCapability) -> None:
        self.scope: ScopeCapability = scope

    def resolve_name(self, name: str) -> str:
        if not self.scope.has_binding(name):
            return name
        uid = self.scope.generate_uid(name)
        logger.debug(f"'{name}' is already bound in the top scope, using '{uid}'")
        return uid

    def resolve(self, conventions: ConventionsConfig) -> ResolvedNames:
        return ResolvedNames(
            builder=self.resolve_name(conventions.builder_name),
            runtime=self.resolve_name(conventions.runtime_name),
        )
