"""
Namespace resolution.

Turns ``"app.ui.Button"`` into the statements that make sure ``app`` and
``app.ui`` exist on the global object, plus a ``const`` alias for the root
segment that later statements use instead of the global lookup:

    window.app = window.app || {};
    window.app.ui = window.app.ui || {};
    const app = window.app;
"""

import logging
from dataclasses import dataclass

from classmorph.generator import nodes
from classmorph.generator.errors import InvalidNamespaceError
from classmorph.generator.nodes import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamespacePath:
    """Dotted namespace split into segments. The last one names the class."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, dotted: str) -> "NamespacePath":
        if not isinstance(dotted, str) or not dotted:
            raise InvalidNamespaceError(dotted, "namespace must be a non-empty string")

        segments = tuple(dotted.split("."))
        if any(not segment for segment in segments):
            raise InvalidNamespaceError(dotted)

        return cls(segments)

    @property
    def root(self) -> str:
        return self.segments[0]

    @property
    def class_name(self) -> str:
        return self.segments[-1]

    @property
    def containers(self) -> tuple[str, ...]:
        """Segments of the containing namespace chain."""
        return self.segments[:-1]

    @property
    def is_nested(self) -> bool:
        return len(self.segments) > 1

    def dotted(self) -> str:
        return ".".join(self.segments)

    def __len__(self) -> int:
        return len(self.segments)


class NamespaceResolver:
    """
    Emits namespace guards and root aliases for one conversion run.

    The set of aliased root names belongs to the run, so a second request for
    the same root (e.g. a superclass under the same namespace) reuses the
    existing ``const`` instead of declaring it twice.
    """

    def __init__(self, root_object: str = "window", aliases: set[str] | None = None):
        self.root_object = root_object
        self.aliases = aliases if aliases is not None else set()

    def guard_statements(self, path: NamespacePath) -> list[Node]:
        """One ``x = x || {}`` per containing namespace, root to leaf."""
        guards = []
        for depth in range(1, len(path.containers) + 1):
            prefix = path.containers[:depth]
            target = nodes.member_chain(nodes.identifier(self.root_object), prefix)
            fallback = nodes.member_chain(nodes.identifier(self.root_object), prefix)
            guards.append(
                nodes.assignment_statement(target, nodes.logical_or(fallback, nodes.empty_object()))
            )
        return guards

    def alias_declaration(self, path: NamespacePath) -> Node | None:
        """``const root = window.root;`` unless the root is already aliased."""
        if not path.is_nested:
            return None

        if path.root in self.aliases:
            logger.debug(f"Reusing alias for namespace root '{path.root}'")
            return None

        self.aliases.add(path.root)
        return nodes.const_declaration(
            path.root,
            nodes.member(nodes.identifier(self.root_object), nodes.identifier(path.root)),
        )

    def resolve(self, path: NamespacePath) -> list[Node]:
        """Guards followed by the root alias (if any) for ``path``."""
        statements = self.guard_statements(path)
        alias = self.alias_declaration(path)
        if alias is not None:
            statements.append(alias)

        logger.debug(
            f"Resolved namespace '{path.dotted()}': {len(statements)} statement(s)"
        )
        return statements

    def accessor(self, path: NamespacePath) -> Node:
        """Expression reaching the full path, through the alias when one exists."""
        if path.is_nested and path.root in self.aliases:
            return nodes.member_chain(nodes.identifier(path.root), path.segments[1:])
        return nodes.member_chain(nodes.identifier(self.root_object), path.segments)
