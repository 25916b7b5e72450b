"""
Static member assembly.

Static methods go into the class body. Static data is deferred: it is
assigned after the class statement (``app.ui.Button.VERSION = "1.0";``)
rather than declared as static class fields, which older engines reject.
"""

import logging

from classmorph.generator import nodes
from classmorph.generator.classifier import DataMember, MemberEntry, classify_members
from classmorph.generator.namespace import NamespacePath, NamespaceResolver
from classmorph.generator.nodes import Node

logger = logging.getLogger(__name__)


def build_function(value: Node) -> Node:
    """Copy a function literal into a method value with normalised flags."""
    return nodes.function_expression(
        params=value.get("params", []),
        body=value.get("body"),
        fn_id=value.get("id"),
        generator=bool(value.get("generator")),
        is_async=bool(value.get("async")),
        expression=bool(value.get("expression")),
    )


def build_method(entry: MemberEntry, static: bool = False) -> Node:
    """MethodDefinition for a function-valued entry."""
    kind = entry.kind if entry.is_accessor else "method"
    return nodes.method_definition(
        entry.copy_key(),
        build_function(entry.copy_value()),
        kind=kind,
        static=static,
        computed=entry.computed,
    )


class StaticMemberAssembler:
    """Places static methods in the class body and hands back static data."""

    @staticmethod
    def build(entries: list[MemberEntry], body: list[Node]) -> list[DataMember]:
        """
        Append static methods to ``body`` in input order.

        A member named like the constructor is just another static method here,
        so classification runs without constructor extraction.

        Returns:
            Static data members, for ``assignment_statements``
        """
        classified = classify_members(entries, constructor_name=None)

        for method in classified.methods:
            body.append(build_method(method.entry, static=True))

        logger.debug(
            f"Placed {len(classified.methods)} static method(s), "
            f"deferred {len(classified.data)} static data member(s)"
        )
        return classified.data

    @staticmethod
    def assignment_statements(
        data: list[DataMember], path: NamespacePath, resolver: NamespaceResolver
    ) -> list[Node]:
        """One ``Namespace.Class.member = value;`` per static data member."""
        statements = []
        for member in data:
            entry = member.entry
            target = nodes.property_access(
                resolver.accessor(path), entry.copy_key(), entry.computed
            )
            statements.append(nodes.assignment_statement(target, entry.copy_value()))
        return statements
