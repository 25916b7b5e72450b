"""
Class shell construction.

The shell is the ``ns.path.Name = class Name {}`` statement. Its class body
list is the single place every member assembler appends to.
"""

import logging
from dataclasses import dataclass

from classmorph.generator import nodes
from classmorph.generator.namespace import NamespacePath, NamespaceResolver
from classmorph.generator.nodes import Node

logger = logging.getLogger(__name__)

MISSING_EXTENDED_NAMESPACE = "Missing namespace for extended class"


def ucfirst(value: str) -> str:
    """Upper-case the first character only."""
    return value[:1].upper() + value[1:]


@dataclass
class ClassShell:
    statement: Node
    class_node: Node

    @property
    def body(self) -> list[Node]:
        return self.class_node["body"]["body"]

    @property
    def name(self) -> str:
        return self.class_node["id"]["name"]


class ClassShellBuilder:
    """Builds the class assignment attached to the resolved namespace."""

    @staticmethod
    def build(path: NamespacePath, resolver: NamespaceResolver) -> ClassShell:
        class_node = nodes.class_expression(ucfirst(path.class_name))
        statement = nodes.assignment_statement(resolver.accessor(path), class_node)
        return ClassShell(statement=statement, class_node=class_node)


class ExtendedClassWirer:
    """Points the shell's ``extends`` clause at the superclass namespace."""

    @staticmethod
    def wire(
        shell: ClassShell,
        extended_path: NamespacePath | None,
        resolver: NamespaceResolver,
        warnings: list[str],
    ) -> list[Node]:
        """
        Set the superclass and return any alias statement it needs.

        Without a superclass namespace this only records a warning and leaves
        the class unextended.
        """
        if extended_path is None:
            logger.warning(f"{MISSING_EXTENDED_NAMESPACE} '{shell.name}'")
            warnings.append(MISSING_EXTENDED_NAMESPACE)
            return []

        statements = []
        alias = resolver.alias_declaration(extended_path)
        if alias is not None:
            statements.append(alias)

        shell.class_node["superClass"] = resolver.accessor(extended_path)
        logger.debug(f"Class '{shell.name}' extends '{extended_path.dotted()}'")
        return statements
