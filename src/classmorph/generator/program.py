"""
Program generation for a single class-definition call.

Sequences namespace resolution, the class shell, the optional superclass
and the static/instance member assemblers, and returns the finished
``Program`` tree:

    guards -> root alias -> superclass alias -> class statement -> static data
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from classmorph.config.models import ConversionOptions
from classmorph.generator import nodes
from classmorph.generator.class_shell import ClassShellBuilder, ExtendedClassWirer
from classmorph.generator.classifier import read_member_table
from classmorph.generator.errors import (
    InvalidArityError,
    InvalidNamespaceError,
    MissingParametersError,
)
from classmorph.generator.instance_members import InstanceMemberAssembler
from classmorph.generator.namespace import NamespacePath, NamespaceResolver
from classmorph.generator.nodes import Node
from classmorph.generator.static_members import StaticMemberAssembler

logger = logging.getLogger(__name__)

VALID_ARITIES = (2, 3)


@dataclass
class ConversionContext:
    """
    Mutable state of one conversion run.

    Created fresh for every call so runs never share the constructor flag
    or the alias set.
    """

    options: ConversionOptions
    constructor_produced: bool = False
    aliases: set[str] = field(default_factory=set)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ConversionResult:
    """Output of converting one class-definition call."""

    program: Node
    namespace: str
    class_name: str
    warnings: list[str] = field(default_factory=list)

    @property
    def statements(self) -> list[Node]:
        return self.program["body"]


class ProgramOrchestrator:
    """
    Converts the arguments of ``$.Class(namespace, [statics,] members)``.

    Usage:
        orchestrator = ProgramOrchestrator(ConversionOptions(target="es2017"))
        result = orchestrator.build(call_node["arguments"])
        render(result.program)
    """

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()

    def build(self, parameters: list[Node] | None) -> ConversionResult:
        """
        Build the program tree for one class-definition call.

        Args:
            parameters: Argument nodes of the call

        Returns:
            ConversionResult holding the Program node and any warnings

        Raises:
            MissingParametersError: No arguments
            InvalidArityError: Neither 2 nor 3 arguments
            InvalidNamespaceError: Bad namespace string
            InvalidMemberTableError: A member table is not an object literal
        """
        if not parameters:
            raise MissingParametersError()

        if len(parameters) not in VALID_ARITIES:
            raise InvalidArityError(len(parameters))

        path = NamespacePath.parse(_namespace_value(parameters[0]))
        context = ConversionContext(options=self.options)

        if len(parameters) == 3:
            static_entries = read_member_table(parameters[1], 2, context.warnings)
        else:
            static_entries = []
        instance_entries = read_member_table(parameters[-1], len(parameters), context.warnings)

        resolver = NamespaceResolver(self.options.root_object, context.aliases)
        statements = resolver.resolve(path)

        shell = ClassShellBuilder.build(path, resolver)

        if self.options.extended:
            statements.extend(
                ExtendedClassWirer.wire(
                    shell,
                    self.options.extended_namespace_path(),
                    resolver,
                    context.warnings,
                )
            )

        statements.append(shell.statement)

        static_data = StaticMemberAssembler.build(static_entries, shell.body)

        instance = InstanceMemberAssembler.build(
            instance_entries,
            shell.body,
            self.options,
            context.constructor_produced,
            derived=shell.class_node["superClass"] is not None,
        )
        context.constructor_produced = instance.constructor_produced

        statements.extend(StaticMemberAssembler.assignment_statements(static_data, path, resolver))

        logger.info(
            f"Converted '{path.dotted()}' to class {shell.name}: "
            f"{len(shell.body)} class member(s), {len(statements)} statement(s)"
        )

        return ConversionResult(
            program=nodes.program(statements),
            namespace=path.dotted(),
            class_name=shell.name,
            warnings=context.warnings,
        )


def _namespace_value(node: Any) -> str:
    """The string value of the namespace argument."""
    if not isinstance(node, dict) or node.get("type") != "Literal":
        node_type = node.get("type") if isinstance(node, dict) else type(node).__name__
        raise InvalidNamespaceError(node_type, "first argument must be a string literal")

    value = node.get("value")
    if not isinstance(value, str):
        raise InvalidNamespaceError(value, "first argument must be a string literal")
    return value


def convert_class_call(
    parameters: list[Node] | None, options: ConversionOptions | None = None
) -> ConversionResult:
    """Convenience wrapper around ``ProgramOrchestrator.build``."""
    return ProgramOrchestrator(options).build(parameters)
