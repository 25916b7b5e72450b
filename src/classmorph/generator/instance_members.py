"""
Instance member assembly.

Builds the constructor (explicit or synthesised) and instance methods, then
hands data members to the field placement strategy for the target dialect:

    es2015:  constructor() { this.label = "Ok"; }
    es2017:  label = "Ok"; constructor() {}
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from classmorph.config.models import ConversionOptions, TargetDialect
from classmorph.generator import nodes
from classmorph.generator.classifier import DataMember, MemberEntry, classify_members
from classmorph.generator.nodes import Node
from classmorph.generator.static_members import build_function, build_method

logger = logging.getLogger(__name__)


# =============================================================================
# Field Placement
# =============================================================================


class FieldPlacement(ABC):
    """Where instance data initializers end up relative to the constructor."""

    @abstractmethod
    def place(self, body: list[Node], constructor: Node, data: list[DataMember]) -> None:
        pass


class ConstructorBodyPlacement(FieldPlacement):
    """Append ``this.member = value;`` to the constructor body."""

    def place(self, body: list[Node], constructor: Node, data: list[DataMember]) -> None:
        statements = constructor["value"]["body"]["body"]
        for member in data:
            entry = member.entry
            target = nodes.property_access(nodes.this_expression(), entry.copy_key(), entry.computed)
            statements.append(nodes.assignment_statement(target, entry.copy_value()))


class DeclaredFieldPlacement(FieldPlacement):
    """Insert class field declarations right before the constructor."""

    def place(self, body: list[Node], constructor: Node, data: list[DataMember]) -> None:
        fields = [
            nodes.property_definition(
                member.entry.copy_key(), member.entry.copy_value(), member.entry.computed
            )
            for member in data
        ]
        index = _index_of(body, constructor)
        body[index:index] = fields


_PLACEMENTS: dict[TargetDialect, FieldPlacement] = {
    TargetDialect.ES2015: ConstructorBodyPlacement(),
    TargetDialect.ES2017: DeclaredFieldPlacement(),
}


def get_field_placement(target: TargetDialect) -> FieldPlacement:
    return _PLACEMENTS[TargetDialect(target)]


def _index_of(body: list[Node], node: Node) -> int:
    # Nodes are dicts, so equality would match look-alike siblings
    for index, candidate in enumerate(body):
        if candidate is node:
            return index
    raise ValueError("Constructor is not part of the class body")


# =============================================================================
# Assembler
# =============================================================================


@dataclass
class InstanceMembers:
    """What the instance assembler produced for one class."""

    constructor: Node | None = None
    constructor_produced: bool = False
    methods: list[Node] = field(default_factory=list)
    data: list[DataMember] = field(default_factory=list)


class InstanceMemberAssembler:
    """Builds constructor, instance methods and instance fields."""

    @staticmethod
    def build(
        entries: list[MemberEntry],
        body: list[Node],
        options: ConversionOptions,
        constructor_produced: bool = False,
        derived: bool = False,
    ) -> InstanceMembers:
        """
        Append instance members to ``body``.

        Args:
            entries: Instance member table entries
            body: Class body member list
            options: Conversion options (constructor name, target dialect)
            constructor_produced: Whether this class already has a constructor
            derived: Whether the class has a superclass; a synthesised
                constructor then forwards its arguments to ``super``

        Returns:
            InstanceMembers with the updated ``constructor_produced`` flag
        """
        classified = classify_members(entries, options.constructor_name, constructor_produced)
        result = InstanceMembers(data=classified.data)

        constructor = None
        if classified.constructor is not None:
            constructor = _build_constructor(classified.constructor)
        elif constructor_produced:
            constructor = _find_constructor(body)

        if constructor is None and classified.data:
            logger.debug("Synthesising empty constructor for instance data members")
            constructor = _build_constructor(None, derived)

        if constructor is not None and not any(node is constructor for node in body):
            body.append(constructor)

        for method in classified.methods:
            node = build_method(method.entry)
            body.append(node)
            result.methods.append(node)

        if classified.data:
            get_field_placement(options.target).place(body, constructor, classified.data)
            logger.debug(
                f"Placed {len(classified.data)} instance data member(s) for {options.target.value}"
            )

        result.constructor = constructor
        result.constructor_produced = constructor_produced or constructor is not None
        return result


def _build_constructor(entry: MemberEntry | None, derived: bool = False) -> Node:
    """Constructor from an ``init``-style entry, or an empty one."""
    if entry is None and derived:
        # Derived classes must call super before touching this
        value = nodes.function_expression(
            [nodes.rest_element("args")], nodes.block([nodes.super_call_statement("args")])
        )
    elif entry is None:
        value = nodes.function_expression()
    else:
        value = build_function(entry.copy_value())
    return nodes.method_definition(nodes.identifier("constructor"), value, kind="constructor")


def _find_constructor(body: list[Node]) -> Node | None:
    for node in body:
        if node.get("type") == "MethodDefinition" and node.get("kind") == "constructor":
            return node
    return None
