"""
Member classification.

A member table is the object literal passed to ``$.Class``. Each property is
read once into a ``MemberEntry`` and tagged as a ``Method`` (function value)
or a ``DataMember`` (anything else). Downstream assemblers only look at the
tag, never at the value shape.
"""

import copy
import logging
from dataclasses import dataclass, field

from classmorph.generator.errors import InvalidMemberTableError
from classmorph.generator.nodes import Node

logger = logging.getLogger(__name__)

FUNCTION_TYPES = ("FunctionExpression",)
ACCESSOR_KINDS = ("get", "set")


@dataclass(frozen=True)
class MemberEntry:
    """A single ``key: value`` entry of a member table."""

    key: Node
    value: Node
    computed: bool = False
    kind: str = "init"  # "init", or "get"/"set" for accessors

    @property
    def name(self) -> str | None:
        """Static key name, or None for computed or non-string keys."""
        if self.computed:
            return None
        if self.key.get("type") == "Identifier":
            return self.key.get("name")
        if self.key.get("type") == "Literal" and isinstance(self.key.get("value"), str):
            return self.key["value"]
        return None

    @property
    def is_function(self) -> bool:
        return self.value.get("type") in FUNCTION_TYPES

    @property
    def is_accessor(self) -> bool:
        return self.kind in ACCESSOR_KINDS

    def copy_key(self) -> Node:
        return copy.deepcopy(self.key)

    def copy_value(self) -> Node:
        return copy.deepcopy(self.value)


@dataclass(frozen=True)
class Method:
    entry: MemberEntry


@dataclass(frozen=True)
class DataMember:
    entry: MemberEntry


Member = Method | DataMember


@dataclass
class ClassifiedMembers:
    """Result of classifying one member table, in declaration order."""

    methods: list[Method] = field(default_factory=list)
    data: list[DataMember] = field(default_factory=list)
    constructor: MemberEntry | None = None

    @property
    def members(self) -> list[Member]:
        return [*self.methods, *self.data]


def read_member_table(
    node: Node | None, position: int, warnings: list[str] | None = None
) -> list[MemberEntry]:
    """
    Read an object-literal argument into member entries.

    Args:
        node: The argument node (``ObjectExpression`` or ``null`` literal)
        position: 1-based argument position, for error messages
        warnings: Receives a message for every skipped spread element

    Returns:
        Entries in declaration order

    Raises:
        InvalidMemberTableError: If the argument is not an object literal
    """
    if node is None:
        raise InvalidMemberTableError(position, None)

    if node.get("type") == "Literal" and node.get("value") is None:
        return []

    if node.get("type") != "ObjectExpression":
        raise InvalidMemberTableError(position, node.get("type"))

    entries = []
    for prop in node.get("properties", []):
        if prop.get("type") not in ("Property", None):
            message = f"Skipped {prop.get('type')} in member table at argument {position}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            continue

        entries.append(
            MemberEntry(
                key=prop["key"],
                value=prop["value"],
                computed=bool(prop.get("computed", False)),
                kind=prop.get("kind", "init"),
            )
        )

    return entries


def classify_members(
    entries: list[MemberEntry],
    constructor_name: str | None = None,
    constructor_produced: bool = False,
) -> ClassifiedMembers:
    """
    Split entries into methods and data members.

    The first function-valued entry named ``constructor_name`` becomes the
    constructor, unless this class already has one (``constructor_produced``).
    Later entries with the same name are ordinary methods. Pass
    ``constructor_name=None`` to disable constructor extraction entirely.
    """
    classified = ClassifiedMembers()
    found = constructor_produced

    for entry in entries:
        if (
            constructor_name is not None
            and not found
            and not entry.is_accessor
            and entry.is_function
            and entry.name == constructor_name
        ):
            classified.constructor = entry
            found = True
        elif entry.is_function or entry.is_accessor:
            classified.methods.append(Method(entry))
        else:
            classified.data.append(DataMember(entry))

    logger.debug(
        f"Classified {len(entries)} member(s): {len(classified.methods)} method(s), "
        f"{len(classified.data)} data member(s), "
        f"constructor={'yes' if classified.constructor else 'no'}"
    )
    return classified
