"""
Locating class-definition calls in a parsed program.

Walks an ESTree ``Program`` and converts every ``$.Class(...)`` call it finds.
Each call is converted in its own run; nothing carries over between calls.
"""

import logging
from typing import Any, Iterator

from classmorph.config.models import ConversionOptions
from classmorph.generator import nodes
from classmorph.generator.nodes import Node
from classmorph.generator.program import ConversionResult, ProgramOrchestrator

logger = logging.getLogger(__name__)

DEFAULT_CALLEE = "$.Class"


def iter_nodes(tree: Any) -> Iterator[Node]:
    """Pre-order walk over every node in ``tree``, in source order."""
    stack = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, dict):
            if "type" in current:
                yield current
            stack.extend(reversed(list(current.values())))


def matches_callee(node: Node | None, parts: list[str]) -> bool:
    """Whether ``node`` is the non-computed member chain ``parts``."""
    if not node or not parts:
        return False

    if len(parts) == 1:
        return node.get("type") == "Identifier" and node.get("name") == parts[0]

    if node.get("type") != "MemberExpression" or node.get("computed"):
        return False

    prop = node.get("property") or {}
    if prop.get("type") != "Identifier" or prop.get("name") != parts[-1]:
        return False

    return matches_callee(node.get("object"), parts[:-1])


def find_class_calls(program: Node, callee: str = DEFAULT_CALLEE) -> Iterator[Node]:
    """Yield every call expression whose callee is ``callee``."""
    parts = callee.split(".")
    for node in iter_nodes(program):
        if node.get("type") == "CallExpression" and matches_callee(node.get("callee"), parts):
            yield node


def convert_program(
    program: Node,
    options: ConversionOptions | None = None,
    callee: str = DEFAULT_CALLEE,
) -> tuple[Node, list[ConversionResult]]:
    """
    Convert all class-definition calls in ``program``.

    Returns:
        A Program with the statements of every conversion, in source order,
        and the individual results
    """
    orchestrator = ProgramOrchestrator(options)
    results = []

    for call in find_class_calls(program, callee):
        results.append(orchestrator.build(call.get("arguments")))

    if not results:
        logger.warning(f"No '{callee}' calls found")

    return nodes.program(merge_statements(results)), results


def merge_statements(results: list[ConversionResult]) -> list[Node]:
    """
    Concatenate the statements of several conversions into one body.

    Each run declares its own root alias, so a later ``const app = window.app;``
    that repeats a name already declared in the merged body is dropped.
    """
    declared: set[str] = set()
    body = []

    for result in results:
        for statement in result.statements:
            name = _const_alias_name(statement)
            if name is not None:
                if name in declared:
                    logger.debug(f"Dropping repeated alias '{name}' for {result.namespace}")
                    continue
                declared.add(name)
            body.append(statement)

    return body


def _const_alias_name(statement: Node) -> str | None:
    if statement.get("type") != "VariableDeclaration" or statement.get("kind") != "const":
        return None
    declarations = statement.get("declarations") or []
    if len(declarations) != 1:
        return None
    return (declarations[0].get("id") or {}).get("name")
