"""
ESTree node factories.

Trees are plain dicts so they serialise straight to JSON and can be handed
to any ESTree renderer (astring, escodegen).
"""

from typing import Any, Iterable

Node = dict[str, Any]


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def literal(value: Any) -> Node:
    return {"type": "Literal", "value": value}


def this_expression() -> Node:
    return {"type": "ThisExpression"}


def member(obj: Node, prop: Node, computed: bool = False) -> Node:
    return {
        "type": "MemberExpression",
        "object": obj,
        "property": prop,
        "computed": computed,
    }


def member_chain(obj: Node, names: Iterable[str]) -> Node:
    """Build ``obj.a.b.c`` for names ``["a", "b", "c"]``."""
    node = obj
    for name in names:
        node = member(node, identifier(name))
    return node


def empty_object() -> Node:
    return {"type": "ObjectExpression", "properties": []}


def logical_or(left: Node, right: Node) -> Node:
    return {"type": "LogicalExpression", "operator": "||", "left": left, "right": right}


def assignment_statement(left: Node, right: Node) -> Node:
    """``left = right;`` as an expression statement."""
    return {
        "type": "ExpressionStatement",
        "expression": {
            "type": "AssignmentExpression",
            "operator": "=",
            "left": left,
            "right": right,
        },
    }


def const_declaration(name: str, init: Node) -> Node:
    return {
        "type": "VariableDeclaration",
        "declarations": [
            {
                "type": "VariableDeclarator",
                "id": identifier(name),
                "init": init,
            }
        ],
        "kind": "const",
    }


def block(body: list[Node] | None = None) -> Node:
    return {"type": "BlockStatement", "body": body if body is not None else []}


def function_expression(
    params: list[Node] | None = None,
    body: Node | None = None,
    *,
    fn_id: Node | None = None,
    generator: bool = False,
    is_async: bool = False,
    expression: bool = False,
) -> Node:
    return {
        "type": "FunctionExpression",
        "id": fn_id,
        "generator": generator,
        "expression": expression,
        "async": is_async,
        "params": params if params is not None else [],
        "body": body if body is not None else block(),
    }


def method_definition(
    key: Node,
    value: Node,
    *,
    kind: str = "method",
    static: bool = False,
    computed: bool = False,
) -> Node:
    return {
        "type": "MethodDefinition",
        "key": key,
        "computed": computed,
        "static": static,
        "kind": kind,
        "value": value,
    }


def property_definition(key: Node, value: Node, computed: bool = False) -> Node:
    """Instance class field (``key = value;`` inside a class body)."""
    return {
        "type": "PropertyDefinition",
        "key": key,
        "computed": computed,
        "static": False,
        "value": value,
    }


def class_expression(name: str, super_class: Node | None = None) -> Node:
    return {
        "type": "ClassExpression",
        "id": identifier(name),
        "superClass": super_class,
        "body": {"type": "ClassBody", "body": []},
    }


def program(body: list[Node]) -> Node:
    return {"type": "Program", "sourceType": "script", "body": body}


def property_access(obj: Node, key: Node, computed: bool = False) -> Node:
    """``obj.key``, switching to ``obj["key"]`` for literal keys."""
    if not computed and key.get("type") == "Literal":
        computed = True
    return member(obj, key, computed)


def rest_element(name: str) -> Node:
    return {"type": "RestElement", "argument": identifier(name)}


def super_call_statement(spread_name: str) -> Node:
    """``super(...spread_name);``"""
    return {
        "type": "ExpressionStatement",
        "expression": {
            "type": "CallExpression",
            "callee": {"type": "Super"},
            "arguments": [{"type": "SpreadElement", "argument": identifier(spread_name)}],
            "optional": False,
        },
    }
