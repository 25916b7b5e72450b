"""
Unit tests for end-to-end program generation of a single class call.
"""

import copy
import logging

import pytest

from classmorph.config.models import ConversionOptions, TargetDialect
from classmorph.generator import nodes
from classmorph.generator.class_shell import MISSING_EXTENDED_NAMESPACE
from classmorph.generator.errors import (
    ConversionError,
    InvalidArityError,
    InvalidMemberTableError,
    InvalidNamespaceError,
    MissingParametersError,
)
from classmorph.generator.program import ProgramOrchestrator, convert_class_call


def prop(name, value):
    return {
        "type": "Property",
        "key": nodes.identifier(name),
        "value": value,
        "computed": False,
        "kind": "init",
    }


def table(*props):
    return {"type": "ObjectExpression", "properties": list(props)}


def marker(name):
    return {"type": "ExpressionStatement", "expression": nodes.identifier(name)}


def fn(*statements):
    return nodes.function_expression([], nodes.block(list(statements)))


def chain_names(node):
    if node["type"] == "Identifier":
        return [node["name"]]
    return chain_names(node["object"]) + [node["property"]["name"]]


def class_statement(result):
    return next(
        s for s in result.statements
        if s["type"] == "ExpressionStatement"
        and s["expression"]["right"]["type"] == "ClassExpression"
    )


def class_body(result):
    return class_statement(result)["expression"]["right"]["body"]["body"]


def aliases(result):
    return [
        s["declarations"][0]["id"]["name"]
        for s in result.statements
        if s["type"] == "VariableDeclaration"
    ]


@pytest.fixture
def button_args():
    """$.Class("app.ui.Button", { init: function () { setup; }, label: "Ok" })"""
    return [
        nodes.literal("app.ui.Button"),
        table(prop("init", fn(marker("setup"))), prop("label", nodes.literal("Ok"))),
    ]


# =============================================================================
# Argument Validation
# =============================================================================


class TestArgumentValidation:
    """Test the fail-fast error kinds."""

    @pytest.mark.parametrize("parameters", [None, []])
    def test_missing_parameters(self, parameters):
        with pytest.raises(MissingParametersError):
            convert_class_call(parameters)

    @pytest.mark.parametrize("count", [1, 4])
    def test_invalid_arity(self, count):
        parameters = [nodes.literal("Widget")] + [table()] * (count - 1)

        with pytest.raises(InvalidArityError) as exc_info:
            convert_class_call(parameters)

        assert exc_info.value.count == count

    @pytest.mark.parametrize("namespace", ["", "app..Button"])
    def test_invalid_namespace(self, namespace):
        with pytest.raises(InvalidNamespaceError):
            convert_class_call([nodes.literal(namespace), table()])

    def test_namespace_must_be_string_literal(self):
        with pytest.raises(InvalidNamespaceError):
            convert_class_call([nodes.identifier("ns"), table()])

        with pytest.raises(InvalidNamespaceError):
            convert_class_call([nodes.literal(42), table()])

    def test_invalid_member_table(self):
        with pytest.raises(InvalidMemberTableError):
            convert_class_call([nodes.literal("Widget"), nodes.literal("members")])

    def test_errors_share_a_base_class(self):
        with pytest.raises(ConversionError):
            convert_class_call([nodes.literal("Widget")])


# =============================================================================
# Program Layout
# =============================================================================


class TestProgramLayout:
    """Test top-level statement order and namespace handling."""

    def test_button_inline_fields(self, button_args):
        result = convert_class_call(button_args, ConversionOptions(target=TargetDialect.ES2015))

        assert result.program["type"] == "Program"
        assert result.class_name == "Button"
        assert result.namespace == "app.ui.Button"
        assert result.warnings == []

        statements = result.statements
        assert len(statements) == 4
        assert chain_names(statements[0]["expression"]["left"]) == ["window", "app"]
        assert chain_names(statements[1]["expression"]["left"]) == ["window", "app", "ui"]
        assert aliases(result) == ["app"]
        assert statements[3] is class_statement(result)
        assert chain_names(statements[3]["expression"]["left"]) == ["app", "ui", "Button"]

        body = class_body(result)
        assert len(body) == 1
        assert body[0]["kind"] == "constructor"
        ctor_statements = body[0]["value"]["body"]["body"]
        assert ctor_statements[0] == marker("setup")
        assignment = ctor_statements[1]["expression"]
        assert assignment["left"] == nodes.member(nodes.this_expression(), nodes.identifier("label"))
        assert assignment["right"] == nodes.literal("Ok")

    def test_button_declared_fields(self, button_args):
        result = convert_class_call(button_args, ConversionOptions(target=TargetDialect.ES2017))

        body = class_body(result)
        assert [m["type"] for m in body] == ["PropertyDefinition", "MethodDefinition"]
        assert body[0]["key"] == nodes.identifier("label")
        assert body[0]["value"] == nodes.literal("Ok")
        assert body[1]["kind"] == "constructor"
        assert body[1]["value"]["body"]["body"] == [marker("setup")]

    def test_single_segment_namespace(self):
        result = convert_class_call([nodes.literal("widget"), table(prop("draw", fn()))])

        assert len(result.statements) == 1
        assert aliases(result) == []
        assignment = result.statements[0]["expression"]
        assert chain_names(assignment["left"]) == ["window", "widget"]
        assert assignment["right"]["id"] == nodes.identifier("Widget")

    @pytest.mark.parametrize("segments", [2, 3, 5])
    def test_guard_count(self, segments):
        namespace = ".".join(f"ns{i}" for i in range(segments - 1)) + ".Widget"

        result = convert_class_call([nodes.literal(namespace), table()])

        guards = [
            s for s in result.statements
            if s["type"] == "ExpressionStatement"
            and s["expression"]["right"]["type"] == "LogicalExpression"
        ]
        assert len(guards) == segments - 1

    def test_static_data_trails_class(self):
        result = convert_class_call(
            [
                nodes.literal("app.ui.Button"),
                table(prop("VERSION", nodes.literal("1.0"))),
                table(prop("draw", fn())),
            ]
        )

        body = class_body(result)
        assert not any(m.get("static") for m in body)
        last = result.statements[-1]["expression"]
        assert chain_names(last["left"]) == ["app", "ui", "Button", "VERSION"]
        assert last["right"] == nodes.literal("1.0")
        assert result.statements.index(class_statement(result)) == len(result.statements) - 2

    def test_static_methods_precede_instance_members(self):
        result = convert_class_call(
            [
                nodes.literal("app.Store"),
                table(prop("create", fn()), prop("init", fn())),
                table(prop("init", fn()), prop("save", fn())),
            ]
        )

        body = class_body(result)
        assert [(m["kind"], m["static"], m["key"]["name"]) for m in body] == [
            ("method", True, "create"),
            ("method", True, "init"),
            ("constructor", False, "constructor"),
            ("method", False, "save"),
        ]

    def test_one_constructor_per_class(self):
        result = convert_class_call(
            [
                nodes.literal("app.Store"),
                table(prop("init", fn())),
                table(prop("init", fn()), prop("init", fn())),
            ]
        )

        kinds = [m["kind"] for m in class_body(result)]
        assert kinds.count("constructor") == 1

    def test_custom_constructor_name(self):
        result = convert_class_call(
            [nodes.literal("Widget"), table(prop("initialize", fn()), prop("init", fn()))],
            ConversionOptions(constructor_name="initialize"),
        )

        body = class_body(result)
        assert body[0]["kind"] == "constructor"
        assert body[1]["key"]["name"] == "init"

    def test_custom_root_object(self):
        result = convert_class_call(
            [nodes.literal("app.Widget"), table()], ConversionOptions(root_object="globalThis")
        )

        assert chain_names(result.statements[0]["expression"]["left"]) == ["globalThis", "app"]

    def test_repeated_runs_are_identical(self, button_args):
        orchestrator = ProgramOrchestrator(ConversionOptions(target=TargetDialect.ES2015))
        original = copy.deepcopy(button_args)

        first = orchestrator.build(button_args)
        second = orchestrator.build(button_args)

        assert first.program == second.program
        assert button_args == original


# =============================================================================
# Extended Classes
# =============================================================================


class TestExtendedClasses:
    """Test superclass wiring through the orchestrator."""

    def test_extends_with_shared_root(self, button_args):
        options = ConversionOptions(extended=True, extended_namespace="app.core.Base")

        result = convert_class_call(button_args, options)

        assert aliases(result) == ["app"]
        superclass = class_statement(result)["expression"]["right"]["superClass"]
        assert chain_names(superclass) == ["app", "core", "Base"]

    def test_extends_with_other_root(self, button_args):
        options = ConversionOptions(extended=True, extended_namespace="lib.Base")

        result = convert_class_call(button_args, options)

        assert aliases(result) == ["app", "lib"]
        assert [s["type"] for s in result.statements] == [
            "ExpressionStatement",
            "ExpressionStatement",
            "VariableDeclaration",
            "VariableDeclaration",
            "ExpressionStatement",
        ]
        superclass = class_statement(result)["expression"]["right"]["superClass"]
        assert chain_names(superclass) == ["lib", "Base"]

    def test_extends_single_segment(self):
        options = ConversionOptions(extended=True, extended_namespace="Base")

        result = convert_class_call([nodes.literal("Widget"), table()], options)

        superclass = class_statement(result)["expression"]["right"]["superClass"]
        assert chain_names(superclass) == ["window", "Base"]
        assert aliases(result) == []

    @pytest.mark.parametrize("target", [TargetDialect.ES2015, TargetDialect.ES2017])
    def test_synthesised_constructor_calls_super(self, target):
        options = ConversionOptions(
            extended=True, extended_namespace="app.core.Base", target=target
        )

        result = convert_class_call(
            [nodes.literal("app.ui.Button"), table(prop("label", nodes.literal("Ok")))], options
        )

        ctor = next(m for m in class_body(result) if m.get("kind") == "constructor")
        assert ctor["value"]["params"] == [nodes.rest_element("args")]
        statements = ctor["value"]["body"]["body"]
        assert statements[0] == nodes.super_call_statement("args")
        if target == TargetDialect.ES2015:
            assert len(statements) == 2
            assert statements[1]["expression"]["left"]["property"] == nodes.identifier("label")
        else:
            assert len(statements) == 1

    def test_explicit_constructor_is_left_alone_when_extended(self, button_args):
        options = ConversionOptions(extended=True, extended_namespace="app.core.Base")

        result = convert_class_call(button_args, options)

        ctor = class_body(result)[0]
        assert ctor["value"]["params"] == []
        assert ctor["value"]["body"]["body"][0] == marker("setup")

    def test_missing_extended_namespace_degrades(self, button_args, caplog):
        plain = convert_class_call(button_args)

        with caplog.at_level(logging.WARNING):
            result = convert_class_call(button_args, ConversionOptions(extended=True))

        assert result.program == plain.program
        assert result.warnings == [MISSING_EXTENDED_NAMESPACE]
        assert class_statement(result)["expression"]["right"]["superClass"] is None
        assert MISSING_EXTENDED_NAMESPACE in caplog.text

    def test_extended_namespace_ignored_when_not_extended(self, button_args):
        options = ConversionOptions(extended=False, extended_namespace="lib.Base")

        result = convert_class_call(button_args, options)

        assert class_statement(result)["expression"]["right"]["superClass"] is None
        assert aliases(result) == ["app"]
