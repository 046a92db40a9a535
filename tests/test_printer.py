import pytest

from tsdecl import factory as f
from tsdecl.errors import UnsupportedNodeKind
from tsdecl.models import NODE_TYPES, Node, SyntaxKind, UnionType
from tsdecl.printer import EmitContext, Printer, escape_string, print_node, print_nodes


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #
def _kw(name):
    return f.keyword_type(name)


def _ref(name, *args):
    return f.reference(name, list(args))


def _prop(name, type_, optional=False, modifiers=None):
    return f.property_signature(modifiers, name, optional, type_)


def _alias(name, type_, modifiers=None, type_parameters=None):
    return f.type_alias_declaration(modifiers, name, type_parameters, type_)


# --------------------------------------------------------------------------- #
# Declarations
# --------------------------------------------------------------------------- #
def test_generic_interface_canonical_form():
    node = f.interface_declaration(
        None,
        "Baz",
        [
            f.type_parameter(None, "S", _ref("Foo", _kw("string"), _kw("string"))),
            f.type_parameter(None, "I", _ref("Comparable")),
            f.type_parameter(None, "X", _ref("Foo", _ref("I"), _ref("I"))),
        ],
        None,
        [_prop("A", _ref("S")), _prop("B", _ref("X")), _prop("C", _ref("I"))],
    )
    assert print_node(node) == (
        "interface Baz<S extends Foo<string, string>, I extends Comparable, "
        "X extends Foo<I, I>> {\n"
        "    A: S;\n"
        "    B: X;\n"
        "    C: I;\n"
        "}"
    )


def test_empty_interface_keeps_braces_on_separate_lines():
    node = f.interface_declaration(["export"], "Empty", None, None, [])
    assert print_node(node) == "export interface Empty {\n}"


def test_interface_heritage_and_member_modifiers():
    node = f.interface_declaration(
        ["export"],
        "User",
        [f.type_parameter(None, "T")],
        [f.heritage_clause("extends", [_ref("Base", _ref("T")), "Audited"])],
        [
            _prop("id", _kw("string"), modifiers=["readonly"]),
            _prop("email-address", _kw("string"), optional=True),
        ],
    )
    assert print_node(node) == (
        "export interface User<T> extends Base<T>, Audited {\n"
        "    readonly id: string;\n"
        '    "email-address"?: string;\n'
        "}"
    )


def test_type_alias_forms():
    assert print_node(_alias("Id", _kw("string"), ["export"])) == (
        "export type Id = string;"
    )
    boxed = _alias(
        "Box",
        _ref("T"),
        type_parameters=[f.type_parameter(None, "T", None, _kw("unknown"))],
    )
    assert print_node(boxed) == "type Box<T = unknown> = T;"
    pair = _alias("Pair", f.tuple_type([_kw("string"), _kw("number")]))
    assert print_node(pair) == "type Pair = [string, number];"


def test_type_literal_nesting():
    node = _alias(
        "Point",
        f.type_literal(
            [
                _prop("x", _kw("number")),
                _prop("y", _kw("number"), optional=True),
                _prop("meta", f.type_literal([_prop("tag", f.literal_type("p"))])),
            ]
        ),
    )
    assert print_node(node) == (
        "type Point = {\n"
        "    x: number;\n"
        "    y?: number;\n"
        "    meta: {\n"
        '        tag: "p";\n'
        "    };\n"
        "};"
    )


def test_empty_type_literal_is_inline():
    assert print_node(_alias("Empty", f.type_literal([]))) == "type Empty = {};"


def test_enum_declarations():
    node = f.enum_declaration(
        ["export"], "Color", [f.enum_member("Red", 0), f.enum_member("Green", 1)]
    )
    assert print_node(node) == (
        "export enum Color {\n    Red = 0,\n    Green = 1\n}"
    )
    const_enum = f.enum_declaration(
        ["export", "const"], "Kind", [f.enum_member("A"), f.enum_member("b-c", "x")]
    )
    assert print_node(const_enum) == (
        'export const enum Kind {\n    A,\n    "b-c" = "x"\n}'
    )
    assert print_node(f.enum_declaration(None, "Nothing", [])) == "enum Nothing {\n}"


def test_variable_statements():
    declared = f.variable_statement(
        ["declare"],
        f.variable_declaration_list(
            [f.variable_declaration("x", True, _kw("number"))], "let"
        ),
    )
    assert print_node(declared) == "declare let x!: number;"

    several = f.variable_statement(
        None,
        f.variable_declaration_list(
            [f.variable_declaration("a", initializer=1), f.variable_declaration("b", initializer="two")]
        ),
    )
    assert print_node(several) == 'var a = 1, b = "two";'

    exported = f.variable_statement(
        ["export"],
        f.variable_declaration_list(
            [
                f.variable_declaration(
                    "Audiences",
                    type=f.array_type(_ref("Audience")),
                    initializer=["world", None, True, [2.5]],
                )
            ],
            "const",
        ),
    )
    assert print_node(exported) == (
        'export const Audiences: Audience[] = ["world", null, true, [2.5]];'
    )


# --------------------------------------------------------------------------- #
# Types and precedence
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize(
    "node, expected",
    [
        (f.array_type(f.union_type([_kw("string"), _kw("number")])), "(string | number)[]"),
        (f.array_type(f.array_type(_kw("string"))), "string[][]"),
        (f.array_type(f.type_operator("keyof", _ref("T"))), "(keyof T)[]"),
        (f.array_type(f.intersection_type([_ref("A"), _ref("B")])), "(A & B)[]"),
        (
            f.intersection_type([_ref("A"), f.union_type([_ref("B"), _ref("C")])]),
            "A & (B | C)",
        ),
        (f.union_type([_ref("A"), f.intersection_type([_ref("B"), _ref("C")])]), "A | B & C"),
        (f.type_operator("keyof", f.union_type([_ref("A"), _ref("B")])), "keyof (A | B)"),
        (f.type_operator("readonly", f.array_type(_kw("string"))), "readonly string[]"),
        (f.union_type([_kw("string"), f.null_type()]), "string | null"),
        (f.union_type([f.literal_type(1.5), f.literal_type(False)]), "1.5 | false"),
        (_ref("Map", _kw("string"), f.array_type(_ref("T"))), "Map<string, T[]>"),
    ],
)
def test_type_printing(node, expected):
    assert print_node(node) == expected


def test_string_escaping():
    assert print_node(f.literal_type('say "hi"\n')) == '"say \\"hi\\"\\n"'
    assert escape_string("a\0b\x001", '"') == "a\\0b\\x001"
    assert escape_string("\x01", '"') == "\\u0001"
    assert escape_string("it's", "'") == "it\\'s"


# --------------------------------------------------------------------------- #
# Emit context
# --------------------------------------------------------------------------- #
def test_emit_context_controls_layout():
    printer = Printer(EmitContext(new_line="\r\n", indent="  ", quote="'"))
    node = f.interface_declaration(
        None, "A", None, None, [_prop("a", f.literal_type("x"))]
    )
    assert printer.print_node(node) == "interface A {\r\n  a: 'x';\r\n}"
    assert printer.print_nodes([_alias("B", _kw("string")), _alias("C", _kw("never"))]) == (
        "type B = string;\r\n\r\ntype C = never;"
    )


def test_print_nodes_separates_with_blank_line():
    text = print_nodes([_alias("A", _kw("string")), _alias("B", _kw("number"))])
    assert text == "type A = string;\n\ntype B = number;"
    assert print_nodes([]) == ""


def test_printing_is_deterministic():
    node = f.interface_declaration(
        ["export"], "Foo", None, None, [_prop("a", f.union_type([_kw("string"), _kw("number")]))]
    )
    first = print_node(node)
    assert print_node(node) == first
    assert Printer(EmitContext()).print_node(node) == first


# --------------------------------------------------------------------------- #
# Dispatch
# --------------------------------------------------------------------------- #
class Bogus(Node):
    kind: str = "bogus"


def test_every_kind_has_a_printing_rule():
    assert set(Printer(EmitContext())._handlers) == set(SyntaxKind)


def test_unknown_node_kind_is_rejected():
    printer = Printer(EmitContext())
    with pytest.raises(UnsupportedNodeKind):
        printer.print_node(Bogus())
    with pytest.raises(UnsupportedNodeKind) as exc:
        printer.print_node(UnionType.model_construct(types=(Bogus(),)))
    assert exc.value.kind == "bogus"
    with pytest.raises(UnsupportedNodeKind):
        printer.print_node("type A = string;")


def test_node_types_cover_every_kind():
    assert set(NODE_TYPES) == set(SyntaxKind)
    assert all(cls.model_fields["kind"].default == k for k, cls in NODE_TYPES.items())


def test_bare_node_with_known_kind_is_rejected():
    printer = Printer(EmitContext())
    with pytest.raises(UnsupportedNodeKind):
        printer.print_node(Node(kind=SyntaxKind.IDENTIFIER))
    with pytest.raises(UnsupportedNodeKind):
        printer.print_node(
            UnionType.model_construct(types=(Node(kind=SyntaxKind.KEYWORD_TYPE),))
        )


# --------------------------------------------------------------------------- #
# Default context
# --------------------------------------------------------------------------- #
def test_default_printer_ignores_environment(monkeypatch):
    monkeypatch.setenv("TSDECL_NEW_LINE", "crlf")
    monkeypatch.setenv("TSDECL_INDENT_SIZE", "1")
    monkeypatch.setenv("TSDECL_QUOTE_STYLE", "single")
    node = f.interface_declaration(
        None, "A", None, None, [_prop("a", f.literal_type("x"))]
    )
    assert print_node(node) == 'interface A {\n    a: "x";\n}'
    assert Printer().print_node(node) == 'interface A {\n    a: "x";\n}'
