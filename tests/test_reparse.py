from pathlib import Path

import pytest

from tsdecl import factory as f
from tsdecl.errors import ReparseError
from tsdecl.printer import print_nodes
from tsdecl.reparse import check_syntax, find_syntax_errors

SAMPLES_DIR = Path(__file__).parent / "samples"


@pytest.mark.parametrize("name", ["genericstruct.ts", "kitchensink.ts"])
def test_sample_output_parses(name):
    text = (SAMPLES_DIR / name).read_text(encoding="utf-8")
    assert find_syntax_errors(text) == []
    check_syntax(text)


def test_printed_declarations_parse():
    kw = f.keyword_type
    nodes = [
        f.add_leading_comment(
            f.type_alias_declaration(
                ["export"],
                "Shape",
                [f.type_parameter(None, "T", kw("object"), f.type_literal([]))],
                f.intersection_type(
                    [
                        f.reference("T"),
                        f.union_type([f.literal_type("a"), f.null_type()]),
                    ]
                ),
            ),
            "shape",
        ),
        f.interface_declaration(
            ["export"],
            "Node",
            None,
            [f.heritage_clause("extends", ["Base"])],
            [
                f.property_signature(["readonly"], "id", False, kw("string")),
                f.property_signature(
                    None,
                    "children",
                    True,
                    f.array_type(f.type_operator("keyof", f.reference("Base"))),
                ),
            ],
        ),
        f.enum_declaration(["export"], "E", [f.enum_member("A", 1), f.enum_member("B", 2)]),
        f.variable_statement(
            ["declare"],
            f.variable_declaration_list(
                [f.variable_declaration("items", type=f.tuple_type([kw("string"), kw("number")]))],
                "const",
            ),
        ),
    ]
    check_syntax(print_nodes(nodes))


def test_broken_text_is_reported():
    issues = find_syntax_errors("type = ;")
    assert issues
    assert issues[0].line == 1

    with pytest.raises(ReparseError) as exc:
        check_syntax("type = ;")
    assert exc.value.issues
    assert "line 1" in str(exc.value)
