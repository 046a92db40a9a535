import pytest

from tsdecl.errors import MalformedModifier, UnknownKeyword
from tsdecl.tokens import (
    ALLOWED_MODIFIERS,
    HeritageToken,
    KeywordTypeKind,
    ModifierKeyword,
    ModifierPosition,
    TypeOperatorKeyword,
    VariableFlags,
    check_modifier_order,
    resolve_heritage_token,
    resolve_keyword_type,
    resolve_modifier,
    resolve_type_operator,
    resolve_variable_flags,
)


def test_every_position_has_an_allowed_set():
    assert set(ALLOWED_MODIFIERS) == set(ModifierPosition)


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("export", ModifierKeyword.EXPORT),
        ("ExportKeyword", ModifierKeyword.EXPORT),
        (ModifierKeyword.DECLARE, ModifierKeyword.DECLARE),
    ],
)
def test_resolve_declaration_modifier(symbol, expected):
    assert resolve_modifier(symbol, ModifierPosition.INTERFACE) == expected


def test_member_and_declaration_modifiers_are_distinct():
    assert (
        resolve_modifier("readonly", ModifierPosition.MEMBER)
        == ModifierKeyword.READONLY
    )
    with pytest.raises(MalformedModifier) as exc:
        resolve_modifier("export", ModifierPosition.MEMBER)
    assert exc.value.symbol == "export"
    assert exc.value.position == ModifierPosition.MEMBER
    assert ModifierKeyword.READONLY in exc.value.allowed
    assert ModifierKeyword.EXPORT not in exc.value.allowed
    assert "readonly" in str(exc.value)


def test_unknown_modifier_symbol():
    with pytest.raises(MalformedModifier):
        resolve_modifier("exported", ModifierPosition.INTERFACE)
    with pytest.raises(MalformedModifier):
        resolve_modifier(42, ModifierPosition.INTERFACE)


@pytest.mark.parametrize(
    "symbol", ["public", "private", "protected", "static", "abstract", "override"]
)
def test_type_members_only_take_readonly(symbol):
    with pytest.raises(MalformedModifier):
        resolve_modifier(symbol, ModifierPosition.MEMBER)


def test_default_is_interface_only():
    assert (
        resolve_modifier("default", ModifierPosition.INTERFACE)
        == ModifierKeyword.DEFAULT
    )
    for position in (
        ModifierPosition.TYPE_ALIAS,
        ModifierPosition.ENUM,
        ModifierPosition.VARIABLE,
    ):
        with pytest.raises(MalformedModifier):
            resolve_modifier("default", position)


def test_modifier_order():
    export, default = ModifierKeyword.EXPORT, ModifierKeyword.DEFAULT
    check_modifier_order([export, default], ModifierPosition.INTERFACE)

    with pytest.raises(MalformedModifier) as exc:
        check_modifier_order([default], ModifierPosition.INTERFACE)
    assert "must follow" in str(exc.value)
    with pytest.raises(MalformedModifier):
        check_modifier_order([default, export], ModifierPosition.INTERFACE)
    with pytest.raises(MalformedModifier):
        check_modifier_order([export, export], ModifierPosition.TYPE_ALIAS)


def test_const_only_allowed_on_enums_and_type_parameters():
    assert resolve_modifier("const", ModifierPosition.ENUM) == ModifierKeyword.CONST
    assert (
        resolve_modifier("const", ModifierPosition.TYPE_PARAMETER)
        == ModifierKeyword.CONST
    )
    with pytest.raises(MalformedModifier):
        resolve_modifier("const", ModifierPosition.INTERFACE)


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("string", KeywordTypeKind.STRING),
        ("StringKeyword", KeywordTypeKind.STRING),
        ("bigint", KeywordTypeKind.BIGINT),
        ("BigIntKeyword", KeywordTypeKind.BIGINT),
        ("unknown", KeywordTypeKind.UNKNOWN),
    ],
)
def test_resolve_keyword_type(symbol, expected):
    assert resolve_keyword_type(symbol) == expected


def test_unknown_keyword_type():
    with pytest.raises(UnknownKeyword) as exc:
        resolve_keyword_type("int64")
    assert exc.value.symbol == "int64"
    assert KeywordTypeKind.NUMBER in exc.value.allowed


def test_resolve_other_tables():
    assert resolve_type_operator("KeyOfKeyword") == TypeOperatorKeyword.KEYOF
    assert resolve_type_operator("readonly") == TypeOperatorKeyword.READONLY
    assert resolve_heritage_token("implements") == HeritageToken.IMPLEMENTS
    assert resolve_variable_flags("const") == VariableFlags.CONST
    with pytest.raises(UnknownKeyword):
        resolve_type_operator("typeof")
    with pytest.raises(UnknownKeyword):
        resolve_heritage_token("inherits")
