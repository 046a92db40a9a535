"""
Fixed keyword enumerations and the symbol tables used to resolve them.

Every enumeration accepts two spellings for a member: the keyword text as it
appears in TypeScript source (``"export"``) and the compiler's syntax kind name
(``"ExportKeyword"``). Tables are built once at import time.
"""
from enum import Enum
from typing import Dict, FrozenSet, Sequence, Set, Type, TypeVar, Union

from tsdecl.errors import MalformedModifier, UnknownKeyword
from tsdecl.logger import logger


class ModifierKeyword(str, Enum):
    ABSTRACT = "abstract"
    ACCESSOR = "accessor"
    ASYNC = "async"
    CONST = "const"
    DECLARE = "declare"
    DEFAULT = "default"
    EXPORT = "export"
    IN = "in"
    OUT = "out"
    OVERRIDE = "override"
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"
    READONLY = "readonly"
    STATIC = "static"


class ModifierPosition(str, Enum):
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    ENUM = "enum"
    VARIABLE = "variable"
    MEMBER = "member"
    TYPE_PARAMETER = "type_parameter"


class KeywordTypeKind(str, Enum):
    ANY = "any"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    INTRINSIC = "intrinsic"
    NEVER = "never"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"
    SYMBOL = "symbol"
    UNDEFINED = "undefined"
    UNKNOWN = "unknown"
    VOID = "void"


class TypeOperatorKeyword(str, Enum):
    KEYOF = "keyof"
    UNIQUE = "unique"
    READONLY = "readonly"


class HeritageToken(str, Enum):
    EXTENDS = "extends"
    IMPLEMENTS = "implements"


class VariableFlags(str, Enum):
    VAR = "var"
    LET = "let"
    CONST = "const"


ALLOWED_MODIFIERS: Dict[ModifierPosition, FrozenSet[ModifierKeyword]] = {
    ModifierPosition.INTERFACE: frozenset(
        {ModifierKeyword.EXPORT, ModifierKeyword.DECLARE, ModifierKeyword.DEFAULT}
    ),
    ModifierPosition.TYPE_ALIAS: frozenset(
        {ModifierKeyword.EXPORT, ModifierKeyword.DECLARE}
    ),
    ModifierPosition.ENUM: frozenset(
        {ModifierKeyword.EXPORT, ModifierKeyword.DECLARE, ModifierKeyword.CONST}
    ),
    ModifierPosition.VARIABLE: frozenset(
        {ModifierKeyword.EXPORT, ModifierKeyword.DECLARE}
    ),
    # Type members accept readonly only.
    ModifierPosition.MEMBER: frozenset({ModifierKeyword.READONLY}),
    ModifierPosition.TYPE_PARAMETER: frozenset(
        {ModifierKeyword.IN, ModifierKeyword.OUT, ModifierKeyword.CONST}
    ),
}

# Syntax kind names that do not follow the Capitalized + "Keyword" pattern.
_SYNTAX_KIND_NAMES = {
    "bigint": "BigIntKeyword",
    "keyof": "KeyOfKeyword",
}

E = TypeVar("E", bound=Enum)


def _syntax_kind_name(text: str) -> str:
    return _SYNTAX_KIND_NAMES.get(text, text.capitalize() + "Keyword")


def _build_table(enum_cls: Type[E]) -> Dict[str, E]:
    table: Dict[str, E] = {}
    for member in enum_cls:
        table[member.value] = member
        table[_syntax_kind_name(member.value)] = member
    return table


_MODIFIERS = _build_table(ModifierKeyword)
_KEYWORD_TYPES = _build_table(KeywordTypeKind)
_TYPE_OPERATORS = _build_table(TypeOperatorKeyword)
_HERITAGE_TOKENS = _build_table(HeritageToken)
_VARIABLE_FLAGS = _build_table(VariableFlags)


def _lookup(table: Dict[str, E], enum_cls: Type[E], symbol: Union[str, E]) -> E:
    if isinstance(symbol, enum_cls):
        return symbol
    if isinstance(symbol, str) and symbol in table:
        return table[symbol]
    logger.debug("Unknown keyword symbol", symbol=symbol, table=enum_cls.__name__)
    raise UnknownKeyword(symbol, list(enum_cls))


def resolve_modifier(
    symbol: Union[str, ModifierKeyword], position: ModifierPosition
) -> ModifierKeyword:
    """
    Resolve *symbol* to a modifier keyword that is valid at *position*.
    """
    allowed = ALLOWED_MODIFIERS[position]
    keyword: ModifierKeyword | None = None
    if isinstance(symbol, ModifierKeyword):
        keyword = symbol
    elif isinstance(symbol, str):
        keyword = _MODIFIERS.get(symbol)
    if keyword is None or keyword not in allowed:
        logger.debug(
            "Rejected modifier", symbol=symbol, position=position.value
        )
        raise MalformedModifier(symbol, position, allowed)
    return keyword


def resolve_keyword_type(symbol: Union[str, KeywordTypeKind]) -> KeywordTypeKind:
    return _lookup(_KEYWORD_TYPES, KeywordTypeKind, symbol)


def resolve_type_operator(
    symbol: Union[str, TypeOperatorKeyword]
) -> TypeOperatorKeyword:
    return _lookup(_TYPE_OPERATORS, TypeOperatorKeyword, symbol)


def resolve_heritage_token(symbol: Union[str, HeritageToken]) -> HeritageToken:
    return _lookup(_HERITAGE_TOKENS, HeritageToken, symbol)


def resolve_variable_flags(symbol: Union[str, VariableFlags]) -> VariableFlags:
    return _lookup(_VARIABLE_FLAGS, VariableFlags, symbol)


def check_modifier_order(
    keywords: Sequence[ModifierKeyword], position: ModifierPosition
) -> None:
    """
    Reject repeated modifiers and a ``default`` that does not directly follow
    ``export``.
    """
    allowed = ALLOWED_MODIFIERS[position]
    seen: Set[ModifierKeyword] = set()
    for i, keyword in enumerate(keywords):
        if keyword in seen:
            raise MalformedModifier(keyword, position, allowed, "repeated modifier")
        seen.add(keyword)
        if keyword == ModifierKeyword.DEFAULT and (
            i == 0 or keywords[i - 1] != ModifierKeyword.EXPORT
        ):
            logger.debug("Rejected modifier order", position=position.value)
            raise MalformedModifier(
                keyword, position, allowed, "'default' must follow 'export'"
            )
