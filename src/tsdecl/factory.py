"""
Builder functions for the TypeScript node model.

Every builder validates and normalizes its inputs and returns a new immutable
node. Names may be given as raw strings or prebuilt nodes; keyword and modifier
symbols are resolved through the fixed tables in :mod:`tsdecl.tokens`.
"""
import math
import re
from typing import Iterable, Optional, Sequence, TypeVar, Union

from tsdecl.errors import (
    EmptyHeritageList,
    EmptyTypeList,
    InvalidComment,
    InvalidIdentifier,
    InvalidLiteral,
    UnsupportedNodeKind,
)
from tsdecl.logger import logger
from tsdecl.models import (
    TYPE_NODE_KINDS,
    ArrayLiteral,
    ArrayType,
    BooleanLiteral,
    EnumDeclaration,
    EnumMember,
    ExclamationToken,
    ExpressionWithTypeArguments,
    HeritageClause,
    Identifier,
    InterfaceDeclaration,
    IntersectionType,
    KeywordType,
    LiteralType,
    Modifier,
    Node,
    NullLiteral,
    NumericLiteral,
    PropertySignature,
    QuestionToken,
    StringLiteral,
    SyntaxKind,
    SyntheticComment,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeOperator,
    TypeParameterDeclaration,
    TypeReference,
    UnionType,
    VariableDeclaration,
    VariableDeclarationList,
    VariableStatement,
)
from tsdecl.tokens import (
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

N = TypeVar("N", bound=Node)

NameLike = Union[str, Identifier]
ModifierLike = Union[str, ModifierKeyword, Modifier]
PropertyNameLike = Union[str, Identifier, StringLiteral]
LiteralNode = Union[StringLiteral, NumericLiteral, BooleanLiteral, NullLiteral]
Scalar = Union[str, int, float, bool, None]

_NUMERIC_RE = re.compile(
    r"^-?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|"
    r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)$"
)

# ECMAScript reserved words, strict mode included. Valid as property names only.
RESERVED_WORDS = frozenset(
    {
        "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "enum", "export",
        "extends", "false", "finally", "for", "function", "if", "implements",
        "import", "in", "instanceof", "interface", "let", "new", "null",
        "package", "private", "protected", "public", "return", "static",
        "super", "switch", "this", "throw", "true", "try", "typeof", "var",
        "void", "while", "with", "yield",
    }
)

_LINE_TERMINATORS = ("\n", "\r", "\u2028", "\u2029")


def is_identifier(name: str) -> bool:
    """
    Check ECMAScript identifier lexical rules (``$`` is allowed anywhere).
    """
    return bool(name) and name.replace("$", "_").isidentifier()


# ---------------------------------------------------------------------------
# Names and tokens
# ---------------------------------------------------------------------------


def identifier(name: NameLike) -> Identifier:
    if isinstance(name, Identifier):
        return name
    if (
        not isinstance(name, str)
        or not is_identifier(name)
        or name in RESERVED_WORDS
    ):
        logger.debug("Rejected identifier", name=name)
        raise InvalidIdentifier(name)
    return Identifier(text=name)


def modifier(name: ModifierLike, position: ModifierPosition) -> Modifier:
    if isinstance(name, Modifier):
        # Prebuilt modifiers are still checked against the position.
        resolve_modifier(name.keyword, position)
        return name
    return Modifier(keyword=resolve_modifier(name, position))


def modifiers(
    names: Optional[Iterable[ModifierLike]], position: ModifierPosition
) -> tuple[Modifier, ...]:
    if not names:
        return ()
    result = tuple(modifier(m, position) for m in names)
    check_modifier_order([m.keyword for m in result], position)
    return result


def question_token() -> QuestionToken:
    return QuestionToken()


def exclamation_token() -> ExclamationToken:
    return ExclamationToken()


def property_name(name: PropertyNameLike) -> Union[Identifier, StringLiteral]:
    """
    Property and enum member names that are not valid identifiers are kept as
    string literals and printed quoted.
    """
    if isinstance(name, (Identifier, StringLiteral)):
        return name
    if isinstance(name, str) and is_identifier(name):
        return Identifier(text=name)
    if isinstance(name, str):
        return StringLiteral(value=name)
    raise InvalidIdentifier(name)


# ---------------------------------------------------------------------------
# Literal values
# ---------------------------------------------------------------------------


def string_literal(value: str) -> StringLiteral:
    if not isinstance(value, str):
        raise InvalidLiteral(value, "string literal requires str")
    return StringLiteral(value=value)


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    # Python writes 1e-07, JavaScript writes 1e-7
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", text)


def numeric_literal(value: Union[int, float, str]) -> NumericLiteral:
    if isinstance(value, bool):
        raise InvalidLiteral(value, "numeric literal does not accept bool")
    if isinstance(value, int):
        return NumericLiteral(text=str(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidLiteral(value, "numeric literal must be finite")
        return NumericLiteral(text=_format_number(value))
    if isinstance(value, str) and _NUMERIC_RE.match(value):
        return NumericLiteral(text=value)
    logger.debug("Rejected numeric literal", value=value)
    raise InvalidLiteral(value, "malformed numeric literal")


def boolean_literal(value: bool) -> BooleanLiteral:
    return BooleanLiteral(value=bool(value))


def null_literal() -> NullLiteral:
    return NullLiteral()


def literal(value: Union[Scalar, LiteralNode]) -> LiteralNode:
    """
    Convert a Python scalar to the matching literal node.
    """
    if isinstance(value, (StringLiteral, NumericLiteral, BooleanLiteral, NullLiteral)):
        return value
    if value is None:
        return null_literal()
    if isinstance(value, bool):
        return boolean_literal(value)
    if isinstance(value, (int, float)):
        return numeric_literal(value)
    if isinstance(value, str):
        return string_literal(value)
    raise InvalidLiteral(value)


def array_literal(elements: Sequence) -> ArrayLiteral:
    items = []
    for element in elements:
        if isinstance(element, (Identifier, ArrayLiteral)):
            items.append(element)
        elif isinstance(element, (list, tuple)):
            items.append(array_literal(element))
        else:
            items.append(literal(element))
    return ArrayLiteral(elements=tuple(items))


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _type_node(node: Node) -> Node:
    if not isinstance(node, Node) or node.kind not in TYPE_NODE_KINDS:
        raise UnsupportedNodeKind(getattr(node, "kind", type(node).__name__))
    return node


def _type_list(
    types: Optional[Iterable[Node]], kind: SyntaxKind, allow_empty: bool = True
) -> tuple:
    items = tuple(_type_node(t) for t in (types or ()))
    if not items and not allow_empty:
        logger.debug("Rejected empty type list", kind=kind.value)
        raise EmptyTypeList(kind)
    return items


def keyword_type(name: Union[str, KeywordTypeKind]) -> KeywordType:
    return KeywordType(keyword=resolve_keyword_type(name))


def reference(
    name: NameLike, type_arguments: Optional[Iterable[Node]] = None
) -> TypeReference:
    return TypeReference(
        type_name=identifier(name),
        type_arguments=_type_list(type_arguments, SyntaxKind.TYPE_REFERENCE),
    )


def array_type(element: Node) -> ArrayType:
    return ArrayType(element_type=_type_node(element))


def tuple_type(elements: Iterable[Node]) -> TupleType:
    return TupleType(
        elements=_type_list(elements, SyntaxKind.TUPLE_TYPE, allow_empty=False)
    )


def union_type(types: Iterable[Node]) -> UnionType:
    return UnionType(types=_type_list(types, SyntaxKind.UNION_TYPE, allow_empty=False))


def intersection_type(types: Iterable[Node]) -> IntersectionType:
    return IntersectionType(
        types=_type_list(types, SyntaxKind.INTERSECTION_TYPE, allow_empty=False)
    )


def literal_type(value: Union[Scalar, LiteralNode]) -> LiteralType:
    return LiteralType(literal=literal(value))


def null_type() -> LiteralType:
    return LiteralType(literal=null_literal())


def type_operator(
    operator: Union[str, TypeOperatorKeyword], node: Node
) -> TypeOperator:
    return TypeOperator(operator=resolve_type_operator(operator), type=_type_node(node))


def type_literal(members: Optional[Iterable[PropertySignature]] = None) -> TypeLiteral:
    return TypeLiteral(members=tuple(members or ()))


# ---------------------------------------------------------------------------
# Members and clauses
# ---------------------------------------------------------------------------


def property_signature(
    modifier_names: Optional[Iterable[ModifierLike]],
    name: PropertyNameLike,
    question: bool,
    type: Optional[Node],
) -> PropertySignature:
    return PropertySignature(
        modifiers=modifiers(modifier_names, ModifierPosition.MEMBER),
        name=property_name(name),
        question_token=question_token() if question else None,
        type=_type_node(type) if type is not None else None,
    )


def type_parameter(
    modifier_names: Optional[Iterable[ModifierLike]],
    name: NameLike,
    constraint: Optional[Node] = None,
    default: Optional[Node] = None,
) -> TypeParameterDeclaration:
    return TypeParameterDeclaration(
        modifiers=modifiers(modifier_names, ModifierPosition.TYPE_PARAMETER),
        name=identifier(name),
        constraint=_type_node(constraint) if constraint is not None else None,
        default=_type_node(default) if default is not None else None,
    )


def expression_with_type_arguments(
    expression: NameLike, type_arguments: Optional[Iterable[Node]] = None
) -> ExpressionWithTypeArguments:
    return ExpressionWithTypeArguments(
        expression=identifier(expression),
        type_arguments=_type_list(
            type_arguments, SyntaxKind.EXPRESSION_WITH_TYPE_ARGUMENTS
        ),
    )


def _heritage_type(
    item: Union[NameLike, TypeReference, ExpressionWithTypeArguments]
) -> ExpressionWithTypeArguments:
    if isinstance(item, ExpressionWithTypeArguments):
        return item
    if isinstance(item, TypeReference):
        return ExpressionWithTypeArguments(
            expression=item.type_name, type_arguments=item.type_arguments
        )
    return expression_with_type_arguments(item)


def heritage_clause(
    token: Union[str, HeritageToken],
    types: Iterable[Union[NameLike, TypeReference, ExpressionWithTypeArguments]],
) -> HeritageClause:
    resolved = resolve_heritage_token(token)
    items = tuple(_heritage_type(t) for t in types)
    if not items:
        logger.debug("Rejected empty heritage clause", token=resolved.value)
        raise EmptyHeritageList(resolved)
    return HeritageClause(token=resolved, types=items)


def enum_member(
    name: PropertyNameLike,
    initializer: Union[str, int, float, StringLiteral, NumericLiteral, None] = None,
) -> EnumMember:
    value: Union[StringLiteral, NumericLiteral, None] = None
    if isinstance(initializer, (StringLiteral, NumericLiteral)):
        value = initializer
    elif isinstance(initializer, str):
        value = string_literal(initializer)
    elif initializer is not None:
        value = numeric_literal(initializer)
    return EnumMember(name=property_name(name), initializer=value)


def variable_declaration(
    name: NameLike,
    exclamation: bool = False,
    type: Optional[Node] = None,
    initializer: Union[Scalar, Node, list, tuple] = None,
) -> VariableDeclaration:
    init: Optional[Node] = None
    if isinstance(initializer, Node):
        init = initializer
    elif isinstance(initializer, (list, tuple)):
        init = array_literal(initializer)
    elif initializer is not None:
        init = literal(initializer)
    return VariableDeclaration(
        name=identifier(name),
        exclamation_token=exclamation_token() if exclamation else None,
        type=_type_node(type) if type is not None else None,
        initializer=init,
    )


def variable_declaration_list(
    declarations: Iterable[VariableDeclaration],
    flags: Union[str, VariableFlags] = VariableFlags.VAR,
) -> VariableDeclarationList:
    return VariableDeclarationList(
        declarations=tuple(declarations), flags=resolve_variable_flags(flags)
    )


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def interface_declaration(
    modifier_names: Optional[Iterable[ModifierLike]],
    name: NameLike,
    type_parameters: Optional[Iterable[TypeParameterDeclaration]],
    heritage_clauses: Optional[Iterable[HeritageClause]],
    members: Iterable[PropertySignature],
) -> InterfaceDeclaration:
    return InterfaceDeclaration(
        modifiers=modifiers(modifier_names, ModifierPosition.INTERFACE),
        name=identifier(name),
        type_parameters=tuple(type_parameters or ()),
        heritage_clauses=tuple(heritage_clauses or ()),
        members=tuple(members),
    )


def type_alias_declaration(
    modifier_names: Optional[Iterable[ModifierLike]],
    name: NameLike,
    type_parameters: Optional[Iterable[TypeParameterDeclaration]],
    type: Node,
) -> TypeAliasDeclaration:
    return TypeAliasDeclaration(
        modifiers=modifiers(modifier_names, ModifierPosition.TYPE_ALIAS),
        name=identifier(name),
        type_parameters=tuple(type_parameters or ()),
        type=_type_node(type),
    )


def enum_declaration(
    modifier_names: Optional[Iterable[ModifierLike]],
    name: NameLike,
    members: Iterable[EnumMember],
) -> EnumDeclaration:
    return EnumDeclaration(
        modifiers=modifiers(modifier_names, ModifierPosition.ENUM),
        name=identifier(name),
        members=tuple(members),
    )


def variable_statement(
    modifier_names: Optional[Iterable[ModifierLike]],
    declaration_list: VariableDeclarationList,
) -> VariableStatement:
    return VariableStatement(
        modifiers=modifiers(modifier_names, ModifierPosition.VARIABLE),
        declaration_list=declaration_list,
    )


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def add_synthetic_comment(
    node: N,
    leading: bool,
    single_line: bool,
    text: str,
    trailing_newline: bool,
) -> N:
    """
    Return a copy of *node* with one more attached comment. The original node
    is left untouched. Text that would end the comment early is rejected.
    """
    if single_line and any(t in text for t in _LINE_TERMINATORS):
        raise InvalidComment(text, "single-line comment contains a line break")
    if not single_line and "*/" in text:
        raise InvalidComment(text, "multi-line comment contains '*/'")
    comment = SyntheticComment(
        leading=leading,
        single_line=single_line,
        text=text,
        trailing_newline=trailing_newline,
    )
    return node.model_copy(update={"comments": node.comments + (comment,)})


def add_leading_comment(node: N, text: str) -> N:
    """Attach ``// text`` before *node*."""
    return add_synthetic_comment(
        node, leading=True, single_line=True, text=" " + text, trailing_newline=False
    )
