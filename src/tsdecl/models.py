from enum import Enum
from typing import Annotated, Dict, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from tsdecl.tokens import (
    HeritageToken,
    KeywordTypeKind,
    ModifierKeyword,
    TypeOperatorKeyword,
    VariableFlags,
)

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SyntaxKind(str, Enum):
    # Names and tokens
    IDENTIFIER = "identifier"
    MODIFIER = "modifier"
    QUESTION_TOKEN = "question_token"
    EXCLAMATION_TOKEN = "exclamation_token"
    # Literal values
    STRING_LITERAL = "string_literal"
    NUMERIC_LITERAL = "numeric_literal"
    BOOLEAN_LITERAL = "boolean_literal"
    NULL_LITERAL = "null_literal"
    ARRAY_LITERAL = "array_literal"
    # Types
    KEYWORD_TYPE = "keyword_type"
    TYPE_REFERENCE = "type_reference"
    ARRAY_TYPE = "array_type"
    TUPLE_TYPE = "tuple_type"
    UNION_TYPE = "union_type"
    INTERSECTION_TYPE = "intersection_type"
    LITERAL_TYPE = "literal_type"
    TYPE_OPERATOR = "type_operator"
    TYPE_LITERAL = "type_literal"
    # Members and clauses
    TYPE_PARAMETER = "type_parameter"
    PROPERTY_SIGNATURE = "property_signature"
    EXPRESSION_WITH_TYPE_ARGUMENTS = "expression_with_type_arguments"
    HERITAGE_CLAUSE = "heritage_clause"
    ENUM_MEMBER = "enum_member"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATION_LIST = "variable_declaration_list"
    # Declarations
    INTERFACE_DECLARATION = "interface_declaration"
    TYPE_ALIAS_DECLARATION = "type_alias_declaration"
    ENUM_DECLARATION = "enum_declaration"
    VARIABLE_STATEMENT = "variable_statement"


# ---------------------------------------------------------------------------
# Base containers
# ---------------------------------------------------------------------------


class SyntheticComment(BaseModel):
    """
    A comment attached to a node. ``text`` is emitted verbatim between the
    comment delimiters, so a conventional ``// text`` needs a leading space.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    leading: bool = True
    single_line: bool = True
    text: str
    trailing_newline: bool = False


class Node(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: SyntaxKind
    comments: Tuple[SyntheticComment, ...] = ()

    @property
    def leading_comments(self) -> Tuple[SyntheticComment, ...]:
        return tuple(c for c in self.comments if c.leading)

    @property
    def trailing_comments(self) -> Tuple[SyntheticComment, ...]:
        return tuple(c for c in self.comments if not c.leading)


# ---------------------------------------------------------------------------
# Names and tokens
# ---------------------------------------------------------------------------


class Identifier(Node):
    kind: Literal[SyntaxKind.IDENTIFIER] = SyntaxKind.IDENTIFIER
    text: str


class Modifier(Node):
    kind: Literal[SyntaxKind.MODIFIER] = SyntaxKind.MODIFIER
    keyword: ModifierKeyword


class QuestionToken(Node):
    kind: Literal[SyntaxKind.QUESTION_TOKEN] = SyntaxKind.QUESTION_TOKEN


class ExclamationToken(Node):
    kind: Literal[SyntaxKind.EXCLAMATION_TOKEN] = SyntaxKind.EXCLAMATION_TOKEN


# ---------------------------------------------------------------------------
# Literal values
# ---------------------------------------------------------------------------


class StringLiteral(Node):
    kind: Literal[SyntaxKind.STRING_LITERAL] = SyntaxKind.STRING_LITERAL
    value: str


class NumericLiteral(Node):
    kind: Literal[SyntaxKind.NUMERIC_LITERAL] = SyntaxKind.NUMERIC_LITERAL
    text: str  # source form, e.g. "5", "-1.5", "0xff"


class BooleanLiteral(Node):
    kind: Literal[SyntaxKind.BOOLEAN_LITERAL] = SyntaxKind.BOOLEAN_LITERAL
    value: bool


class NullLiteral(Node):
    kind: Literal[SyntaxKind.NULL_LITERAL] = SyntaxKind.NULL_LITERAL


class ArrayLiteral(Node):
    kind: Literal[SyntaxKind.ARRAY_LITERAL] = SyntaxKind.ARRAY_LITERAL
    elements: Tuple["Expression", ...] = ()


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class KeywordType(Node):
    kind: Literal[SyntaxKind.KEYWORD_TYPE] = SyntaxKind.KEYWORD_TYPE
    keyword: KeywordTypeKind


class TypeReference(Node):
    kind: Literal[SyntaxKind.TYPE_REFERENCE] = SyntaxKind.TYPE_REFERENCE
    type_name: Identifier
    type_arguments: Tuple["TypeNode", ...] = ()


class ArrayType(Node):
    kind: Literal[SyntaxKind.ARRAY_TYPE] = SyntaxKind.ARRAY_TYPE
    element_type: "TypeNode"


class TupleType(Node):
    kind: Literal[SyntaxKind.TUPLE_TYPE] = SyntaxKind.TUPLE_TYPE
    elements: Tuple["TypeNode", ...]


class UnionType(Node):
    kind: Literal[SyntaxKind.UNION_TYPE] = SyntaxKind.UNION_TYPE
    types: Tuple["TypeNode", ...]


class IntersectionType(Node):
    kind: Literal[SyntaxKind.INTERSECTION_TYPE] = SyntaxKind.INTERSECTION_TYPE
    types: Tuple["TypeNode", ...]


class LiteralType(Node):
    kind: Literal[SyntaxKind.LITERAL_TYPE] = SyntaxKind.LITERAL_TYPE
    literal: "LiteralValue"


class TypeOperator(Node):
    kind: Literal[SyntaxKind.TYPE_OPERATOR] = SyntaxKind.TYPE_OPERATOR
    operator: TypeOperatorKeyword
    type: "TypeNode"


class TypeLiteral(Node):
    kind: Literal[SyntaxKind.TYPE_LITERAL] = SyntaxKind.TYPE_LITERAL
    members: Tuple["PropertySignature", ...] = ()


# ---------------------------------------------------------------------------
# Members and clauses
# ---------------------------------------------------------------------------


class TypeParameterDeclaration(Node):
    kind: Literal[SyntaxKind.TYPE_PARAMETER] = SyntaxKind.TYPE_PARAMETER
    modifiers: Tuple[Modifier, ...] = ()
    name: Identifier
    constraint: Optional["TypeNode"] = None
    default: Optional["TypeNode"] = None


class PropertySignature(Node):
    kind: Literal[SyntaxKind.PROPERTY_SIGNATURE] = SyntaxKind.PROPERTY_SIGNATURE
    modifiers: Tuple[Modifier, ...] = ()
    name: "PropertyName"
    question_token: Optional[QuestionToken] = None
    type: Optional["TypeNode"] = None


class ExpressionWithTypeArguments(Node):
    kind: Literal[SyntaxKind.EXPRESSION_WITH_TYPE_ARGUMENTS] = (
        SyntaxKind.EXPRESSION_WITH_TYPE_ARGUMENTS
    )
    expression: Identifier
    type_arguments: Tuple["TypeNode", ...] = ()


class HeritageClause(Node):
    kind: Literal[SyntaxKind.HERITAGE_CLAUSE] = SyntaxKind.HERITAGE_CLAUSE
    token: HeritageToken
    types: Tuple[ExpressionWithTypeArguments, ...]


class EnumMember(Node):
    kind: Literal[SyntaxKind.ENUM_MEMBER] = SyntaxKind.ENUM_MEMBER
    name: "PropertyName"
    initializer: Optional[Union[StringLiteral, NumericLiteral]] = None


class VariableDeclaration(Node):
    kind: Literal[SyntaxKind.VARIABLE_DECLARATION] = SyntaxKind.VARIABLE_DECLARATION
    name: Identifier
    exclamation_token: Optional[ExclamationToken] = None
    type: Optional["TypeNode"] = None
    initializer: Optional["Expression"] = None


class VariableDeclarationList(Node):
    kind: Literal[SyntaxKind.VARIABLE_DECLARATION_LIST] = (
        SyntaxKind.VARIABLE_DECLARATION_LIST
    )
    declarations: Tuple[VariableDeclaration, ...]
    flags: VariableFlags = VariableFlags.VAR


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class InterfaceDeclaration(Node):
    kind: Literal[SyntaxKind.INTERFACE_DECLARATION] = SyntaxKind.INTERFACE_DECLARATION
    modifiers: Tuple[Modifier, ...] = ()
    name: Identifier
    type_parameters: Tuple[TypeParameterDeclaration, ...] = ()
    heritage_clauses: Tuple[HeritageClause, ...] = ()
    members: Tuple[PropertySignature, ...] = ()


class TypeAliasDeclaration(Node):
    kind: Literal[SyntaxKind.TYPE_ALIAS_DECLARATION] = (
        SyntaxKind.TYPE_ALIAS_DECLARATION
    )
    modifiers: Tuple[Modifier, ...] = ()
    name: Identifier
    type_parameters: Tuple[TypeParameterDeclaration, ...] = ()
    type: "TypeNode"


class EnumDeclaration(Node):
    kind: Literal[SyntaxKind.ENUM_DECLARATION] = SyntaxKind.ENUM_DECLARATION
    modifiers: Tuple[Modifier, ...] = ()
    name: Identifier
    members: Tuple[EnumMember, ...] = ()


class VariableStatement(Node):
    kind: Literal[SyntaxKind.VARIABLE_STATEMENT] = SyntaxKind.VARIABLE_STATEMENT
    modifiers: Tuple[Modifier, ...] = ()
    declaration_list: VariableDeclarationList


# ---------------------------------------------------------------------------
# Unions of node kinds
# ---------------------------------------------------------------------------

LiteralValue = Annotated[
    Union[StringLiteral, NumericLiteral, BooleanLiteral, NullLiteral],
    Field(discriminator="kind"),
]

PropertyName = Annotated[
    Union[Identifier, StringLiteral], Field(discriminator="kind")
]

Expression = Annotated[
    Union[
        StringLiteral,
        NumericLiteral,
        BooleanLiteral,
        NullLiteral,
        Identifier,
        ArrayLiteral,
    ],
    Field(discriminator="kind"),
]

TypeNode = Annotated[
    Union[
        KeywordType,
        TypeReference,
        ArrayType,
        TupleType,
        UnionType,
        IntersectionType,
        LiteralType,
        TypeOperator,
        TypeLiteral,
    ],
    Field(discriminator="kind"),
]

Declaration = Annotated[
    Union[
        InterfaceDeclaration,
        TypeAliasDeclaration,
        EnumDeclaration,
        VariableStatement,
    ],
    Field(discriminator="kind"),
]

TYPE_NODE_KINDS = frozenset(
    {
        SyntaxKind.KEYWORD_TYPE,
        SyntaxKind.TYPE_REFERENCE,
        SyntaxKind.ARRAY_TYPE,
        SyntaxKind.TUPLE_TYPE,
        SyntaxKind.UNION_TYPE,
        SyntaxKind.INTERSECTION_TYPE,
        SyntaxKind.LITERAL_TYPE,
        SyntaxKind.TYPE_OPERATOR,
        SyntaxKind.TYPE_LITERAL,
    }
)

for _model in (
    ArrayLiteral,
    TypeReference,
    ArrayType,
    TupleType,
    UnionType,
    IntersectionType,
    LiteralType,
    TypeOperator,
    TypeLiteral,
    TypeParameterDeclaration,
    PropertySignature,
    ExpressionWithTypeArguments,
    HeritageClause,
    EnumMember,
    VariableDeclaration,
    VariableDeclarationList,
    InterfaceDeclaration,
    TypeAliasDeclaration,
    EnumDeclaration,
    VariableStatement,
):
    _model.model_rebuild()

# Model class for each kind; a node is printable only as an instance of it.
NODE_TYPES: Dict[SyntaxKind, Type[Node]] = {
    cls.model_fields["kind"].default: cls for cls in Node.__subclasses__()
}
