"""
Pydantic description of the payload a generation driver hands over: already
resolved declarations with their fields, generic parameters and heritage. Each
model converts itself to nodes through :mod:`tsdecl.factory`.
"""
import json
from abc import ABC, abstractmethod
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from tsdecl import factory
from tsdecl.models import Node
from tsdecl.printer import Printer, get_printer

ScalarValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, None]


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


class KeywordSpec(BaseModel):
    kind: Literal["keyword"] = "keyword"
    name: str

    def to_node(self) -> Node:
        return factory.keyword_type(self.name)


class ReferenceSpec(BaseModel):
    kind: Literal["reference"] = "reference"
    name: str
    arguments: List["TypeSpec"] = Field(default_factory=list)

    def to_node(self) -> Node:
        return factory.reference(self.name, [a.to_node() for a in self.arguments])


class ArraySpec(BaseModel):
    kind: Literal["array"] = "array"
    element: "TypeSpec"

    def to_node(self) -> Node:
        return factory.array_type(self.element.to_node())


class TupleSpec(BaseModel):
    kind: Literal["tuple"] = "tuple"
    elements: List["TypeSpec"]

    def to_node(self) -> Node:
        return factory.tuple_type([e.to_node() for e in self.elements])


class UnionSpec(BaseModel):
    kind: Literal["union"] = "union"
    types: List["TypeSpec"]

    def to_node(self) -> Node:
        return factory.union_type([t.to_node() for t in self.types])


class IntersectionSpec(BaseModel):
    kind: Literal["intersection"] = "intersection"
    types: List["TypeSpec"]

    def to_node(self) -> Node:
        return factory.intersection_type([t.to_node() for t in self.types])


class LiteralSpec(BaseModel):
    kind: Literal["literal"] = "literal"
    value: ScalarValue = None

    def to_node(self) -> Node:
        return factory.literal_type(self.value)


class OperatorSpec(BaseModel):
    kind: Literal["operator"] = "operator"
    operator: str
    type: "TypeSpec"

    def to_node(self) -> Node:
        return factory.type_operator(self.operator, self.type.to_node())


class ObjectSpec(BaseModel):
    kind: Literal["object"] = "object"
    fields: List["FieldSpec"] = Field(default_factory=list)

    def to_node(self) -> Node:
        return factory.type_literal([f.to_node() for f in self.fields])


TypeSpec = Annotated[
    Union[
        KeywordSpec,
        ReferenceSpec,
        ArraySpec,
        TupleSpec,
        UnionSpec,
        IntersectionSpec,
        LiteralSpec,
        OperatorSpec,
        ObjectSpec,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    name: str
    type: TypeSpec
    optional: bool = False
    modifiers: List[str] = Field(default_factory=list)
    comment: Optional[str] = None  # emitted as a leading `// comment`

    def to_node(self) -> Node:
        node = factory.property_signature(
            self.modifiers, self.name, self.optional, self.type.to_node()
        )
        if self.comment:
            node = factory.add_leading_comment(node, self.comment)
        return node


class TypeParameterSpec(BaseModel):
    name: str
    constraint: Optional[TypeSpec] = None
    default: Optional[TypeSpec] = None
    modifiers: List[str] = Field(default_factory=list)

    def to_node(self) -> Node:
        return factory.type_parameter(
            self.modifiers,
            self.name,
            self.constraint.to_node() if self.constraint else None,
            self.default.to_node() if self.default else None,
        )


class HeritageSpec(BaseModel):
    token: Literal["extends", "implements"] = "extends"
    types: List[ReferenceSpec]

    def to_node(self) -> Node:
        return factory.heritage_clause(self.token, [t.to_node() for t in self.types])


class EnumMemberSpec(BaseModel):
    name: str
    value: Union[StrictInt, StrictFloat, StrictStr, None] = None
    comment: Optional[str] = None

    def to_node(self) -> Node:
        node = factory.enum_member(self.name, self.value)
        if self.comment:
            node = factory.add_leading_comment(node, self.comment)
        return node


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class _DeclarationSpec(BaseModel, ABC):
    name: str
    modifiers: List[str] = Field(default_factory=list)
    comment: Optional[str] = None

    @abstractmethod
    def _build(self) -> Node: ...

    def to_node(self) -> Node:
        node = self._build()
        if self.comment:
            node = factory.add_leading_comment(node, self.comment)
        return node


class InterfaceSpec(_DeclarationSpec):
    kind: Literal["interface"] = "interface"
    type_parameters: List[TypeParameterSpec] = Field(default_factory=list)
    heritage: List[HeritageSpec] = Field(default_factory=list)
    fields: List[FieldSpec] = Field(default_factory=list)

    def _build(self) -> Node:
        return factory.interface_declaration(
            self.modifiers,
            self.name,
            [p.to_node() for p in self.type_parameters],
            [h.to_node() for h in self.heritage],
            [f.to_node() for f in self.fields],
        )


class AliasSpec(_DeclarationSpec):
    kind: Literal["alias"] = "alias"
    type_parameters: List[TypeParameterSpec] = Field(default_factory=list)
    type: TypeSpec

    def _build(self) -> Node:
        return factory.type_alias_declaration(
            self.modifiers,
            self.name,
            [p.to_node() for p in self.type_parameters],
            self.type.to_node(),
        )


class EnumSpec(_DeclarationSpec):
    kind: Literal["enum"] = "enum"
    members: List[EnumMemberSpec] = Field(default_factory=list)

    def _build(self) -> Node:
        return factory.enum_declaration(
            self.modifiers, self.name, [m.to_node() for m in self.members]
        )


class VariableSpec(_DeclarationSpec):
    kind: Literal["variable"] = "variable"
    flags: Literal["var", "let", "const"] = "const"
    type: Optional[TypeSpec] = None
    value: Union[ScalarValue, List[ScalarValue]] = None

    def _build(self) -> Node:
        declaration = factory.variable_declaration(
            self.name,
            False,
            self.type.to_node() if self.type else None,
            self.value,
        )
        return factory.variable_statement(
            self.modifiers,
            factory.variable_declaration_list([declaration], self.flags),
        )


DeclarationSpec = Annotated[
    Union[InterfaceSpec, AliasSpec, EnumSpec, VariableSpec],
    Field(discriminator="kind"),
]


class Payload(BaseModel):
    declarations: List[DeclarationSpec] = Field(default_factory=list)


for _model in (
    ReferenceSpec,
    ArraySpec,
    TupleSpec,
    UnionSpec,
    IntersectionSpec,
    OperatorSpec,
    ObjectSpec,
    FieldSpec,
    TypeParameterSpec,
    HeritageSpec,
    InterfaceSpec,
    AliasSpec,
    VariableSpec,
    Payload,
):
    _model.model_rebuild()


def parse_payload(data: Any) -> Payload:
    """
    Parse a payload given as a JSON string, a list of declarations, a dict
    with a ``declarations`` key, or a single declaration dict.
    """
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if isinstance(data, Payload):
        return data
    if isinstance(data, list):
        data = {"declarations": data}
    elif isinstance(data, dict) and "declarations" not in data:
        data = {"declarations": [data]}
    return Payload.model_validate(data)


def load_declarations(data: Any) -> List[Node]:
    payload = parse_payload(data)
    return [d.to_node() for d in payload.declarations]


def render(data: Any, printer: Optional[Printer] = None) -> str:
    """
    Build and print every declaration in *data*, separated by blank lines.
    """
    return (printer or get_printer()).print_nodes(load_declarations(data))
