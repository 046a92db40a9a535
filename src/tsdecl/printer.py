from functools import lru_cache
from typing import Callable, Dict, Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from tsdecl.errors import UnsupportedNodeKind
from tsdecl.logger import logger
from tsdecl.models import (
    ArrayLiteral,
    ArrayType,
    BooleanLiteral,
    EnumDeclaration,
    EnumMember,
    ExpressionWithTypeArguments,
    HeritageClause,
    Identifier,
    InterfaceDeclaration,
    IntersectionType,
    KeywordType,
    LiteralType,
    Modifier,
    NODE_TYPES,
    Node,
    NumericLiteral,
    PropertySignature,
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
from tsdecl.settings import NewLineKind, PrinterSettings, QuoteStyle


class EmitContext(BaseModel):
    """
    The virtual source file output is anchored to. It only carries layout
    options and holds no symbol information.
    """

    model_config = ConfigDict(frozen=True)

    file_name: str = "generated.ts"
    new_line: str = "\n"
    indent: str = "    "
    quote: str = '"'

    @classmethod
    def from_settings(cls, settings: PrinterSettings) -> "EmitContext":
        return cls(
            file_name=settings.file_name,
            new_line="\r\n" if settings.new_line == NewLineKind.CRLF else "\n",
            indent=" " * settings.indent_size,
            quote="'" if settings.quote_style == QuoteStyle.SINGLE else '"',
        )


# The process-wide anchoring context. Layout overrides are passed explicitly.
DEFAULT_CONTEXT = EmitContext()


_ESCAPES = {
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\v": "\\v",
    "\f": "\\f",
    "\b": "\\b",
    "\\": "\\\\",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
    "\u0085": "\\u0085",
}


def escape_string(text: str, quote: str = '"') -> str:
    """
    Escape *text* for a JavaScript string literal delimited by *quote*.
    """
    out = []
    for i, ch in enumerate(text):
        if ch == quote:
            out.append("\\" + ch)
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch == "\0":
            nxt = text[i + 1 : i + 2]
            out.append("\\x00" if nxt.isdigit() else "\\0")
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


class TextWriter:
    """
    Accumulates output, tracking indentation and whether the cursor is at the
    start of a line.
    """

    def __init__(self, context: EmitContext) -> None:
        self.context = context
        self._parts: list[str] = []
        self._indent = 0
        self._line_start = True
        self._pending_line = False

    @property
    def at_line_start(self) -> bool:
        return self._line_start or self._pending_line

    def _flush_line(self) -> None:
        if self._pending_line:
            self._parts.append(self.context.new_line)
            self._line_start = True
            self._pending_line = False

    def write(self, text: str) -> None:
        if not text:
            return
        self._flush_line()
        if self._line_start:
            self._parts.append(self.context.indent * self._indent)
            self._line_start = False
        self._parts.append(text)

    def write_line(self) -> None:
        # Never produces an empty line.
        if self._pending_line:
            self._flush_line()
        elif not self._line_start:
            self._parts.append(self.context.new_line)
            self._line_start = True

    def end_line(self) -> None:
        """
        End the current line once more text follows. Output that stops here
        gets no trailing newline.
        """
        if not self._line_start:
            self._pending_line = True

    def increase_indent(self) -> None:
        self._indent += 1

    def decrease_indent(self) -> None:
        self._indent -= 1

    def get_text(self) -> str:
        return "".join(self._parts)


class Printer:
    """
    Renders nodes to TypeScript source text. A printer holds no state between
    calls; each call to :meth:`print_node` uses a fresh writer.
    """

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or DEFAULT_CONTEXT
        self._handlers: Dict[SyntaxKind, Callable[[TextWriter, Node], None]] = {
            SyntaxKind.IDENTIFIER: self._emit_identifier,
            SyntaxKind.MODIFIER: self._emit_modifier,
            SyntaxKind.QUESTION_TOKEN: self._token("?"),
            SyntaxKind.EXCLAMATION_TOKEN: self._token("!"),
            SyntaxKind.STRING_LITERAL: self._emit_string_literal,
            SyntaxKind.NUMERIC_LITERAL: self._emit_numeric_literal,
            SyntaxKind.BOOLEAN_LITERAL: self._emit_boolean_literal,
            SyntaxKind.NULL_LITERAL: self._token("null"),
            SyntaxKind.ARRAY_LITERAL: self._emit_array_literal,
            SyntaxKind.KEYWORD_TYPE: self._emit_keyword_type,
            SyntaxKind.TYPE_REFERENCE: self._emit_type_reference,
            SyntaxKind.ARRAY_TYPE: self._emit_array_type,
            SyntaxKind.TUPLE_TYPE: self._emit_tuple_type,
            SyntaxKind.UNION_TYPE: self._emit_union_type,
            SyntaxKind.INTERSECTION_TYPE: self._emit_intersection_type,
            SyntaxKind.LITERAL_TYPE: self._emit_literal_type,
            SyntaxKind.TYPE_OPERATOR: self._emit_type_operator,
            SyntaxKind.TYPE_LITERAL: self._emit_type_literal,
            SyntaxKind.TYPE_PARAMETER: self._emit_type_parameter,
            SyntaxKind.PROPERTY_SIGNATURE: self._emit_property_signature,
            SyntaxKind.EXPRESSION_WITH_TYPE_ARGUMENTS: self._emit_expression_with_type_arguments,
            SyntaxKind.HERITAGE_CLAUSE: self._emit_heritage_clause,
            SyntaxKind.ENUM_MEMBER: self._emit_enum_member,
            SyntaxKind.VARIABLE_DECLARATION: self._emit_variable_declaration,
            SyntaxKind.VARIABLE_DECLARATION_LIST: self._emit_variable_declaration_list,
            SyntaxKind.INTERFACE_DECLARATION: self._emit_interface,
            SyntaxKind.TYPE_ALIAS_DECLARATION: self._emit_type_alias,
            SyntaxKind.ENUM_DECLARATION: self._emit_enum,
            SyntaxKind.VARIABLE_STATEMENT: self._emit_variable_statement,
        }
        missing = set(SyntaxKind) - set(self._handlers)
        if missing:
            raise UnsupportedNodeKind(sorted(k.value for k in missing))

    # --- public API --------------------------------------------------
    def print_node(self, node: Node) -> str:
        writer = TextWriter(self.context)
        self.emit(writer, node)
        text = writer.get_text()
        logger.debug(
            "Printed node",
            kind=getattr(node.kind, "value", node.kind),
            file=self.context.file_name,
            length=len(text),
        )
        return text

    def print_nodes(self, nodes: Iterable[Node]) -> str:
        """
        Print top-level nodes separated by one blank line.
        """
        separator = self.context.new_line * 2
        return separator.join(self.print_node(n) for n in nodes)

    def emit(self, writer: TextWriter, node: Node, suffix: str = "") -> None:
        """
        Emit *node* with its comments. *suffix* (a list separator) is written
        before trailing comments so it stays on the node's line.
        """
        handler = None
        expected = NODE_TYPES.get(getattr(node, "kind", None), ())
        if isinstance(node, Node) and isinstance(node, expected):
            handler = self._handlers.get(node.kind)
        if handler is None:
            kind = getattr(node, "kind", type(node).__name__)
            logger.error("No printing rule for node", kind=kind)
            raise UnsupportedNodeKind(kind)

        for comment in node.leading_comments:
            self._emit_leading_comment(writer, comment)
        handler(writer, node)
        writer.write(suffix)
        for comment in node.trailing_comments:
            self._emit_trailing_comment(writer, comment)

    # --- comments ----------------------------------------------------
    def _comment_text(self, comment: SyntheticComment) -> str:
        if comment.single_line:
            return "//" + comment.text
        return "/*" + comment.text + "*/"

    def _emit_leading_comment(
        self, writer: TextWriter, comment: SyntheticComment
    ) -> None:
        if comment.single_line:
            writer.write_line()
        writer.write(self._comment_text(comment))
        if comment.trailing_newline or comment.single_line:
            writer.write_line()
        else:
            writer.write(" ")

    def _emit_trailing_comment(
        self, writer: TextWriter, comment: SyntheticComment
    ) -> None:
        if not writer.at_line_start:
            writer.write(" ")
        writer.write(self._comment_text(comment))
        # A single-line comment runs to the end of the line.
        if comment.trailing_newline or comment.single_line:
            writer.end_line()

    # --- helpers -----------------------------------------------------
    def _token(self, text: str) -> Callable[[TextWriter, Node], None]:
        def _h(writer: TextWriter, node: Node) -> None:
            writer.write(text)

        return _h

    def _emit_list(
        self,
        writer: TextWriter,
        nodes: Sequence[Node],
        separator: str = ", ",
        wrap: Optional[Callable[[Node], bool]] = None,
    ) -> None:
        for i, node in enumerate(nodes):
            if i:
                writer.write(separator)
            if wrap is not None and wrap(node):
                writer.write("(")
                self.emit(writer, node)
                writer.write(")")
            else:
                self.emit(writer, node)

    def _emit_modifiers(self, writer: TextWriter, modifiers: Sequence[Modifier]) -> None:
        for mod in modifiers:
            self.emit(writer, mod)
            writer.write(" ")

    def _emit_type_arguments(self, writer: TextWriter, args: Sequence[Node]) -> None:
        if args:
            writer.write("<")
            self._emit_list(writer, args)
            writer.write(">")

    def _emit_block(
        self,
        writer: TextWriter,
        members: Sequence[Node],
        separator: str = "",
        optional_if_empty: bool = False,
    ) -> None:
        if not members and optional_if_empty:
            writer.write("{}")
            return
        writer.write("{")
        writer.increase_indent()
        last = len(members) - 1
        for i, member in enumerate(members):
            writer.write_line()
            self.emit(writer, member, separator if i < last else "")
        writer.decrease_indent()
        writer.write_line()
        writer.write("}")

    # --- names and literals ------------------------------------------
    def _emit_identifier(self, writer: TextWriter, node: Identifier) -> None:
        writer.write(node.text)

    def _emit_modifier(self, writer: TextWriter, node: Modifier) -> None:
        writer.write(node.keyword.value)

    def _emit_string_literal(self, writer: TextWriter, node: StringLiteral) -> None:
        quote = self.context.quote
        writer.write(quote + escape_string(node.value, quote) + quote)

    def _emit_numeric_literal(self, writer: TextWriter, node: NumericLiteral) -> None:
        writer.write(node.text)

    def _emit_boolean_literal(self, writer: TextWriter, node: BooleanLiteral) -> None:
        writer.write("true" if node.value else "false")

    def _emit_array_literal(self, writer: TextWriter, node: ArrayLiteral) -> None:
        writer.write("[")
        self._emit_list(writer, node.elements)
        writer.write("]")

    # --- types -------------------------------------------------------
    def _emit_keyword_type(self, writer: TextWriter, node: KeywordType) -> None:
        writer.write(node.keyword.value)

    def _emit_type_reference(self, writer: TextWriter, node: TypeReference) -> None:
        self.emit(writer, node.type_name)
        self._emit_type_arguments(writer, node.type_arguments)

    def _emit_array_type(self, writer: TextWriter, node: ArrayType) -> None:
        element = node.element_type
        if element.kind in (
            SyntaxKind.UNION_TYPE,
            SyntaxKind.INTERSECTION_TYPE,
            SyntaxKind.TYPE_OPERATOR,
        ):
            writer.write("(")
            self.emit(writer, element)
            writer.write(")")
        else:
            self.emit(writer, element)
        writer.write("[]")

    def _emit_tuple_type(self, writer: TextWriter, node: TupleType) -> None:
        writer.write("[")
        self._emit_list(writer, node.elements)
        writer.write("]")

    def _emit_union_type(self, writer: TextWriter, node: UnionType) -> None:
        self._emit_list(writer, node.types, separator=" | ")

    def _emit_intersection_type(
        self, writer: TextWriter, node: IntersectionType
    ) -> None:
        self._emit_list(
            writer,
            node.types,
            separator=" & ",
            wrap=lambda t: t.kind == SyntaxKind.UNION_TYPE,
        )

    def _emit_literal_type(self, writer: TextWriter, node: LiteralType) -> None:
        self.emit(writer, node.literal)

    def _emit_type_operator(self, writer: TextWriter, node: TypeOperator) -> None:
        writer.write(node.operator.value + " ")
        if node.type.kind in (SyntaxKind.UNION_TYPE, SyntaxKind.INTERSECTION_TYPE):
            writer.write("(")
            self.emit(writer, node.type)
            writer.write(")")
        else:
            self.emit(writer, node.type)

    def _emit_type_literal(self, writer: TextWriter, node: TypeLiteral) -> None:
        self._emit_block(writer, node.members, optional_if_empty=True)

    # --- members and clauses -----------------------------------------
    def _emit_type_parameter(
        self, writer: TextWriter, node: TypeParameterDeclaration
    ) -> None:
        self._emit_modifiers(writer, node.modifiers)
        self.emit(writer, node.name)
        if node.constraint is not None:
            writer.write(" extends ")
            self.emit(writer, node.constraint)
        if node.default is not None:
            writer.write(" = ")
            self.emit(writer, node.default)

    def _emit_property_signature(
        self, writer: TextWriter, node: PropertySignature
    ) -> None:
        self._emit_modifiers(writer, node.modifiers)
        self.emit(writer, node.name)
        if node.question_token is not None:
            self.emit(writer, node.question_token)
        if node.type is not None:
            writer.write(": ")
            self.emit(writer, node.type)
        writer.write(";")

    def _emit_expression_with_type_arguments(
        self, writer: TextWriter, node: ExpressionWithTypeArguments
    ) -> None:
        self.emit(writer, node.expression)
        self._emit_type_arguments(writer, node.type_arguments)

    def _emit_heritage_clause(self, writer: TextWriter, node: HeritageClause) -> None:
        writer.write(node.token.value + " ")
        self._emit_list(writer, node.types)

    def _emit_enum_member(self, writer: TextWriter, node: EnumMember) -> None:
        self.emit(writer, node.name)
        if node.initializer is not None:
            writer.write(" = ")
            self.emit(writer, node.initializer)

    def _emit_variable_declaration(
        self, writer: TextWriter, node: VariableDeclaration
    ) -> None:
        self.emit(writer, node.name)
        if node.exclamation_token is not None:
            self.emit(writer, node.exclamation_token)
        if node.type is not None:
            writer.write(": ")
            self.emit(writer, node.type)
        if node.initializer is not None:
            writer.write(" = ")
            self.emit(writer, node.initializer)

    def _emit_variable_declaration_list(
        self, writer: TextWriter, node: VariableDeclarationList
    ) -> None:
        writer.write(node.flags.value + " ")
        self._emit_list(writer, node.declarations)

    # --- declarations ------------------------------------------------
    def _emit_type_parameters(
        self, writer: TextWriter, params: Sequence[TypeParameterDeclaration]
    ) -> None:
        if params:
            writer.write("<")
            self._emit_list(writer, params)
            writer.write(">")

    def _emit_interface(self, writer: TextWriter, node: InterfaceDeclaration) -> None:
        self._emit_modifiers(writer, node.modifiers)
        writer.write("interface ")
        self.emit(writer, node.name)
        self._emit_type_parameters(writer, node.type_parameters)
        for clause in node.heritage_clauses:
            writer.write(" ")
            self.emit(writer, clause)
        writer.write(" ")
        self._emit_block(writer, node.members)

    def _emit_type_alias(self, writer: TextWriter, node: TypeAliasDeclaration) -> None:
        self._emit_modifiers(writer, node.modifiers)
        writer.write("type ")
        self.emit(writer, node.name)
        self._emit_type_parameters(writer, node.type_parameters)
        writer.write(" = ")
        self.emit(writer, node.type)
        writer.write(";")

    def _emit_enum(self, writer: TextWriter, node: EnumDeclaration) -> None:
        self._emit_modifiers(writer, node.modifiers)
        writer.write("enum ")
        self.emit(writer, node.name)
        writer.write(" ")
        self._emit_block(writer, node.members, separator=",")

    def _emit_variable_statement(
        self, writer: TextWriter, node: VariableStatement
    ) -> None:
        self._emit_modifiers(writer, node.modifiers)
        self.emit(writer, node.declaration_list)
        writer.write(";")


@lru_cache(maxsize=None)
def get_printer() -> Printer:
    return Printer()


def print_node(node: Node) -> str:
    """
    Render *node* to TypeScript using the process-wide emit context.
    """
    return get_printer().print_node(node)


def print_nodes(nodes: Iterable[Node]) -> str:
    return get_printer().print_nodes(nodes)
