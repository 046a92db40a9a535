"""
tsdecl: build TypeScript declaration syntax trees and print them to source.
"""
from tsdecl.errors import (
    DeclarationError,
    EmptyHeritageList,
    EmptyTypeList,
    InvalidComment,
    InvalidIdentifier,
    InvalidLiteral,
    MalformedModifier,
    ReparseError,
    UnknownKeyword,
    UnsupportedNodeKind,
)
from tsdecl.printer import EmitContext, Printer, print_node, print_nodes
from tsdecl.tokens import ModifierPosition

__all__ = [
    "DeclarationError",
    "EmptyHeritageList",
    "EmptyTypeList",
    "InvalidComment",
    "InvalidIdentifier",
    "InvalidLiteral",
    "MalformedModifier",
    "ReparseError",
    "UnknownKeyword",
    "UnsupportedNodeKind",
    "EmitContext",
    "Printer",
    "print_node",
    "print_nodes",
    "ModifierPosition",
]
__version__ = "0.1.0"
