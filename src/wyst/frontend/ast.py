"""
Wyst Syntax Node Definitions
============================

The parser produces a FLAT list of classified nodes, not a tree. Each node
is a tag plus the raw tokens that matter for the construct it represents.
A function declaration, for instance, keeps its name token, its ROUND
parameter group and its CURLY body group; the groups are never parsed.

Node Tags
---------
| Tag                       | Source shape               |
|---------------------------|----------------------------|
| REF                       | &name                      |
| FUNCTION_DECLARATION      | int add(...) {...}         |
| VOID_FUNCTION_DECLARATION | void main(...) {...}       |
| STRUCT_DECLARATION        | struct Point {...}         |
| STRUCT_CALL               | Point {...}                |
| STRUCT_VAR                | Point origin {...}         |
| NAMESPACE                 | namespace io {...}         |
| IMPL                      | impl Point {...}           |
| VARIABLE_DECLARATION      | int x / Vec<int> v         |
| POINTER_DECLARATION       | int * p                    |
| MUT_VARIABLE_DECLARATION  | reserved, never produced   |
| STATE3                    | if (...) {...}             |
| STATE2                    | else {...}                 |
| INCLUDE                   | #include <path>            |
| INCLUDE_LOCAL             | #include "path"            |
| CODE_BLOCK                | cb {...}                   |
| JSON                      | key : value (JSON mode)    |
| STATIC_EXECUTION          | $[...]                     |
| OTHER                     | anything else, unchanged   |
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable

import click

from wyst.frontend.lexer import Token


# =============================================================================
# Node Tags
# =============================================================================

class AstType(Enum):
    """Closed set of node classifications."""
    REF = auto()
    FUNCTION_DECLARATION = auto()
    STRUCT_DECLARATION = auto()
    STRUCT_CALL = auto()
    STRUCT_VAR = auto()
    VOID_FUNCTION_DECLARATION = auto()
    NAMESPACE = auto()
    VARIABLE_DECLARATION = auto()
    POINTER_DECLARATION = auto()
    # No grammar rule produces this yet; kept so consumers can match on it.
    MUT_VARIABLE_DECLARATION = auto()
    STATE3 = auto()
    STATE2 = auto()
    INCLUDE = auto()
    INCLUDE_LOCAL = auto()
    CODE_BLOCK = auto()
    JSON = auto()
    IMPL = auto()
    STATIC_EXECUTION = auto()
    OTHER = auto()


DECLARATION_TYPES = frozenset({
    AstType.FUNCTION_DECLARATION,
    AstType.VOID_FUNCTION_DECLARATION,
    AstType.NAMESPACE,
    AstType.VARIABLE_DECLARATION,
    AstType.POINTER_DECLARATION,
    AstType.MUT_VARIABLE_DECLARATION,
    AstType.STRUCT_DECLARATION,
})


# =============================================================================
# Node
# =============================================================================

@dataclass
class Ast:
    """
    One classified construct.

    Attributes:
        tokens: The captured tokens, in source order
        type: The node tag
    """
    tokens: list[Token] = field(default_factory=list)
    type: AstType = AstType.OTHER

    @property
    def is_declaration(self) -> bool:
        return is_decl(self)

    def __str__(self) -> str:
        return self.render(color=False)

    def render(self, color: bool = True) -> str:
        """
        Render the node as a multi-line listing.

            VARIABLE_DECLARATION: [
                Token(IDENTIFIER, 'x', 1:5)
            ]

        With color=True the tag name is styled for a terminal.
        """
        header = f"{self.type.name}:"
        if color:
            header = click.style(header, fg="cyan")

        lines = [f"{header} ["]
        last = len(self.tokens) - 1
        for i, token in enumerate(self.tokens):
            separator = "," if i < last else ""
            lines.append(f"    {token!r}{separator}")
        lines.append("]")
        return "\n".join(lines)


def is_decl(ast: Ast) -> bool:
    """Return True if the node declares a named entity."""
    return ast.type in DECLARATION_TYPES


def declarations(nodes: Iterable[Ast]) -> list[Ast]:
    """Filter a node stream down to its declaration nodes."""
    return [node for node in nodes if is_decl(node)]


# =============================================================================
# Debug Printer
# =============================================================================

class AstPrinter:
    """
    Pretty printer for node streams.

    Usage:
        printer = AstPrinter(color=False)
        print(printer.print(nodes))
    """

    def __init__(self, color: bool = False):
        self.color = color

    def print(self, nodes: Iterable[Ast]) -> str:
        """Render every node and return the joined text."""
        return "\n".join(node.render(color=self.color) for node in nodes)
