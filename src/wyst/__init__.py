"""
Wyst - Language Front End and Editor Tooling
============================================

This package provides the front end of the Wyst programming language and
the tooling built on top of it.

Main Components
---------------
- **frontend**: scanner, token-stream parser and symbol table
    Converts source text into classified syntax nodes and records every
    declaration with its position and doc comment

- **cli**: the `wyst` command
    Dumps tokens, nodes, symbols, outlines and completion suggestions

Quick Start
-----------
    >>> from wyst import parse_source
    >>> result = parse_source("struct Point { int x; }")
    >>> result.nodes[0].type.name
    'STRUCT_DECLARATION'

Or use the command-line tool:
    $ wyst ast main.wy
    $ wyst outline main.wy
"""

__version__ = "0.1.0"
__author__ = "Wyst Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from wyst.errors import WystError, SourceLocation
from wyst.frontend import (
    Frontend,
    FrontendOptions,
    ParseResult,
    parse_source,
    parse_file,
    FrontendError,
    WystSyntaxError,
    ParserInvariantError,
    Token,
    TokenType,
    Ast,
    AstType,
    SymbolTable,
    is_decl,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Exception hierarchy
    "WystError",
    "SourceLocation",
    "FrontendError",
    "WystSyntaxError",
    "ParserInvariantError",
    # Front end
    "Frontend",
    "FrontendOptions",
    "ParseResult",
    "parse_source",
    "parse_file",
    "Token",
    "TokenType",
    "Ast",
    "AstType",
    "SymbolTable",
    "is_decl",
]
