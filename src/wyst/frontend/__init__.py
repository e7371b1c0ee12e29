"""
Wyst Front End
==============

This package implements the front end of the Wyst language: it turns source
text into a flat stream of classified syntax nodes and fills a symbol table
used by editor tooling (outline, completion, documentation extraction).

Pipeline
--------
    Source → Scanner → Token buffer → Parser → Nodes + Symbol table

- The scanner (lexer.py) matches every bracket pair up front, so each
  '(...)', '{...}' and '[...]' group reaches the parser as one token.
- The parser (parser.py) walks the buffer once with a priority-ordered set
  of lookahead rules and never builds a nested tree.
- Declarations are registered in the symbol table (symbols.py) at the
  moment they are recognized, with the preceding comment as their doc.

Usage
-----
>>> from wyst.frontend import parse_source
>>> result = parse_source('''
... // Entry point
... void main() { }
... ''')
>>> result.symbols.find("main")[0].doc
'Entry point'

Author: Wyst Contributors
"""

# =============================================================================
# Version Information
# =============================================================================

__version__ = "0.1.0"

# =============================================================================
# Public API Imports
# =============================================================================

from wyst.frontend.pipeline import (
    Frontend,
    FrontendOptions,
    ParseResult,
    parse_source,
    parse_file,
)
from wyst.frontend.errors import (
    FrontendError,
    WystSyntaxError,
    UnterminatedStringError,
    UnterminatedCommentError,
    UnterminatedGroupError,
    UnbalancedDelimiterError,
    ParserInvariantError,
)
from wyst.frontend.lexer import Lexer, Token, TokenType, Position, tokenize
from wyst.frontend.parser import Parser
from wyst.frontend.ast import Ast, AstType, AstPrinter, is_decl, declarations
from wyst.frontend.symbols import Symbol, SymbolKind, SymbolSink, SymbolTable
from wyst.frontend.outline import OutlineEntry, build_outline
from wyst.frontend.completion import COMPLETION_TRIGGERS, CompletionItem, complete

__all__ = [
    # Version
    "__version__",
    # Main API
    "Frontend",
    "FrontendOptions",
    "ParseResult",
    "parse_source",
    "parse_file",
    # Errors
    "FrontendError",
    "WystSyntaxError",
    "UnterminatedStringError",
    "UnterminatedCommentError",
    "UnterminatedGroupError",
    "UnbalancedDelimiterError",
    "ParserInvariantError",
    # Scanner
    "Lexer",
    "Token",
    "TokenType",
    "Position",
    "tokenize",
    # Parser
    "Parser",
    # Nodes
    "Ast",
    "AstType",
    "AstPrinter",
    "is_decl",
    "declarations",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolSink",
    "SymbolTable",
    # Tooling
    "OutlineEntry",
    "build_outline",
    "COMPLETION_TRIGGERS",
    "CompletionItem",
    "complete",
]
