"""
Wyst Front-End Pipeline
=======================

Runs the complete front end over a source text:

    Source → Scanner → Token buffer → Parser → Nodes + Symbol table

Usage
-----
Command line:
    $ wyst ast main.wy

Programmatic:
    >>> from wyst.frontend import parse_source
    >>> result = parse_source('void main() { }', "main.wy")
    >>> [node.type.name for node in result.nodes]
    ['VOID_FUNCTION_DECLARATION']
    >>> result.symbols.names()
    ['main']

Configuration
-------------
FrontendOptions holds the settings. They can come from:
- Default values (defined here)
- Environment variables (FrontendOptions.from_env)
- Command-line flags (the wyst CLI overrides the environment)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging
import os

from wyst.frontend.ast import Ast, declarations
from wyst.frontend.lexer import Lexer, Token
from wyst.frontend.parser import Parser
from wyst.frontend.symbols import SymbolTable

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(text: str) -> Optional[bool]:
    lowered = text.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        json_mode: Parse 'key : value' pairs as JSON nodes before any other
            rule (for data files written in the JSON-like literal syntax)
        color: Style rendered node tags for a terminal
        encoding: Text encoding used when reading source files
    """
    json_mode: bool = False
    color: bool = True
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "FrontendOptions":
        """
        Create options from environment variables.

        Environment variables (all optional):
            WYST_JSON_MODE: Enable JSON mode (1/0, true/false, yes/no, on/off)
            WYST_COLOR: Enable colored output (same values)
            WYST_ENCODING: Source file encoding

        Unrecognized values are ignored and the default is kept.
        """
        options = cls()

        if (value := os.environ.get("WYST_JSON_MODE")) is not None:
            parsed = _parse_bool(value)
            if parsed is not None:
                options.json_mode = parsed
            else:
                logger.warning(f"Ignoring invalid WYST_JSON_MODE value {value!r}")

        if (value := os.environ.get("WYST_COLOR")) is not None:
            parsed = _parse_bool(value)
            if parsed is not None:
                options.color = parsed
            else:
                logger.warning(f"Ignoring invalid WYST_COLOR value {value!r}")

        if encoding := os.environ.get("WYST_ENCODING"):
            options.encoding = encoding

        return options


@dataclass
class ParseResult:
    """
    Everything one front-end run produced.

    Attributes:
        filename: Source filename
        tokens: The scanner's token buffer
        nodes: The parser's node stream
        symbols: Declarations registered while parsing
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    nodes: list[Ast] = field(default_factory=list)
    symbols: SymbolTable = field(default_factory=SymbolTable)

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def declarations(self) -> list[Ast]:
        return declarations(self.nodes)


class Frontend:
    """
    Scanner and parser wired together.

    Example:
        frontend = Frontend(FrontendOptions(json_mode=True))
        result = frontend.parse_file("config.wy")
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def tokenize(self, source: str, filename: str = "<input>") -> list[Token]:
        """
        Raises:
            WystSyntaxError: If the text cannot be tokenized
        """
        return list(Lexer(source, filename).tokenize())

    def parse_source(self, source: str, filename: str = "<input>") -> ParseResult:
        """
        Tokenize and parse source text with a fresh symbol table.

        Raises:
            WystSyntaxError: If the text cannot be tokenized
        """
        tokens = self.tokenize(source, filename)
        symbols = SymbolTable()
        nodes = Parser(tokens, symbols, json_mode=self.options.json_mode).parse()

        logger.info(f"{filename}: {len(tokens)} tokens, {len(nodes)} nodes, {len(symbols)} symbols")
        return ParseResult(filename=filename, tokens=tokens, nodes=nodes, symbols=symbols)

    def parse_file(self, path: Union[str, Path]) -> ParseResult:
        """
        Read and parse a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            WystSyntaxError: If the text cannot be tokenized
        """
        path = Path(path)
        source = path.read_text(encoding=self.options.encoding)
        return self.parse_source(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    json_mode: bool = False,
) -> ParseResult:
    """Parse source text with default options."""
    return Frontend(FrontendOptions(json_mode=json_mode)).parse_source(source, filename)


def parse_file(path: Union[str, Path], json_mode: bool = False) -> ParseResult:
    """Parse a source file with default options."""
    return Frontend(FrontendOptions(json_mode=json_mode)).parse_file(path)
