"""
Wyst Scanner (Tokenizer)
========================

This module converts Wyst source text into the flat token buffer consumed
by the parser.

The scanner does the bracket matching up front: every '(...)', '{...}' and
'[...]' group is emitted as ONE token whose value is the text between the
delimiters. The parser never looks inside a group, so a function body is a
single CURLY token no matter how large it is.

Token Categories
----------------
| Type             | Example              | Value                   |
|------------------|----------------------|-------------------------|
| IDENTIFIER       | main, int, void      | the name                |
| KEYWORD          | cb, struct, return   | the word                |
| KEYWORD1         | if, while, for       | the word (takes (...) {...}) |
| KEYWORD2         | else, loop, do       | the word (takes {...})  |
| CURLY            | { a = 1; }           | " a = 1; "              |
| ROUND            | (int x)              | "int x"                 |
| SQUARE           | [1, 2]               | "1, 2"                  |
| ANGLE            | Vec<int>             | "int" (only right after an identifier) |
| INCLUDE          | #include <io.h>      | the whole directive     |
| STATIC_EXECUTION | $[ ... ]             | "$"                     |
| COMMENT          | // note              | "note"                  |
| STRING           | "hi\\n", 'c'         | resolved text           |
| NUMBER           | 42, 3.5              | the digits              |
| SYMBOL           | & * : ; , = ::       | the operator            |

Example Usage
-------------
>>> from wyst.frontend.lexer import Lexer
>>> for token in Lexer("void main() { }", "main.wy").tokenize():
...     print(token)
Token(IDENTIFIER, 'void', 1:1)
Token(IDENTIFIER, 'main', 1:6)
Token(ROUND, '', 1:10)
Token(CURLY, ' ', 1:13)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from wyst.errors import SourceLocation
from wyst.frontend.errors import (
    WystSyntaxError,
    UnterminatedStringError,
    UnterminatedCommentError,
    UnterminatedGroupError,
    UnbalancedDelimiterError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Classification tags attached to every token."""

    # === Names and Reserved Words ===
    IDENTIFIER = auto()         # Names, including type names like int/void
    KEYWORD = auto()            # Plain reserved words (cb, struct, return...)
    KEYWORD1 = auto()           # Reserved words followed by (...) {...}
    KEYWORD2 = auto()           # Reserved words followed by {...}

    # === Pre-matched Groups ===
    CURLY = auto()              # { ... }
    ROUND = auto()              # ( ... )
    SQUARE = auto()             # [ ... ]
    ANGLE = auto()              # < ... > directly after an identifier

    # === Directives ===
    INCLUDE = auto()            # #include line
    STATIC_EXECUTION = auto()   # $ marker before a [ ... ] group

    # === Literals and Trivia ===
    COMMENT = auto()            # // or /* */ text
    STRING = auto()             # "..." or 'c'
    NUMBER = auto()             # 42, 3.14
    SYMBOL = auto()             # Operators and punctuation


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    # Statement heads taking a condition and a body
    "if": TokenType.KEYWORD1,
    "elif": TokenType.KEYWORD1,
    "while": TokenType.KEYWORD1,
    "for": TokenType.KEYWORD1,
    "switch": TokenType.KEYWORD1,
    "match": TokenType.KEYWORD1,

    # Statement heads taking only a body
    "else": TokenType.KEYWORD2,
    "loop": TokenType.KEYWORD2,
    "do": TokenType.KEYWORD2,
    "defer": TokenType.KEYWORD2,
    "unsafe": TokenType.KEYWORD2,

    # Everything else that is reserved
    "cb": TokenType.KEYWORD,
    "struct": TokenType.KEYWORD,
    "namespace": TokenType.KEYWORD,
    "impl": TokenType.KEYWORD,
    "return": TokenType.KEYWORD,
    "break": TokenType.KEYWORD,
    "continue": TokenType.KEYWORD,
    "mut": TokenType.KEYWORD,
    "const": TokenType.KEYWORD,
    "pub": TokenType.KEYWORD,
    "use": TokenType.KEYWORD,
}

# Two-character operators, matched before single characters
MULTI_SYMBOLS = ("::", "->", "==", "!=", "<=", ">=", "&&", "||", "+=", "-=")


# =============================================================================
# Token Data Classes
# =============================================================================

@dataclass(frozen=True)
class Position:
    """Line and column of a token, as forwarded to the symbol table."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    A single token from Wyst source.

    Attributes:
        type: The TokenType classification
        value: Token text (inner text for bracket groups)
        line: Line number in source
        column: Column number in source
    """
    type: TokenType
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)

    def is_group(self) -> bool:
        """Return True for the pre-matched bracket tokens."""
        return self.type in (
            TokenType.CURLY,
            TokenType.ROUND,
            TokenType.SQUARE,
            TokenType.ANGLE,
        )


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Wyst source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    ESCAPE_SEQUENCES = {
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "\\": "\\",
        '"': '"',
        "'": "'",
        "0": "\0",
    }

    GROUPS = {
        "(": (")", TokenType.ROUND),
        "{": ("}", TokenType.CURLY),
        "[": ("]", TokenType.SQUARE),
    }
    CLOSERS = frozenset(")}]")
    QUOTES = "\"'"

    # Characters allowed between the brackets of a generic argument list;
    # no '&', so 'a<b && c>d' scans as a comparison
    ANGLE_CHARS = IDENT_CHARS + " ,*:<>[]"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = line_number
        self._column = 1
        self._line_start_pos = 0

        # Source offset right after the last identifier; '<' is only an
        # ANGLE group when it starts exactly there.
        self._ident_end = -1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order

        Raises:
            WystSyntaxError: If the text cannot be tokenized
        """
        while True:
            self._skip_whitespace()
            if self._at_end():
                break
            yield self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in " \t\r\n":
            self._advance()

    def _read_until_newline(self) -> str:
        chars = []
        while not self._at_end() and self._peek() != "\n":
            chars.append(self._advance())
        return "".join(chars)

    # =========================================================================
    # Error Helpers
    # =========================================================================

    def _source_line(self, line_start: int) -> str:
        line_end = self.source.find("\n", line_start)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start:line_end]

    def _location(self, line: int, column: int, length: int = 1) -> SourceLocation:
        return SourceLocation(self.filename, line, column, length)

    def _rest_of_line(self, line: int, column: int, line_start: int) -> SourceLocation:
        """Span from column to the end of the line starting at line_start."""
        length = len(self._source_line(line_start)) - (column - 1)
        return self._location(line, column, max(length, 1))

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        line, column = self._line, self._column
        char = self._peek()

        if char == "/" and self._peek(1) == "/":
            return self._scan_line_comment(line, column)

        if char == "/" and self._peek(1) == "*":
            return self._scan_block_comment(line, column)

        if char == "#" and self.source.startswith("#include", self._pos):
            text = self._read_until_newline().rstrip()
            return Token(TokenType.INCLUDE, text, line, column)

        if char in self.IDENT_START:
            return self._scan_identifier(line, column)

        if char.isdigit():
            return self._scan_number(line, column)

        if char in self.QUOTES:
            return self._scan_string(line, column)

        if char == "$" and self._peek(1) == "[":
            self._advance()
            return Token(TokenType.STATIC_EXECUTION, "$", line, column)

        if char in self.GROUPS:
            return self._scan_group(line, column)

        if char == "<" and self._pos == self._ident_end:
            angle = self._scan_angle(line, column)
            if angle is not None:
                return angle

        if char in self.CLOSERS:
            raise UnbalancedDelimiterError(
                char,
                self._location(line, column),
                self._source_line(self._line_start_pos),
            )

        return self._scan_symbol(line, column)

    def _scan_line_comment(self, line: int, column: int) -> Token:
        self._advance()
        self._advance()
        text = self._read_until_newline()
        return Token(TokenType.COMMENT, text.strip(), line, column)

    def _scan_block_comment(self, line: int, column: int) -> Token:
        start = self._pos
        self._skip_block_comment(line, column, self._line_start_pos)
        # Drop the /* and */ markers
        text = self.source[start + 2:self._pos - 2]
        return Token(TokenType.COMMENT, text.strip(), line, column)

    def _skip_block_comment(self, line: int, column: int, line_start: int) -> None:
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise UnterminatedCommentError(
            self._location(line, column, 2),
            self._source_line(line_start),
        )

    def _scan_identifier(self, line: int, column: int) -> Token:
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        self._ident_end = self._pos

        return Token(KEYWORDS.get(name, TokenType.IDENTIFIER), name, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        chars = []
        while self._peek().isdigit():
            chars.append(self._advance())

        if self._peek() == "." and self._peek(1).isdigit():
            chars.append(self._advance())
            while self._peek().isdigit():
                chars.append(self._advance())

        return Token(TokenType.NUMBER, "".join(chars), line, column)

    def _scan_string(self, line: int, column: int) -> Token:
        """Scan a "..." string or a 'c' character literal; both become STRING."""
        line_start = self._line_start_pos
        quote = self._advance()

        chars = []
        while not self._at_end():
            char = self._peek()

            if char == quote:
                self._advance()
                return Token(TokenType.STRING, "".join(chars), line, column)

            if char == "\n":
                break

            if char == "\\":
                self._advance()
                escape = self._advance()
                # Unknown escapes keep their backslash
                chars.append(self.ESCAPE_SEQUENCES.get(escape, "\\" + escape))
                continue

            chars.append(self._advance())

        raise UnterminatedStringError(
            self._rest_of_line(line, column, line_start),
            self._source_line(line_start),
            quote,
        )

    def _scan_group(self, line: int, column: int) -> Token:
        """
        Scan a bracket group up to its matching closer.

        Nested groups of any kind are tracked with a stack of expected
        closers. Strings and comments inside the group are skipped so that
        brackets inside them do not count.
        """
        line_start = self._line_start_pos
        opener = self._advance()
        closer, token_type = self.GROUPS[opener]
        start = self._pos
        expected = [closer]

        while not self._at_end():
            char = self._peek()

            if char in self.QUOTES:
                self._skip_quoted()
                continue

            if char == "/" and self._peek(1) == "/":
                self._read_until_newline()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_block_comment(self._line, self._column, self._line_start_pos)
                continue

            if char in self.GROUPS:
                expected.append(self.GROUPS[char][0])
                self._advance()
                continue

            if char in self.CLOSERS:
                if char != expected[-1]:
                    raise UnbalancedDelimiterError(
                        char,
                        self._location(self._line, self._column),
                        self._source_line(self._line_start_pos),
                    )
                expected.pop()
                if not expected:
                    value = self.source[start:self._pos]
                    self._advance()
                    return Token(token_type, value, line, column)
                self._advance()
                continue

            self._advance()

        raise UnterminatedGroupError(
            opener,
            closer,
            self._rest_of_line(line, column, line_start),
            self._source_line(line_start),
        )

    def _skip_quoted(self) -> None:
        quote = self._advance()
        while not self._at_end() and self._peek() not in (quote, "\n"):
            if self._peek() == "\\":
                self._advance()
            self._advance()
        if self._peek() == quote:
            self._advance()

    def _scan_angle(self, line: int, column: int) -> Optional[Token]:
        """
        Try to scan a generic argument list like the '<int>' in 'Vec<int>'.

        Returns None (consuming nothing) when no matching '>' follows on
        the same line, or when the text inside starts or ends with a space
        ('a<b >c'). The '<' is then scanned as a comparison instead.
        """
        depth = 0
        pos = self._pos
        while pos < len(self.source):
            char = self.source[pos]
            if char not in self.ANGLE_CHARS:
                return None
            if char == "<":
                depth += 1
            elif char == ">":
                depth -= 1
                if depth == 0:
                    break
            pos += 1
        else:
            return None

        value = self.source[self._pos + 1:pos]
        if value != value.strip():
            return None
        while self._pos <= pos:
            self._advance()
        return Token(TokenType.ANGLE, value, line, column)

    def _scan_symbol(self, line: int, column: int) -> Token:
        pair = self.source[self._pos:self._pos + 2]
        if pair in MULTI_SYMBOLS:
            self._advance()
            self._advance()
            return Token(TokenType.SYMBOL, pair, line, column)

        char = self._advance()
        if not char.isprintable():
            raise WystSyntaxError(
                f"invalid character 0x{ord(char):02X}",
                self._location(line, column),
                source_line=self._source_line(self._line_start_pos),
            )
        return Token(TokenType.SYMBOL, char, line, column)


# =============================================================================
# Convenience Function
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize source text into a list."""
    return list(Lexer(source, filename).tokenize())
