"""
Wyst Front-End Error Hierarchy
==============================

Exceptions raised by the scanner and the parser.

Exception Hierarchy
-------------------
FrontendError (base for all front-end errors)
├── WystSyntaxError - scanner rejects the source text
│   ├── UnterminatedStringError - missing closing quote
│   ├── UnterminatedCommentError - missing closing */
│   ├── UnterminatedGroupError - bracket group never closed
│   └── UnbalancedDelimiterError - closing bracket with no opener
└── ParserInvariantError - the parser's cursor bookkeeping is broken

The parser itself never raises syntax errors: anything it cannot classify
becomes an OTHER node. ParserInvariantError signals a defect in the parser,
not a problem with the input.

Example:
    main.wy:3:8: error: unterminated string literal
        name = "wyst
               ^~~~~
    hint: add the closing '"'
"""

from typing import Optional

from wyst.errors import WystError, SourceLocation


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(WystError):
    """
    Base exception for all front-end errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    SOURCE_INDENT = "    "

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Build the diagnostic text.

        The offending span is underlined below the quoted source line
        (four columns of indent, as in the header example).
        """
        prefix = f"{self.location}: " if self.location else ""
        lines = [f"{prefix}error: {self.message}"]

        if self.source_line is not None and self.location is not None and self.location.column > 0:
            lines += [
                self.SOURCE_INDENT + self.source_line,
                self.SOURCE_INDENT + self.location.underline(),
            ]

        if self.hint:
            lines.append(f"hint: {self.hint}")
        return "\n".join(lines)


# =============================================================================
# Syntax Errors (Scanner)
# =============================================================================

class WystSyntaxError(FrontendError):
    """
    Source text that cannot be tokenized.

    Examples:
        - Unterminated string literal
        - Unterminated block comment
        - Bracket group that never closes
        - Closing bracket without an opener
    """
    pass


class UnterminatedStringError(WystSyntaxError):
    """
    String or character literal that reaches the end of its line.

    Example:
        name = "wyst    // Missing closing quote
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        quote: str = '"',
    ):
        self.quote = quote
        super().__init__(
            "unterminated string literal",
            location=location,
            hint=f"add the closing '{quote}'",
            source_line=source_line,
        )


class UnterminatedCommentError(WystSyntaxError):
    """Block comment without a closing */."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )


class UnterminatedGroupError(WystSyntaxError):
    """
    Bracket group opened but never closed.

    Raised for '(', '{' and '['. An unmatched '<' is not a group and is
    scanned as a plain symbol instead.
    """

    def __init__(
        self,
        opener: str,
        closer: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.opener = opener
        self.closer = closer
        super().__init__(
            f"unterminated '{opener}' group",
            location=location,
            hint=f"add the matching '{closer}'",
            source_line=source_line,
        )


class UnbalancedDelimiterError(WystSyntaxError):
    """Closing bracket that does not match any open group."""

    def __init__(
        self,
        delimiter: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.delimiter = delimiter
        super().__init__(
            f"unexpected closing '{delimiter}'",
            location=location,
            hint="remove it or add the matching opening bracket",
            source_line=source_line,
        )


# =============================================================================
# Internal Errors (Parser)
# =============================================================================

class ParserInvariantError(FrontendError):
    """
    The parser's cursor bookkeeping is inconsistent.

    Never caused by user input. The parse is aborted because continuing
    would produce wrong output silently.
    """

    def __init__(self, message: str, cursor: int, token_count: int):
        self.cursor = cursor
        self.token_count = token_count
        super().__init__(
            f"{message} (cursor={cursor}, tokens={token_count})",
            hint="this is a bug in the parser, please report it",
        )
