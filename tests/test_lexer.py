# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the Wyst scanner.
#
# Test coverage includes:
#   - Identifiers and the three keyword classes
#   - Pre-matched bracket groups (nesting, strings, char literals, comments)
#   - Generic argument lists (ANGLE) versus comparison operators
#   - Comments, include directives, static-execution markers
#   - Token positions
#   - Error conditions and underlined diagnostic spans
# =============================================================================

import pytest

from wyst.errors import SourceLocation
from wyst.frontend.lexer import Lexer, Position, Token, TokenType, tokenize
from wyst.frontend.errors import (
    WystSyntaxError,
    UnterminatedStringError,
    UnterminatedCommentError,
    UnterminatedGroupError,
    UnbalancedDelimiterError,
)


# =============================================================================
# Helper Function
# =============================================================================

def kinds(source: str) -> list[tuple[TokenType, str]]:
    """Tokenize and keep only (type, value) pairs."""
    return [(t.type, t.value) for t in tokenize(source, "<test>")]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("  \n\t \r\n ") == []

    def test_identifier(self):
        assert kinds("main") == [(TokenType.IDENTIFIER, "main")]

    def test_identifier_with_underscore_and_digits(self):
        assert kinds("_tmp2") == [(TokenType.IDENTIFIER, "_tmp2")]

    def test_type_names_are_identifiers(self):
        """void and int are ordinary identifiers to the scanner."""
        assert kinds("void int") == [
            (TokenType.IDENTIFIER, "void"),
            (TokenType.IDENTIFIER, "int"),
        ]

    def test_numbers(self):
        assert kinds("42 3.14") == [
            (TokenType.NUMBER, "42"),
            (TokenType.NUMBER, "3.14"),
        ]

    def test_symbols(self):
        assert kinds("& * : ; =") == [
            (TokenType.SYMBOL, "&"),
            (TokenType.SYMBOL, "*"),
            (TokenType.SYMBOL, ":"),
            (TokenType.SYMBOL, ";"),
            (TokenType.SYMBOL, "="),
        ]

    def test_multi_character_symbols(self):
        assert kinds("io::print") == [
            (TokenType.IDENTIFIER, "io"),
            (TokenType.SYMBOL, "::"),
            (TokenType.IDENTIFIER, "print"),
        ]

    def test_string_with_escapes(self):
        assert kinds(r'"a\tb\"c"') == [(TokenType.STRING, 'a\tb"c')]

    def test_char_literal(self):
        assert kinds("c = 'x'") == [
            (TokenType.IDENTIFIER, "c"),
            (TokenType.SYMBOL, "="),
            (TokenType.STRING, "x"),
        ]

    def test_char_literal_escape(self):
        assert kinds(r"'\n' '\''") == [
            (TokenType.STRING, "\n"),
            (TokenType.STRING, "'"),
        ]


# =============================================================================
# Keyword Tests
# =============================================================================

class TestKeywords:
    """The three reserved-word classes."""

    @pytest.mark.parametrize("word", ["if", "elif", "while", "for", "switch", "match"])
    def test_keyword1(self, word):
        assert kinds(word) == [(TokenType.KEYWORD1, word)]

    @pytest.mark.parametrize("word", ["else", "loop", "do", "defer", "unsafe"])
    def test_keyword2(self, word):
        assert kinds(word) == [(TokenType.KEYWORD2, word)]

    @pytest.mark.parametrize("word", ["cb", "struct", "namespace", "impl", "return"])
    def test_plain_keyword(self, word):
        assert kinds(word) == [(TokenType.KEYWORD, word)]

    def test_keyword_prefix_is_identifier(self):
        assert kinds("iffy") == [(TokenType.IDENTIFIER, "iffy")]


# =============================================================================
# Bracket Group Tests
# =============================================================================

class TestGroups:
    """Brackets are matched by the scanner and emitted as single tokens."""

    def test_round_group(self):
        assert kinds("(int a, int b)") == [(TokenType.ROUND, "int a, int b")]

    def test_curly_group(self):
        assert kinds("{ return 1; }") == [(TokenType.CURLY, " return 1; ")]

    def test_square_group(self):
        assert kinds("[1, 2]") == [(TokenType.SQUARE, "1, 2")]

    def test_empty_group(self):
        assert kinds("()") == [(TokenType.ROUND, "")]

    def test_nested_groups_stay_inside(self):
        """Inner groups are part of the outer token's value."""
        assert kinds("{ if (x) { y(); } }") == [
            (TokenType.CURLY, " if (x) { y(); } "),
        ]

    def test_brackets_in_strings_ignored(self):
        assert kinds('{ s = "}"; }') == [(TokenType.CURLY, ' s = "}"; ')]

    def test_brackets_in_char_literals_ignored(self):
        assert kinds("void f() { c = '}'; }")[-1] == (TokenType.CURLY, " c = '}'; ")

    def test_quote_char_inside_group(self):
        """A '"' character literal does not open a string."""
        assert kinds("{ q = '\"'; }") == [(TokenType.CURLY, " q = '\"'; ")]

    def test_brackets_in_comments_ignored(self):
        source = "{ // }\n x /* } */ }"
        assert kinds(source) == [(TokenType.CURLY, " // }\n x /* } */ ")]

    def test_function_shape(self):
        assert [t for t, _ in kinds("void main() { }")] == [
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.ROUND,
            TokenType.CURLY,
        ]


# =============================================================================
# Angle Group Tests
# =============================================================================

class TestAngleGroups:
    """'<...>' is a group only right after an identifier."""

    def test_generic_type(self):
        assert kinds("Vec<int> v") == [
            (TokenType.IDENTIFIER, "Vec"),
            (TokenType.ANGLE, "int"),
            (TokenType.IDENTIFIER, "v"),
        ]

    def test_nested_generic(self):
        assert kinds("Map<str, Vec<int>>") == [
            (TokenType.IDENTIFIER, "Map"),
            (TokenType.ANGLE, "str, Vec<int>"),
        ]

    def test_spaced_less_than_is_symbol(self):
        assert kinds("a < b") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.SYMBOL, "<"),
            (TokenType.IDENTIFIER, "b"),
        ]

    def test_unclosed_angle_is_symbol(self):
        assert kinds("a<b;") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.SYMBOL, "<"),
            (TokenType.IDENTIFIER, "b"),
            (TokenType.SYMBOL, ";"),
        ]

    def test_less_equal(self):
        assert (TokenType.SYMBOL, "<=") in kinds("a<=b")

    def test_logical_and_is_not_generic(self):
        assert kinds("a<b && c>d") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.SYMBOL, "<"),
            (TokenType.IDENTIFIER, "b"),
            (TokenType.SYMBOL, "&&"),
            (TokenType.IDENTIFIER, "c"),
            (TokenType.SYMBOL, ">"),
            (TokenType.IDENTIFIER, "d"),
        ]

    def test_space_before_closer_is_not_generic(self):
        assert [t for t, _ in kinds("a<b >c")] == [
            TokenType.IDENTIFIER,
            TokenType.SYMBOL,
            TokenType.IDENTIFIER,
            TokenType.SYMBOL,
            TokenType.IDENTIFIER,
        ]

    def test_pointer_generic_argument(self):
        assert kinds("Box<char*> p")[1] == (TokenType.ANGLE, "char*")


# =============================================================================
# Comments and Directives
# =============================================================================

class TestCommentsAndDirectives:
    """Comments are kept as tokens; directives are single tokens."""

    def test_line_comment(self):
        assert kinds("// Entry point\nmain") == [
            (TokenType.COMMENT, "Entry point"),
            (TokenType.IDENTIFIER, "main"),
        ]

    def test_block_comment(self):
        assert kinds("/* A point\n in 2D */ struct") == [
            (TokenType.COMMENT, "A point\n in 2D"),
            (TokenType.KEYWORD, "struct"),
        ]

    def test_include_system(self):
        assert kinds("#include <stdio.h>\nint") == [
            (TokenType.INCLUDE, "#include <stdio.h>"),
            (TokenType.IDENTIFIER, "int"),
        ]

    def test_include_local(self):
        assert kinds('#include "local.h"') == [(TokenType.INCLUDE, '#include "local.h"')]

    def test_static_execution(self):
        assert kinds("$[build()]") == [
            (TokenType.STATIC_EXECUTION, "$"),
            (TokenType.SQUARE, "build()"),
        ]

    def test_dollar_alone_is_symbol(self):
        assert kinds("$x") == [(TokenType.SYMBOL, "$"), (TokenType.IDENTIFIER, "x")]


# =============================================================================
# Position Tracking
# =============================================================================

class TestPositions:
    """Tokens carry 1-based line and column."""

    def test_first_token(self):
        token = tokenize("main")[0]
        assert (token.line, token.column) == (1, 1)

    def test_columns(self):
        tokens = tokenize("void main() { }")
        assert [t.column for t in tokens] == [1, 6, 10, 13]

    def test_lines(self):
        tokens = tokenize("int a\n\n  int b")
        assert tokens[2].position == Position(3, 3)

    def test_group_spanning_lines(self):
        """Tokens after a multi-line group get the right line."""
        tokens = tokenize("{\n\n}\nx")
        assert tokens[1].position == Position(4, 1)

    def test_starting_line_number(self):
        tokens = list(Lexer("x", "inc.wy", line_number=10).tokenize())
        assert tokens[0].line == 10

    def test_repr(self):
        assert repr(Token(TokenType.IDENTIFIER, "main", 1, 5)) == "Token(IDENTIFIER, 'main', 1:5)"


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Malformed text raises syntax errors with locations."""

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('x = "abc', "main.wy")
        assert exc_info.value.location.line == 1
        assert exc_info.value.location.column == 5
        assert "main.wy:1:5: error: unterminated string literal" in str(exc_info.value)

    def test_string_cannot_span_lines(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('"abc\ndef"')

    def test_unterminated_comment(self):
        with pytest.raises(UnterminatedCommentError):
            tokenize("/* never closed")

    def test_unterminated_group(self):
        with pytest.raises(UnterminatedGroupError) as exc_info:
            tokenize("void main() {\n  x;\n")
        error = exc_info.value
        assert (error.location.line, error.location.column) == (1, 13)
        assert error.hint == "add the matching '}'"

    def test_stray_closer(self):
        with pytest.raises(UnbalancedDelimiterError) as exc_info:
            tokenize("x }")
        assert exc_info.value.delimiter == "}"

    def test_mismatched_closer(self):
        with pytest.raises(UnbalancedDelimiterError):
            tokenize("( ]")

    def test_all_are_syntax_errors(self):
        """Every scanner error can be caught as WystSyntaxError."""
        for source in ('"', "/*", "{", ")"):
            with pytest.raises(WystSyntaxError):
                tokenize(source)

    def test_error_shows_source_line(self):
        with pytest.raises(UnterminatedGroupError) as exc_info:
            tokenize("int f(")
        lines = str(exc_info.value).splitlines()
        assert lines[1] == "    int f("
        assert lines[2] == "         ^"

    def test_unterminated_char_literal(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize("c = 'x")
        assert exc_info.value.quote == "'"
        assert exc_info.value.hint == "add the closing '''"


# =============================================================================
# Diagnostic Spans
# =============================================================================

class TestErrorSpans:
    """The quoted source line is underlined over the offending text."""

    def underline(self, source: str) -> str:
        with pytest.raises(WystSyntaxError) as exc_info:
            tokenize(source)
        return str(exc_info.value).splitlines()[2]

    def test_string_runs_to_end_of_line(self):
        assert self.underline('x = "abc') == "    " + "    ^~~~"

    def test_group_runs_to_end_of_line(self):
        assert self.underline("int f(a, b") == "    " + "     ^~~~~"

    def test_comment_opener(self):
        assert self.underline("x /* never") == "    " + "  ^~"

    def test_single_character(self):
        assert self.underline("x ]") == "    " + "  ^"

    def test_location_underline(self):
        location = SourceLocation("main.wy", 2, 3, 4)
        assert location.underline() == "  ^~~~"
        assert str(location) == "main.wy:2:3"

    def test_location_default_length(self):
        assert SourceLocation("main.wy", 1, 1).underline() == "^"
