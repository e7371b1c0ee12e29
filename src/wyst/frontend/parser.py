"""
Wyst Token-Stream Parser
========================

This module turns the scanner's flat token buffer into a flat list of
classified nodes (see wyst.frontend.ast) and registers every declaration it
recognizes in a symbol table.

There is no recursive descent. A single cursor walks the buffer once; at
each position the grammar rules below are tried IN ORDER against a short
lookahead window (1 to 4 tokens) and the first one that matches wins. The
rule windows overlap, so the order is part of the grammar: moving a rule
changes which construct a token sequence becomes.

Grammar Rules (priority order)
------------------------------
 1. JSON mode only:  X ':' Y                     -> JSON
 2. '&' IDENTIFIER                               -> REF
 3. 'struct' IDENTIFIER CURLY                    -> STRUCT_DECLARATION  (struct)
 4. 'namespace' IDENTIFIER CURLY                 -> NAMESPACE           (namespace)
 5. 'impl' IDENTIFIER CURLY                      -> IMPL
 6. KEYWORD1 ROUND CURLY                         -> STATE3
 7. KEYWORD2 CURLY                               -> STATE2
 8. IDENTIFIER followed by:
    a. IDENTIFIER ROUND CURLY                    -> [VOID_]FUNCTION_DECLARATION (function)
    b. CURLY                                     -> STRUCT_CALL
    c. IDENTIFIER CURLY                          -> STRUCT_VAR          (variable)
    d. IDENTIFIER                                -> VARIABLE_DECLARATION (variable)
    e. ANGLE IDENTIFIER                          -> VARIABLE_DECLARATION (variable)
    f. '*' IDENTIFIER                            -> POINTER_DECLARATION (variable)
    otherwise                                    -> OTHER
 9. INCLUDE                                      -> INCLUDE / INCLUDE_LOCAL
10. 'cb' CURLY                                   -> CODE_BLOCK, other KEYWORD -> OTHER
11. STATIC_EXECUTION SQUARE                      -> STATIC_EXECUTION (SQUARE not consumed)
12. anything else                                -> OTHER

Names in parentheses are the symbol-table registrations. A declaration's doc
string is the value of the COMMENT token immediately before the rule's first
token, if there is one.

Example Usage
-------------
>>> from wyst.frontend.lexer import tokenize
>>> from wyst.frontend.parser import Parser
>>> from wyst.frontend.symbols import SymbolTable
>>> table = SymbolTable()
>>> nodes = Parser(tokenize("void main() { }"), table).parse()
>>> nodes[0].type
<AstType.VOID_FUNCTION_DECLARATION: 6>
>>> table.names()
['main']
"""

from dataclasses import replace
from typing import Callable, Iterable, Optional, Union
import logging
import re

from wyst.frontend.ast import Ast, AstType
from wyst.frontend.errors import ParserInvariantError
from wyst.frontend.lexer import Token, TokenType
from wyst.frontend.symbols import SymbolSink

logger = logging.getLogger(__name__)

# A pattern element matches a token by type, by exact value, or (None) always
PatternElement = Optional[Union[TokenType, str]]

# A rule returns the node it built and how many tokens it consumed
RuleResult = Optional[tuple[Ast, int]]


class Parser:
    """
    Single-pass, priority-ordered parser over a token buffer.

    A Parser is single-use: parse() drains the buffer, so calling it again
    returns an empty list and registers nothing.

    Attributes:
        tokens: The token buffer (a private copy of the input)
        symbols: Where declarations are registered
        json_mode: When True, 'X : Y' pairs take priority over every
            other rule
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        symbols: SymbolSink,
        json_mode: bool = False,
    ):
        self.tokens: list[Token] = list(tokens)
        self.symbols = symbols
        self.json_mode = json_mode

        self._pos = 0

        self._include_regex = re.compile(r"^(#include *)<(.*?)>")
        self._include_local_regex = re.compile(r'^(#include *)"(.*?)"')

        # Order matters: see the module docstring
        self._rules: list[Callable[[int], RuleResult]] = [
            self._parse_json_pair,
            self._parse_ref,
            self._parse_struct,
            self._parse_namespace,
            self._parse_impl,
            self._parse_state3,
            self._parse_state2,
            self._parse_identifier,
            self._parse_include,
            self._parse_keyword,
            self._parse_static_execution,
        ]

    @property
    def position(self) -> int:
        """Current cursor index into the token buffer."""
        return self._pos

    def parse(self) -> list[Ast]:
        """
        Classify the whole buffer.

        Returns:
            One node per recognized construct, in source order

        Raises:
            ParserInvariantError: If the cursor bookkeeping breaks (a bug,
                never caused by the input)
        """
        nodes: list[Ast] = []
        declared = 0

        while self._pos < len(self.tokens):
            index = self._pos
            if index == len(self.tokens):
                raise ParserInvariantError(
                    "reached the end of tokens inside the parse loop",
                    index,
                    len(self.tokens),
                )

            node, consumed = self._apply_rules(index)
            if consumed < 1:
                raise ParserInvariantError(
                    f"rule for {node.type.name} consumed no tokens",
                    index,
                    len(self.tokens),
                )

            self._pos += consumed
            nodes.append(node)
            if node.is_declaration:
                declared += 1

        logger.debug(f"Parsed {len(self.tokens)} tokens into {len(nodes)} nodes ({declared} declarations)")
        return nodes

    def _apply_rules(self, index: int) -> tuple[Ast, int]:
        for rule in self._rules:
            result = rule(index)
            if result is not None:
                return result
        return Ast([self.tokens[index]], AstType.OTHER), 1

    # =========================================================================
    # Lookahead Helpers
    # =========================================================================

    def _matches(self, index: int, *pattern: PatternElement) -> bool:
        """
        Check the window starting at index against a pattern.

        Returns False when fewer tokens remain than the pattern needs.
        """
        if len(self.tokens) - index < len(pattern):
            return False

        for token, expected in zip(self.tokens[index:], pattern):
            if expected is None:
                continue
            if isinstance(expected, TokenType):
                if token.type != expected:
                    return False
            elif token.value != expected:
                return False
        return True

    def _doc_before(self, index: int) -> str:
        """Comment text right before the rule's first token, or ''."""
        if index > 0 and self.tokens[index - 1].type == TokenType.COMMENT:
            return self.tokens[index - 1].value
        return ""

    # =========================================================================
    # Rules 1-7: Fixed Windows
    # =========================================================================

    def _parse_json_pair(self, index: int) -> RuleResult:
        if not self.json_mode or not self._matches(index, None, ":", None):
            return None
        key, value = self.tokens[index], self.tokens[index + 2]
        return Ast([key, value], AstType.JSON), 3

    def _parse_ref(self, index: int) -> RuleResult:
        if not self._matches(index, "&", TokenType.IDENTIFIER):
            return None
        return Ast([self.tokens[index + 1]], AstType.REF), 2

    def _parse_struct(self, index: int) -> RuleResult:
        if not self._matches(index, "struct", TokenType.IDENTIFIER, TokenType.CURLY):
            return None
        name, body = self.tokens[index + 1], self.tokens[index + 2]
        self._register("struct", name, index)
        return Ast([name, body], AstType.STRUCT_DECLARATION), 3

    def _parse_namespace(self, index: int) -> RuleResult:
        if not self._matches(index, "namespace", TokenType.IDENTIFIER, TokenType.CURLY):
            return None
        name, body = self.tokens[index + 1], self.tokens[index + 2]
        self._register("namespace", name, index)
        return Ast([name, body], AstType.NAMESPACE), 3

    def _parse_impl(self, index: int) -> RuleResult:
        if not self._matches(index, "impl", TokenType.IDENTIFIER, TokenType.CURLY):
            return None
        return Ast(self.tokens[index + 1:index + 3], AstType.IMPL), 3

    def _parse_state3(self, index: int) -> RuleResult:
        if not self._matches(index, TokenType.KEYWORD1, TokenType.ROUND, TokenType.CURLY):
            return None
        return Ast(self.tokens[index:index + 3], AstType.STATE3), 3

    def _parse_state2(self, index: int) -> RuleResult:
        if not self._matches(index, TokenType.KEYWORD2, TokenType.CURLY):
            return None
        return Ast(self.tokens[index:index + 2], AstType.STATE2), 2

    # =========================================================================
    # Rule 8: Declarations Led by an Identifier
    # =========================================================================

    def _parse_identifier(self, index: int) -> RuleResult:
        """
        Sub-rules for a leading IDENTIFIER, tried in order.

        The leading identifier (usually a type name) is not captured by any
        sub-rule; it is only captured when nothing matches and the token
        passes through as OTHER.
        """
        token = self.tokens[index]
        if token.type != TokenType.IDENTIFIER:
            return None

        ident = TokenType.IDENTIFIER

        # a. type name ( params ) { body }
        if self._matches(index, ident, ident, TokenType.ROUND, TokenType.CURLY):
            name = self.tokens[index + 1]
            self._register("function", name, index)
            ast_type = (
                AstType.VOID_FUNCTION_DECLARATION
                if token.value == "void"
                else AstType.FUNCTION_DECLARATION
            )
            return Ast(self.tokens[index + 1:index + 4], ast_type), 4

        # b. Type { fields }
        if self._matches(index, ident, TokenType.CURLY):
            return Ast([self.tokens[index + 1]], AstType.STRUCT_CALL), 2

        # c. Type name { fields }
        if self._matches(index, ident, ident, TokenType.CURLY):
            name = self.tokens[index + 1]
            self._register("variable", name, index)
            return Ast(self.tokens[index + 1:index + 3], AstType.STRUCT_VAR), 3

        # d. type name
        if self._matches(index, ident, ident):
            name = self.tokens[index + 1]
            self._register("variable", name, index)
            return Ast([name], AstType.VARIABLE_DECLARATION), 2

        # e. Type<args> name
        if self._matches(index, ident, TokenType.ANGLE, ident):
            angle, name = self.tokens[index + 1], self.tokens[index + 2]
            # The displayed token carries the generic arguments, but the
            # registration uses the ANGLE token's text and position.
            self._register("variable", angle, index)
            shown = replace(name, value=f"{name.value}<{angle.value}>")
            return Ast([shown], AstType.VARIABLE_DECLARATION), 3

        # f. type * name
        if self._matches(index, ident, "*", ident):
            name = self.tokens[index + 2]
            self._register("variable", name, index)
            return Ast([name], AstType.POINTER_DECLARATION), 3

        return Ast([token], AstType.OTHER), 1

    def _register(self, kind: str, name: Token, index: int) -> None:
        """Record a declaration; index is the rule's first token."""
        doc = self._doc_before(index)
        register = {
            "struct": self.symbols.register_struct,
            "namespace": self.symbols.register_namespace,
            "function": self.symbols.register_function,
            "variable": self.symbols.register_variable,
        }[kind]
        register(name.value, name.position, doc)
        logger.debug(f"Registered {kind} '{name.value}' at {name.position}")

    # =========================================================================
    # Rules 9-11: Directives and Blocks
    # =========================================================================

    def _parse_include(self, index: int) -> RuleResult:
        token = self.tokens[index]
        if token.type != TokenType.INCLUDE:
            return None

        match = self._include_regex.match(token.value)
        if match:
            return Ast([self._include_path(token, match)], AstType.INCLUDE), 1

        match = self._include_local_regex.match(token.value)
        if match:
            return Ast([self._include_path(token, match)], AstType.INCLUDE_LOCAL), 1

        logger.debug(f"Unrecognized include form: {token.value!r}")
        return Ast([token], AstType.INCLUDE), 1

    @staticmethod
    def _include_path(token: Token, match: re.Match) -> Token:
        return Token(TokenType.STRING, match.group(2), token.line, token.column)

    def _parse_keyword(self, index: int) -> RuleResult:
        token = self.tokens[index]
        if token.type != TokenType.KEYWORD:
            return None
        if token.value == "cb" and self._matches(index, TokenType.KEYWORD, TokenType.CURLY):
            return Ast([self.tokens[index + 1]], AstType.CODE_BLOCK), 2
        return Ast([token], AstType.OTHER), 1

    def _parse_static_execution(self, index: int) -> RuleResult:
        if self.tokens[index].type != TokenType.STATIC_EXECUTION:
            return None
        # Only the marker is consumed; the square group is captured here and
        # then classified again on its own.
        if self._matches(index, TokenType.STATIC_EXECUTION, TokenType.SQUARE):
            return Ast([self.tokens[index + 1]], AstType.STATIC_EXECUTION), 1
        # A lone marker produces an empty node
        return Ast([], AstType.OTHER), 1
