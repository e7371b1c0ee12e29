"""
Wyst Symbol Table
=================

The parser records every declaration it recognizes through four
registration calls. It only needs something that accepts those calls, the
SymbolSink protocol; SymbolTable is the bundled implementation used by the
pipeline, the outline and completion helpers, and the tests.

The table is append-only: registering the same name twice keeps both
records. One table belongs to one parse; it is not thread-safe.

Example
-------
>>> from wyst.frontend.lexer import Position
>>> from wyst.frontend.symbols import SymbolTable, SymbolKind
>>> table = SymbolTable()
>>> table.register_function("main", Position(1, 6), "")
>>> [s.name for s in table.of_kind(SymbolKind.FUNCTION)]
['main']
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Protocol

from wyst.frontend.lexer import Position


class SymbolKind(Enum):
    """Declaration kinds the parser can register."""
    STRUCT = "struct"
    NAMESPACE = "namespace"
    FUNCTION = "function"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Symbol:
    """
    One registered declaration.

    Attributes:
        kind: What was declared
        name: Declared name
        position: Where the name token appears
        doc: Text of the comment right before the declaration, or ""
    """
    kind: SymbolKind
    name: str
    position: Position
    doc: str = ""


class SymbolSink(Protocol):
    """The registration calls the parser makes."""

    def register_struct(self, name: str, position: Position, doc: str) -> None: ...

    def register_namespace(self, name: str, position: Position, doc: str) -> None: ...

    def register_function(self, name: str, position: Position, doc: str) -> None: ...

    def register_variable(self, name: str, position: Position, doc: str) -> None: ...


class SymbolTable:
    """Append-only record of declarations in registration order."""

    def __init__(self):
        self._symbols: list[Symbol] = []

    # =========================================================================
    # Registration (SymbolSink)
    # =========================================================================

    def register_struct(self, name: str, position: Position, doc: str) -> None:
        self._add(SymbolKind.STRUCT, name, position, doc)

    def register_namespace(self, name: str, position: Position, doc: str) -> None:
        self._add(SymbolKind.NAMESPACE, name, position, doc)

    def register_function(self, name: str, position: Position, doc: str) -> None:
        self._add(SymbolKind.FUNCTION, name, position, doc)

    def register_variable(self, name: str, position: Position, doc: str) -> None:
        self._add(SymbolKind.VARIABLE, name, position, doc)

    def _add(self, kind: SymbolKind, name: str, position: Position, doc: str) -> None:
        self._symbols.append(Symbol(kind, name, position, doc))

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def symbols(self) -> list[Symbol]:
        """Copy of all records, in registration order."""
        return list(self._symbols)

    def of_kind(self, kind: SymbolKind) -> list[Symbol]:
        return [s for s in self._symbols if s.kind == kind]

    def find(self, name: str) -> list[Symbol]:
        """All records registered under a name (duplicates included)."""
        return [s for s in self._symbols if s.name == name]

    def names(self) -> list[str]:
        """Distinct names in first-registration order."""
        return list(dict.fromkeys(s.name for s in self._symbols))

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._symbols)} symbols)"
