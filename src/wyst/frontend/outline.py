"""
Document outline built from a symbol table.
"""

from dataclasses import dataclass
from typing import Iterable

from wyst.frontend.symbols import Symbol, SymbolKind


@dataclass(frozen=True)
class OutlineEntry:
    """One line of an outline view."""
    kind: SymbolKind
    name: str
    line: int
    column: int
    summary: str = ""

    def __str__(self) -> str:
        text = f"{self.line}:{self.column}  {self.kind.value:<9} {self.name}"
        if self.summary:
            text += f"  - {self.summary}"
        return text


def build_outline(symbols: Iterable[Symbol]) -> list[OutlineEntry]:
    """
    Turn registered symbols into outline entries sorted by position.

    The summary is the first non-empty line of the symbol's doc comment.
    """
    entries = []
    for symbol in symbols:
        summary = next((ln.strip() for ln in symbol.doc.splitlines() if ln.strip()), "")
        entries.append(OutlineEntry(
            kind=symbol.kind,
            name=symbol.name,
            line=symbol.position.line,
            column=symbol.position.column,
            summary=summary,
        ))
    entries.sort(key=lambda e: (e.line, e.column))
    return entries
