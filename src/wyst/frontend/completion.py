"""
Completion Suggestions
======================

Editor completion answered from the symbol table. Editors request
completion when the user types one of COMPLETION_TRIGGERS (the '::' scope
separator) or explicitly; the items offered are the declared names.

Example
-------
>>> items = complete(table, prefix="ma")
>>> [item.label for item in items]
['main', 'max']
"""

from dataclasses import dataclass
from typing import Iterable

from wyst.frontend.symbols import Symbol, SymbolKind

COMPLETION_TRIGGERS = ("::",)


@dataclass(frozen=True)
class CompletionItem:
    """
    One suggestion.

    Attributes:
        label: Text inserted on accept
        detail: Short description shown next to the label
        kind: Declaration kind of the symbol
    """
    label: str
    detail: str
    kind: SymbolKind


def complete(symbols: Iterable[Symbol], prefix: str = "") -> list[CompletionItem]:
    """
    Suggest declared names starting with prefix.

    Each name is offered once; when a name was registered more than once the
    first registration supplies the detail. Items are sorted by label.
    """
    seen: dict[str, CompletionItem] = {}
    for symbol in symbols:
        if not symbol.name.startswith(prefix) or symbol.name in seen:
            continue
        seen[symbol.name] = CompletionItem(
            label=symbol.name,
            detail=_detail(symbol),
            kind=symbol.kind,
        )
    return sorted(seen.values(), key=lambda item: item.label)


def _detail(symbol: Symbol) -> str:
    first_line = symbol.doc.strip().splitlines()[0] if symbol.doc.strip() else ""
    detail = f"{symbol.kind.value} (line {symbol.position.line})"
    if first_line:
        detail += f": {first_line}"
    return detail
