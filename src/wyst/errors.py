"""
Wyst Error Hierarchy
====================

This module defines the root of the exception hierarchy for the Wyst
toolchain. All exceptions inherit from WystError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
WystError (base)
└── FrontendError (see wyst.frontend.errors)
    ├── WystSyntaxError - malformed source text rejected by the scanner
    └── ParserInvariantError - internal parser defect

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class WystError(Exception):
    """
    Base exception for all Wyst errors.

        try:
            result = parse_source(text, "main.wy")
        except WystError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A span of source text on one line.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column where the span starts (1-indexed)
        length: Number of characters covered, at least 1
    """
    filename: str
    line: int
    column: int
    length: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def underline(self) -> str:
        """
        Marker line for the span, aligned to column 1 of the source line.

            '^' for a single character, '^~~~' for a four-character span
        """
        return " " * (self.column - 1) + "^" + "~" * (max(self.length, 1) - 1)
