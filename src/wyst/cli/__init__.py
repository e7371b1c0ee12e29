"""
Wyst Command-Line Interface
===========================

This package provides the `wyst` command-line tool (see wyst.cli.main),
a Click-based application for inspecting what the front end makes of a
source file: tokens, syntax nodes, symbols, outline and completions.
"""

__all__ = ["main"]
