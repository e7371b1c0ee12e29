"""
wyst - Front-End Inspection Command-Line Interface
==================================================

This module implements the `wyst` command, which runs the Wyst front end
over a source file and prints what it produced.

Commands
--------
- **tokens**: List the scanner's tokens
- **ast**: Dump the classified syntax nodes
- **symbols**: List registered declarations
- **outline**: Show the document outline
- **complete**: Show completion suggestions for a prefix

Usage Examples
--------------
Dump the syntax nodes:
    $ wyst ast main.wy

Parse a data file in JSON mode without colors:
    $ wyst ast --json-mode --no-color settings.wy

List declarations:
    $ wyst symbols main.wy

Suggest names starting with "ma":
    $ wyst complete main.wy ma

Show debug logging from the parser:
    $ wyst --debug symbols main.wy
"""

import logging
from pathlib import Path
from typing import Optional

import click

from wyst import __version__
from wyst.cli.errors import handle_cli_exception
from wyst.frontend import (
    AstPrinter,
    Frontend,
    FrontendOptions,
    build_outline,
    complete,
)


SOURCE_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load_options(json_mode: Optional[bool], color: Optional[bool]) -> FrontendOptions:
    """Environment settings, overridden by explicit command-line flags."""
    options = FrontendOptions.from_env()
    if json_mode is not None:
        options.json_mode = json_mode
    if color is not None:
        options.color = color
    return options


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="wyst")
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(debug: bool) -> None:
    """
    Wyst language front end.

    Tokenize and parse Wyst source files and inspect the results.

    \b
    Commands:
      tokens    List scanner tokens
      ast       Dump classified syntax nodes
      symbols   List registered declarations
      outline   Show the document outline
      complete  Suggest declared names

    \b
    Examples:
      wyst ast main.wy
      wyst symbols main.wy
      wyst complete main.wy ma
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Tokens Command
# =============================================================================

@main.command("tokens")
@click.argument("source_file", type=SOURCE_FILE)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def cmd_tokens(source_file: Path, verbose: bool) -> None:
    """
    List the tokens of a source file, one per line.

    \b
    Example:
      wyst tokens main.wy
    """
    try:
        frontend = Frontend(_load_options(None, None))
        source = source_file.read_text(encoding=frontend.options.encoding)
        tokens = frontend.tokenize(source, str(source_file))

        for token in tokens:
            click.echo(repr(token))

        if verbose:
            click.echo(f"Total: {len(tokens)} tokens")

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# AST Command
# =============================================================================

@main.command("ast")
@click.argument("source_file", type=SOURCE_FILE)
@click.option(
    "--json-mode/--no-json-mode",
    default=None,
    help="Parse 'key : value' pairs as JSON nodes (default: $WYST_JSON_MODE or off)",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Color node tags (default: $WYST_COLOR or on)",
)
@click.option(
    "-d", "--declarations-only",
    is_flag=True,
    help="Only show declaration nodes",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def cmd_ast(
    source_file: Path,
    json_mode: Optional[bool],
    color: Optional[bool],
    declarations_only: bool,
    verbose: bool,
) -> None:
    """
    Dump the syntax nodes of a source file.

    \b
    Example:
      wyst ast main.wy
      wyst ast -d main.wy
    """
    try:
        options = _load_options(json_mode, color)
        result = Frontend(options).parse_file(source_file)

        nodes = result.declarations if declarations_only else result.nodes
        if nodes:
            click.echo(AstPrinter(color=options.color).print(nodes))

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {len(result.nodes)} nodes, {len(result.declarations)} declarations")

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Symbols Command
# =============================================================================

@main.command("symbols")
@click.argument("source_file", type=SOURCE_FILE)
@click.option(
    "--json-mode/--no-json-mode",
    default=None,
    help="Parse in JSON mode",
)
@click.option("-v", "--verbose", is_flag=True, help="Also show doc comments")
def cmd_symbols(source_file: Path, json_mode: Optional[bool], verbose: bool) -> None:
    """
    List the declarations registered while parsing.

    \b
    Output format:
      Kind       Name                 Position
      function   main                 3:6
    """
    try:
        result = Frontend(_load_options(json_mode, None)).parse_file(source_file)

        click.echo(f"{'Kind':<10} {'Name':<20} {'Position':>8}")
        click.echo("-" * 40)
        for symbol in result.symbols:
            click.echo(f"{symbol.kind.value:<10} {symbol.name:<20} {str(symbol.position):>8}")
            if verbose and symbol.doc:
                click.echo(f"    {symbol.doc}")

        if verbose:
            click.echo("-" * 40)
            click.echo(f"Total: {len(result.symbols)} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Outline Command
# =============================================================================

@main.command("outline")
@click.argument("source_file", type=SOURCE_FILE)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def cmd_outline(source_file: Path, verbose: bool) -> None:
    """
    Show the document outline, sorted by position.
    """
    try:
        result = Frontend(_load_options(None, None)).parse_file(source_file)
        entries = build_outline(result.symbols)

        if not entries:
            click.echo("No declarations found")
            return

        for entry in entries:
            click.echo(str(entry))

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Complete Command
# =============================================================================

@main.command("complete")
@click.argument("source_file", type=SOURCE_FILE)
@click.argument("prefix", default="")
@click.option("-v", "--verbose", is_flag=True, help="Show item details")
def cmd_complete(source_file: Path, prefix: str, verbose: bool) -> None:
    """
    Suggest declared names starting with PREFIX.

    \b
    Example:
      wyst complete main.wy ma
    """
    try:
        result = Frontend(_load_options(None, None)).parse_file(source_file)

        for item in complete(result.symbols, prefix):
            if verbose:
                click.echo(f"{item.label:<20} {item.detail}")
            else:
                click.echo(item.label)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
