"""
cdecl - C Declaration Translator Command-Line Interface
=======================================================

This module implements the command-line interface for the declaration
translator. Declarations are given as arguments, read from a file, or
typed one per line in an interactive session.

Usage Examples
--------------
Translate declarations given as arguments:
    $ cdecl "int *x[3];" "char **argv;"
    x: array[3] of pointer to int
    argv: pointer to pointer to char

Interactive session (an empty line or end of input quits):
    $ cdecl
    int (*f)();
    f: pointer to function() returning int

Translate a file, one declaration per line:
    $ cdecl -f declarations.h

Show the declarator tree as well:
    $ cdecl -t "int *x[3];"

Verbose mode (parser trace on stderr):
    $ cdecl -v "int x;"
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from kr_cdecl import __version__
from kr_cdecl.config import SessionConfig
from kr_cdecl.decl.ast import TreePrinter
from kr_cdecl.decl.errors import CDeclError
from kr_cdecl.decl.parser import parse_tree
from kr_cdecl.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


# =============================================================================
# Session Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging for the tool; debug output only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def translate_line(
    line: str,
    config: SessionConfig,
    filename: str = "<stdin>",
    line_number: int = 1,
) -> str:
    """
    Translate one line for the interactive session.

    Errors are returned in their short form ("syntax error: ...") so the
    session can carry on with the next line.
    """
    try:
        declaration = parse_tree(line, filename, line_number)
    except CDeclError as e:
        logger.debug(f"{filename}:{line_number}: {e.message}")
        return e.summary

    text = declaration.describe()
    if config.show_tree:
        text = f"{text}\n{TreePrinter().print(declaration)}"
    return text


def run_session(stream: TextIO, config: SessionConfig, filename: str = "<stdin>") -> int:
    """
    Translate lines from 'stream' until an empty line or end of input.

    Args:
        stream: Input, one declaration per line
        config: Prompt, tree and spacing settings
        filename: Name used in error locations

    Returns:
        The number of lines translated (successfully or not)
    """
    count = 0
    while True:
        if config.prompt:
            click.echo(config.prompt, nl=False)

        line = stream.readline()
        if not line:
            break

        line = line.rstrip("\r\n")
        if not line:
            break

        count += 1
        click.echo(translate_line(line, config, filename, count))
        if config.blank_line:
            click.echo()

    logger.debug(f"Session ended after {count} lines")
    return count


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("declarations", nargs=-1)
@click.option(
    "-f", "--file",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read declarations from a file, one per line",
)
@click.option(
    "-t", "--tree",
    is_flag=True,
    help="Also print the declarator tree",
)
@click.option(
    "-p", "--prompt",
    default=None,
    help="Prompt shown before each line of the interactive session",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Trace the parser on stderr",
)
@click.version_option(version=__version__, prog_name="cdecl")
def main(
    declarations: tuple[str, ...],
    input_file: Optional[Path],
    tree: bool,
    prompt: Optional[str],
    verbose: bool,
) -> None:
    """
    Explain C declarations in English.

    DECLARATIONS are C declarations such as "int *x[3];". Without
    arguments, declarations are read one per line from standard input
    until an empty line or end of input.

    \b
    Examples:
        cdecl "int *x[3];"           # x: array[3] of pointer to int
        cdecl "int f()[3];"          # error: cannot return array
        cdecl -f decls.txt           # One declaration per line
        cdecl -p "cdecl> "           # Interactive, with a prompt

    \b
    Supported declarations:
        - void char short int long float double signed unsigned
        - const volatile restrict
        - auto register static extern typedef
        - pointers, arrays, functions with parameter lists
        - C99 parameter arrays: a[const 10], a[static 10]
    """
    setup_logging(verbose)

    config = SessionConfig.from_env()
    if prompt is not None:
        config.prompt = prompt
    config.show_tree = config.show_tree or tree

    if declarations and input_file is not None:
        raise click.UsageError("give declarations as arguments or with --file, not both")

    try:
        if input_file is not None:
            with input_file.open() as stream:
                run_session(stream, config, str(input_file))
            return

        if not declarations:
            run_session(sys.stdin, config)
            return

        for text in declarations:
            declaration = parse_tree(text, "<argument>")
            click.echo(declaration.describe())
            if config.show_tree:
                click.echo(TreePrinter().print(declaration))

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
