"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the cdecl tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the cdecl tool."""
    SUCCESS = 0
    PARSE_ERROR = 1      # A declaration could not be translated
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from kr_cdecl.decl.errors import CDeclError, LookaheadError

    if isinstance(error, CDeclError) and not isinstance(error, LookaheadError):
        # Already formatted with location, caret and hint
        click.echo(str(error), err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    elif isinstance(error, (click.BadParameter, click.UsageError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
