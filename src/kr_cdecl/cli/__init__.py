"""
kr-cdecl Command-Line Interface
===============================

This package provides the command-line tool of kr-cdecl:

- **cdecl**: Translate C declarations into English

The tool is a Click-based CLI application; errors are reported through
the shared handler in kr_cdecl.cli.errors.
"""

__all__ = ["cdecl"]
