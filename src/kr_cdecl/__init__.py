"""
kr-cdecl - C Declarations in Plain English
==========================================

This package reads a C declaration and explains it in English, in the
manner of the "dcl" program from chapter 5 of Kernighan & Ritchie's
"The C Programming Language", extended to C99:

    int *x[3];                    x: array[3] of pointer to int
    char *(*f)(int, char **);     f: pointer to function (int, pointer to
                                     pointer to char) returning pointer to char
    void g(int a[static 10]);     g: function (a: array[at least 10] of int)
                                     returning void

Every declaration is checked strictly: illegal specifier combinations,
conflicting qualifiers, functions returning arrays and the like are
reported as errors instead of being translated.

Main Components
---------------
- **decl**: Lexer, type resolver, declarator parser and validator
- **config**: Settings for the interactive session
- **cli**: The 'cdecl' command-line tool

Quick Start
-----------
    >>> from kr_cdecl import parse_declaration, explain
    >>> parse_declaration("const char *name;")
    'name: pointer to const char'
    >>> explain("int f()[3];")
    'syntax error: cannot return array'

Or use the command-line tool:
    $ cdecl "int (*a)[5];"
    a: pointer to array[5] of int

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from kr_cdecl.errors import CDeclToolError, SourceLocation
from kr_cdecl.decl import (
    CDeclError,
    CDeclSyntaxError,
    CDeclSemanticError,
    Declaration,
    DeclarationParser,
    TreePrinter,
    parse_tree,
    parse_declaration,
    explain,
)
from kr_cdecl.config import SessionConfig

__all__ = [
    "__version__",
    "CDeclToolError",
    "SourceLocation",
    "CDeclError",
    "CDeclSyntaxError",
    "CDeclSemanticError",
    "Declaration",
    "DeclarationParser",
    "TreePrinter",
    "parse_tree",
    "parse_declaration",
    "explain",
    "SessionConfig",
]
