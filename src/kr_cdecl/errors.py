"""
kr-cdecl Error Hierarchy
========================

This module defines the root of the exception hierarchy for the kr-cdecl
package. All exceptions inherit from CDeclToolError, allowing callers to
catch every package-related error with a single except clause.

Exception Hierarchy
-------------------
CDeclToolError (base)
└── CDeclError (declaration parsing, see kr_cdecl.decl.errors)
    ├── CDeclSyntaxError - lexical and structural errors
    ├── CDeclSemanticError - well-formed but illegal declarations
    └── LookaheadError - internal tokenizer misuse

Error Message Format
--------------------
A parse error knows where in the input it was detected. Formatted errors
follow this layout:

    <input>:1:13: syntax error: unexpected identifier y
        int f(int x) y
                     ^
    hint: only one name may be declared at each nesting level

The first line without the location prefix ("syntax error: ...") is the
short form printed by the interactive session.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class CDeclToolError(Exception):
    """
    Base exception for all kr-cdecl errors.

        try:
            text = parse_declaration("int *x;")
        except CDeclToolError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the input for error reporting.

    Declarations are single lines, but the command-line tool can read
    them from a file, so the line number is kept alongside the column.

    Attributes:
        filename: Name of the source ("<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
