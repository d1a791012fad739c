"""
Declaration Parser Error Hierarchy
==================================

This module defines the exceptions raised while translating a C
declaration. All of them inherit from CDeclError, which itself inherits
from the package-wide CDeclToolError.

Any error aborts the parse in progress: there is no recovery and no
partial result. The exception travels straight up through the recursive
grammar rules to the caller of parse_declaration().

Exception Hierarchy
-------------------
CDeclError (base for all parse errors)
├── CDeclSyntaxError - lexical and structural errors
│   ├── InvalidCharacterError - character that cannot start a token
│   ├── UnexpectedTokenError - token in the wrong place
│   ├── UnexpectedIdentifierError - second or misplaced identifier
│   ├── UnbalancedError - unmatched parentheses or brackets
│   └── MissingElementError - expected type/identifier, missing object
├── CDeclSemanticError - syntactically fine, but not legal C
│   ├── SpecifierError - illegal specifier combinations
│   ├── QualifierError - conflicting or misplaced qualifiers
│   ├── StorageClassError - duplicate or dangling storage class
│   ├── ArraySizeError - bad array length, static without length
│   └── InvalidDeclarationError - function/array/void composition
└── LookaheadError - internal error: pushback slot already occupied
"""

from typing import Optional

from kr_cdecl.errors import CDeclToolError, SourceLocation


# =============================================================================
# Base Exception
# =============================================================================

class CDeclError(CDeclToolError):
    """
    Base exception for all declaration parsing errors.

    The message is kept bare ("missing object"); str() adds the location,
    the source line with a caret, and the hint. The source line may be
    attached after construction, which is why the text is formatted on
    demand rather than once in __init__.

    Attributes:
        message: The error description
        location: Where in the input the error was detected
        hint: A suggestion for fixing the error
        source_line: The input line being parsed
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(message)

    @property
    def summary(self) -> str:
        """One-line form printed by the interactive session."""
        return f"syntax error: {self.message}"

    def __str__(self) -> str:
        return self._format_message()

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            <input>:1:9: syntax error: unbalanced brackets
                int a[3
                    ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.summary}")
        else:
            parts.append(self.summary)

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors (Lexer and Grammar)
# =============================================================================

class CDeclSyntaxError(CDeclError):
    """
    The input cannot be tokenized or does not follow the declaration
    grammar.
    """
    pass


class InvalidCharacterError(CDeclSyntaxError):
    """
    A character that cannot start any token.

    Only punctuation, letters and digits start tokens; anything else
    (for example '_', '=', '{') is reported here.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unexpected token {char}",
            location=location,
            source_line=source_line,
        )


class UnexpectedTokenError(CDeclSyntaxError):
    """A token that does not fit the grammar at this point."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnexpectedIdentifierError(CDeclSyntaxError):
    """
    An identifier where none may appear.

    Raised for a second name at the same nesting level, a name after a
    parameter list or group, and a name following an array suffix.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"unexpected identifier {identifier}",
            location=location,
            hint="only one name may be declared at each nesting level",
            source_line=source_line,
        )


class UnbalancedError(CDeclSyntaxError):
    """Unmatched parentheses or square brackets."""

    def __init__(
        self,
        delimiter: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.delimiter = delimiter
        super().__init__(
            f"unbalanced {delimiter}",
            location=location,
            source_line=source_line,
        )


class MissingElementError(CDeclSyntaxError):
    """
    A required element is absent.

    Examples:
        - "expected type" (input ends before a declarator)
        - "missing object" (type followed by nothing or ';')
        - "expected identifier" (function declarator without a name)
    """
    pass


# =============================================================================
# Semantic Errors
# =============================================================================

class CDeclSemanticError(CDeclError):
    """
    The declaration is well-formed but violates a C typing rule.
    """
    pass


class SpecifierError(CDeclSemanticError):
    """
    Illegal type specifier combination.

    Raised for incompatible pairs ("short char"), more than four
    specifiers, and more than two long/double keywords.
    """
    pass


class IncompatibleSpecifiersError(SpecifierError):
    """Two specifiers that cannot appear in the same type."""

    def __init__(
        self,
        specifier: str,
        previous: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.specifier = specifier
        self.previous = previous
        super().__init__(
            f"specifier {specifier} incompatible with {previous}",
            location=location,
            source_line=source_line,
        )


class QualifierError(CDeclSemanticError):
    """
    Misplaced qualifier.

    Examples:
        - restrict on something that is not a pointer
        - const inside the brackets of a non-parameter array
    """
    pass


class QualifierConflictError(QualifierError):
    """Two different qualifiers at the same level."""

    def __init__(
        self,
        qualifier: str,
        previous: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.qualifier = qualifier
        self.previous = previous
        super().__init__(
            f"{qualifier} incompatible with previous qualifier {previous}",
            location=location,
            source_line=source_line,
        )


class StorageClassError(CDeclSemanticError):
    """
    Storage class in the wrong place.

    Raised for a second storage class while one is still pending, and
    for a storage class on an unnamed parameter.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(
            "unexpected storage class",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class ArraySizeError(CDeclSemanticError):
    """
    Invalid array length.

    Raised when the length is not an integer literal, and when a
    parameter array is declared 'static' without a length.
    """
    pass


class InvalidDeclarationError(CDeclSemanticError):
    """
    Illegal composition of derived types.

    Examples:
        int f()[3];         // cannot return array
        int f()();          // cannot return function
        int a[3]();         // cannot declare array of functions
        int f(int, void);   // void must be the only parameter
        void a[3];          // cannot declare array of void
    """
    pass


# =============================================================================
# Internal Errors
# =============================================================================

class LookaheadError(CDeclError):
    """
    A token was pushed back while the lookahead slot was occupied.

    This indicates a bug in the parser, not in the input: every grammar
    rule drains the slot before pushing a token back.
    """

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"lookahead buffer already occupied (pushing back {token!r})")
