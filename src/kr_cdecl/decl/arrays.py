"""
Array-Suffix Resolver
=====================

Parses what follows an opening '[' up to and including the matching
']'. Besides an optional length, C99 allows parameter arrays to carry
qualifiers and a 'static' minimum-size marker inside the brackets:

    void f(int a[]);               a: array[] of int
    void f(int a[10]);             a: array[10] of int
    void f(int a[const 10]);       a: const array[10] of int
    void f(int a[static 10]);      a: array[at least 10] of int
    void f(int a[restrict]);       a: restrict array[] of int

Qualifiers and 'static' may come in any order before the length, may
only appear inside a parameter list, and 'static' needs a length.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from kr_cdecl.decl.classifiers import RESTRICT, is_int_literal, is_qualifier
from kr_cdecl.decl.errors import (
    ArraySizeError,
    QualifierConflictError,
    QualifierError,
    UnbalancedError,
)
from kr_cdecl.decl.lexer import Lexer, Token, TokenType

if TYPE_CHECKING:
    from kr_cdecl.decl.parser import ParserState


@dataclass(frozen=True)
class ArraySuffix:
    """
    Contents of one pair of square brackets.

    Attributes:
        length: The integer literal as written, or None for '[]'
        qualifier: const, volatile, restrict or None
        is_static: True for '[static N]'
    """
    length: Optional[str] = None
    qualifier: Optional[str] = None
    is_static: bool = False

    @property
    def text(self) -> str:
        """Description fragment: '[qualifier ]array[[at least ]length] of '."""
        prefix = f"{self.qualifier} " if self.qualifier else ""
        at_least = "at least " if self.is_static else ""
        return f"{prefix}array[{at_least}{self.length or ''}] of "


def resolve_array_suffix(
    lexer: Lexer,
    state: "ParserState",
    qualifier: Optional[str] = None,
    is_static: bool = False,
) -> ArraySuffix:
    """
    Parse the bracket contents after '['.

    Calls itself once per qualifier or 'static' marker, carrying what has
    been seen so far, until it reaches the length or the closing bracket.

    Args:
        lexer: Token source, positioned just after '['
        state: Per-parse state (nesting decides whether qualifiers are legal)
        qualifier: Qualifier seen so far in these brackets
        is_static: Whether 'static' has been seen in these brackets

    Raises:
        UnbalancedError: Input ends, or the length is not followed by ']'
        QualifierError: Qualifier or static outside a parameter list
        QualifierConflictError: Two different qualifiers
        ArraySizeError: Invalid length, or static without length
    """
    token = lexer.next_token()
    if token.at_end:
        raise UnbalancedError("brackets", location=token.location)

    word = token.value if token.type == TokenType.NAME else None

    if word is not None and (is_qualifier(word) or word == RESTRICT):
        _require_parameter_context(state, token)
        if qualifier is not None and qualifier != word:
            raise QualifierConflictError(word, qualifier, location=token.location)
        return resolve_array_suffix(lexer, state, word, is_static)

    if word == "static":
        _require_parameter_context(state, token)
        return resolve_array_suffix(lexer, state, qualifier, True)

    length = None
    if token.type == TokenType.NUMBER and is_int_literal(token.value):
        length = token.value
        closing = lexer.next_token()
        if not closing.is_punct("]"):
            raise UnbalancedError("brackets", location=closing.location)
    elif not token.is_punct("]"):
        raise ArraySizeError(
            f"invalid value {token.value}, array size must be positive int",
            location=token.location,
        )

    if is_static and length is None:
        raise ArraySizeError(
            "expected array length after static",
            location=token.location,
            hint="write the minimum number of elements after 'static'",
        )

    return ArraySuffix(length, qualifier, is_static)


def _require_parameter_context(state: "ParserState", token: Token) -> None:
    """Qualifiers and 'static' in brackets are only legal in parameter lists."""
    if state.nesting == 0:
        raise QualifierError(
            "static or type qualifiers in non-parameter array declarator",
            location=token.location,
        )
