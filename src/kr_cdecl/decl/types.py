"""
Type Resolver
=============

This module reduces a run of specifier, qualifier and storage-class
keywords ("const unsigned long int", "static char") to a canonical
TypeDescriptor.

Rules
-----
- Up to four specifiers, kept in the order they were written.
- At most one qualifier. Repeating the same one is allowed and ignored
  (C99 6.7.3); a different second qualifier is an error.
- At most one pending storage class. It is not part of the type: the
  parser attaches it to the next declared name ("x: static int").
- No specifier at all means 'int' ("const x" declares a const int).
- Every pair of specifiers must be legal according to the table below,
  in either order.
- 'long' and 'double' together may appear at most twice, which allows
  "long long" and "long double" but not "long long double".

Specifier Legality Table
------------------------
           void  char  short  int  long  float  double  signed  unsigned
void       n     n     n      n    n     n      n       n       n
char       n     n     n      n    n     n      n       YES     YES
short      n     n     n      YES  n     n      n       YES     YES
int        n     n     YES    n    YES   n      n       YES     YES
long       n     n     n      YES  YES   n      YES     YES     YES
float      n     n     n      n    n     n      n       YES     YES
double     n     n     n      n    YES   n      n       YES     YES
signed     n     YES   YES    YES  YES   YES    YES     n       n
unsigned   n     YES   YES    YES  YES   YES    YES     n       n
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Optional, TYPE_CHECKING
import logging

from kr_cdecl.decl.classifiers import (
    is_qualifier,
    is_reserved,
    is_specifier,
    is_storage_class,
)
from kr_cdecl.decl.errors import (
    IncompatibleSpecifiersError,
    QualifierConflictError,
    SpecifierError,
    StorageClassError,
)
from kr_cdecl.decl.lexer import Lexer, Token, TokenType

if TYPE_CHECKING:
    from kr_cdecl.decl.parser import ParserState

logger = logging.getLogger(__name__)


MAX_SPECIFIERS = 4
MAX_LONG = 2
DEFAULT_SPECIFIER = "int"

# Unordered pairs of specifiers that may appear in the same type
LEGAL_PAIRS: frozenset[frozenset[str]] = frozenset(
    frozenset(pair) for pair in (
        ("char", "signed"),
        ("char", "unsigned"),
        ("short", "int"),
        ("short", "signed"),
        ("short", "unsigned"),
        ("int", "long"),
        ("int", "signed"),
        ("int", "unsigned"),
        ("long", "long"),
        ("long", "double"),
        ("long", "signed"),
        ("long", "unsigned"),
        ("float", "signed"),
        ("float", "unsigned"),
        ("double", "signed"),
        ("double", "unsigned"),
    )
)


# =============================================================================
# Type Representation
# =============================================================================

@dataclass(frozen=True)
class TypeDescriptor:
    """
    The base type of a declaration or parameter.

    Attributes:
        specifiers: One to four specifiers in the order written
        qualifier: 'const', 'volatile' or None
        implicit: True when no specifier was written and 'int' was assumed

    Examples:
        - int                 : TypeDescriptor(("int",))
        - const unsigned char : TypeDescriptor(("unsigned", "char"), "const")
    """
    specifiers: tuple[str, ...]
    qualifier: Optional[str] = None
    implicit: bool = False

    @property
    def text(self) -> str:
        """Canonical text: '[qualifier ]specifier1[ specifier2 ...]'."""
        words = list(self.specifiers)
        if self.qualifier:
            words.insert(0, self.qualifier)
        return " ".join(words)

    @property
    def is_void(self) -> bool:
        """True for plain (possibly qualified) void."""
        return self.specifiers == ("void",)

    def __str__(self) -> str:
        return self.text


def is_legal_pair(first: str, second: str) -> bool:
    """Return True if the two specifiers may appear in the same type."""
    return frozenset((first, second)) in LEGAL_PAIRS


def check_specifiers(specifiers: list[str], token: Optional[Token] = None) -> None:
    """
    Validate a specifier list against the legality table and the long count.

    Args:
        specifiers: Specifiers in the order written
        token: Token to report the error at

    Raises:
        IncompatibleSpecifiersError: If a pair is illegal
        SpecifierError: If long/double appear more than twice
    """
    location = token.location if token else None

    for earlier, later in combinations(specifiers, 2):
        if not is_legal_pair(earlier, later):
            raise IncompatibleSpecifiersError(later, earlier, location=location)

    long_count = sum(1 for spec in specifiers if spec in ("long", "double"))
    if long_count > MAX_LONG:
        raise SpecifierError("too many long specifiers", location=location)


# =============================================================================
# Resolver
# =============================================================================

def resolve_type(lexer: Lexer, state: "ParserState") -> Optional[TypeDescriptor]:
    """
    Consume specifiers, qualifiers and storage classes from the lexer.

    The first token that is none of these is pushed back. A storage class
    is stored in 'state' as pending rather than in the descriptor.

    Args:
        lexer: Token source, positioned at the start of a type
        state: Per-parse state holding the pending storage class

    Returns:
        The resolved TypeDescriptor, or None if the input ended before
        any type word. A descriptor with 'implicit' set and no qualifier
        means no specifier or qualifier was written.

    Raises:
        SpecifierError: Too many or incompatible specifiers
        QualifierConflictError: Two different qualifiers
        StorageClassError: A storage class is already pending
    """
    specifiers: list[str] = []
    qualifier: Optional[str] = None
    first: Optional[Token] = None

    token = lexer.next_token()
    while token.type == TokenType.NAME and is_reserved(token.value):
        first = first or token
        word = token.value

        if is_specifier(word):
            if len(specifiers) == MAX_SPECIFIERS:
                raise SpecifierError("too many specifiers", location=token.location)
            specifiers.append(word)

        elif is_qualifier(word):
            if qualifier is None:
                qualifier = word
            elif qualifier != word:
                raise QualifierConflictError(word, qualifier, location=token.location)

        elif is_storage_class(word):
            if state.storage_class is not None:
                raise StorageClassError(
                    location=token.location,
                    hint=f"'{state.storage_class}' is already in effect",
                )
            state.storage_class = word

        token = lexer.next_token()

    # Nothing at all before the end of the input
    if token.at_end and first is None:
        return None

    lexer.unread(token)

    implicit = not specifiers
    if implicit:
        specifiers.append(DEFAULT_SPECIFIER)

    check_specifiers(specifiers, first)

    descriptor = TypeDescriptor(tuple(specifiers), qualifier, implicit)
    logger.debug(f"Resolved type '{descriptor.text}' (storage: {state.storage_class})")
    return descriptor
