"""
Lexical Classifiers
===================

Membership tests that give NAME and NUMBER tokens their meaning.

Reserved Words
--------------
| Role          | Words                                                   |
|---------------|---------------------------------------------------------|
| Specifier     | void char short int long float double signed unsigned   |
| Qualifier     | const volatile                                          |
| Storage class | auto register static extern typedef                     |

'restrict' is deliberately not a qualifier here: it only applies to
pointers (and to parameter array brackets), so the grammar rules look
for it explicitly.

Integer Literals
----------------
| Format      | Form                 | Example |
|-------------|----------------------|---------|
| Decimal     | 0 or [1-9][0-9]*     | 42      |
| Octal       | 0[0-7]+              | 017     |
| Hexadecimal | 0[xX][0-9a-fA-F]+    | 0x1F    |
| Binary      | 0[bB][01]+           | 0b101   |

Each form takes an optional suffix of at most two 'l' and at most one
'u' in any order and any case: 10u, 10UL, 10lu, 10llU, 10lUl.
"""

import re


SPECIFIERS = (
    "void",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
    "signed",
    "unsigned",
)

QUALIFIERS = (
    "const",
    "volatile",
)

STORAGE_CLASSES = (
    "auto",
    "register",
    "static",
    "extern",
    "typedef",
)

RESTRICT = "restrict"

_INT_LITERAL = re.compile(
    r"""
    (?:
        0[xX][0-9a-fA-F]+       # hexadecimal
      | 0[bB][01]+              # binary
      | 0[0-7]*                 # octal (and plain 0)
      | [1-9][0-9]*             # decimal
    )
    (?P<suffix>[lLuU]*)
    """,
    re.VERBOSE,
)


def is_specifier(word: str) -> bool:
    """Return True if 'word' is a type specifier."""
    return word in SPECIFIERS


def is_qualifier(word: str) -> bool:
    """Return True if 'word' is const or volatile."""
    return word in QUALIFIERS


def is_storage_class(word: str) -> bool:
    """Return True if 'word' is a storage class."""
    return word in STORAGE_CLASSES


def is_reserved(word: str) -> bool:
    """Return True if 'word' can be part of a type (specifier, qualifier or storage class)."""
    return is_specifier(word) or is_qualifier(word) or is_storage_class(word)


def is_int_literal(text: str) -> bool:
    """
    Determine whether 'text' is a valid C integer literal.

    Examples:
        >>> is_int_literal("0x1FuL")
        True
        >>> is_int_literal("08")
        False
        >>> is_int_literal("1lll")
        False
    """
    match = _INT_LITERAL.fullmatch(text)
    if match is None:
        return False

    suffix = match.group("suffix").lower()
    return suffix.count("l") <= 2 and suffix.count("u") <= 1
