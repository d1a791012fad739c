"""
Declaration Lexer (Tokenizer)
=============================

This module implements the tokenizer for single-line C declarations.
Tokens are produced on demand, one per call, because the grammar rules
decide what to do next by looking at exactly one token and, when they
are not interested in it, handing it back through a one-token lookahead
slot.

Token Categories
----------------
| Category    | Lexemes                      | TokenType            |
|-------------|------------------------------|----------------------|
| Punctuation | ( ) [ ] , ; *                | LPAREN ... STAR      |
| Names       | [A-Za-z][A-Za-z0-9]*         | NAME                 |
| Literals    | [0-9][A-Za-z0-9.]*           | NUMBER               |
| End         | end of the line              | EOF                  |

Keywords are ordinary NAME tokens: whether 'int' is a specifier or
'const' a qualifier is decided by kr_cdecl.decl.classifiers. Likewise
the lexer accepts any alphanumeric run after a leading digit; whether
"0x1FuL" is a valid integer literal is checked by the array-size rule.

Only spaces and tabs separate tokens. Any other character that cannot
start a token is a lexical error.

Example Usage
-------------
>>> from kr_cdecl.decl.lexer import Lexer
>>> for token in Lexer("int *x[3];").tokenize():
...     print(token)
Token(NAME, 'int', 1:1)
Token(STAR, '*', 1:5)
Token(NAME, 'x', 1:6)
Token(LBRACKET, '[', 1:7)
Token(NUMBER, '3', 1:8)
Token(RBRACKET, ']', 1:9)
Token(SEMICOLON, ';', 1:10)
Token(EOF, 1:11)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from kr_cdecl.errors import SourceLocation
from kr_cdecl.decl.errors import InvalidCharacterError, LookaheadError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types of the declaration language."""

    EOF = auto()            # End of the input line

    NAME = auto()           # Identifiers and keywords
    NUMBER = auto()         # Numeric literal (not yet validated)

    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;
    STAR = auto()           # *


PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        type: The TokenType classification
        value: The lexeme text ("" for EOF)
        line: Line number of the input (1-indexed)
        column: Column where the lexeme starts (1-indexed)
        filename: Name of the input, for error reporting
    """
    type: TokenType
    value: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.type == TokenType.EOF:
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def at_end(self) -> bool:
        return self.type == TokenType.EOF

    def is_punct(self, char: str) -> bool:
        """Return True if this token is the given punctuation character."""
        return PUNCTUATION.get(char) == self.type

    def is_word(self, word: str) -> bool:
        """Return True if this token is the NAME token 'word'."""
        return self.type == TokenType.NAME and self.value == word


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    On-demand tokenizer with a one-token lookahead slot.

    Usage:
        lexer = Lexer("int *x;")
        token = lexer.next_token()      # NAME 'int'
        lexer.unread(token)             # hand it back
        token = lexer.next_token()      # NAME 'int' again

    Presenting a different line to next_token() restarts the scan at the
    beginning of that line. The lookahead slot holds at most one token;
    unread() on an occupied slot raises LookaheadError.

    Attributes:
        source: The line being tokenized
        filename: Name of the input (for error messages)
        line_number: Line number of the input (for error messages)
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    LITERAL_CHARS = string.ascii_letters + string.digits + "."
    WHITESPACE = " \t"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        self.filename = filename
        self.line_number = line_number
        self.reset(source)

    def reset(self, source: str) -> None:
        """Start scanning a new line from its first character."""
        self.source = source
        self._pos = 0
        self._pushback: Optional[Token] = None

    def tokenize(self) -> Iterator[Token]:
        """
        Generate every remaining token, ending with EOF.

        Raises:
            InvalidCharacterError: If a character cannot start a token
        """
        while True:
            token = self.next_token()
            yield token
            if token.at_end:
                return

    def next_token(self, line: Optional[str] = None) -> Token:
        """
        Return the next token, draining the lookahead slot first.

        Args:
            line: If given and different from the current source, the
                  scan restarts at the beginning of this line.

        Returns:
            The next Token; EOF at (and after) the end of the line.

        Raises:
            InvalidCharacterError: If a character cannot start a token
        """
        if line is not None and line != self.source:
            self.reset(line)

        if self._pushback is not None:
            token, self._pushback = self._pushback, None
            return token

        self._skip_whitespace()
        start = self._pos

        if self._at_end():
            return self._make_token(TokenType.EOF, "", start)

        char = self.source[start]

        if char in PUNCTUATION:
            self._pos += 1
            return self._make_token(PUNCTUATION[char], char, start)

        if char in self.IDENT_START:
            return self._make_token(TokenType.NAME, self._scan(self.IDENT_CHARS), start)

        if char in string.digits:
            return self._make_token(TokenType.NUMBER, self._scan(self.LITERAL_CHARS), start)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, self.line_number, start + 1),
            self.source,
        )

    def unread(self, token: Token) -> None:
        """
        Push a token back; the next call to next_token() returns it.

        Raises:
            LookaheadError: If a token is already waiting in the slot
        """
        if self._pushback is not None:
            raise LookaheadError(token.value)
        self._pushback = token

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        token = self.next_token()
        self.unread(token)
        return token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self.source[self._pos] in self.WHITESPACE:
            self._pos += 1

    def _scan(self, allowed: str) -> str:
        """Consume the longest run of characters from 'allowed'."""
        start = self._pos
        while not self._at_end() and self.source[self._pos] in allowed:
            self._pos += 1
        return self.source[start:self._pos]

    def _make_token(self, token_type: TokenType, value: str, start: int) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=self.line_number,
            column=start + 1,
            filename=self.filename,
        )
