"""
Declarator Recursive Descent Parser
===================================

This module implements the parser suggested at the end of chapter 5 of
Kernighan & Ritchie's "The C Programming Language", extended with C99
declarations (several specifiers, const/volatile/restrict, storage
classes, qualified and 'static' parameter arrays) and strict syntax
checking.

Grammar (Simplified BNF)
------------------------
full_declarator ::= type declarator
declarator_list ::= full_declarator [',' declarator_list]
declarator      ::= ['*'] {'restrict'} [qualifier] declarator
                  | direct_declarator
direct_decl     ::= '(' declarator ')'
                  | direct_decl '()'
                  | direct_decl '[' [array_size] ']'
                  | identifier direct_decl
                  | direct_decl '(' declarator_list ')'

Each nonterminal is one method; the four call each other recursively.
The parser never backtracks: one token of lookahead, provided by the
lexer's pushback slot, decides every branch.

Parentheses
-----------
'(' means three different things, told apart by the next token:

| After '('       | Meaning                       | Needs a name before |
|-----------------|-------------------------------|---------------------|
| ')'             | function, no parameter list   | yes                 |
| type keyword    | function with parameters      | yes                 |
| anything else   | grouping, as in "(*f)()"      | no                  |

Example Usage
-------------
>>> from kr_cdecl.decl.parser import parse_declaration
>>> parse_declaration("char *(*f)(int, char **);")
'f: pointer to function (int, pointer to pointer to char) returning pointer to char'
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import logging

from kr_cdecl.decl.arrays import resolve_array_suffix
from kr_cdecl.decl.ast import (
    ArrayNode,
    Declaration,
    DeclaratorNode,
    FunctionNode,
    GroupNode,
    NameNode,
    PointerNode,
)
from kr_cdecl.decl.classifiers import RESTRICT, is_qualifier, is_reserved
from kr_cdecl.decl.errors import (
    CDeclError,
    CDeclSyntaxError,
    MissingElementError,
    QualifierConflictError,
    QualifierError,
    StorageClassError,
    UnbalancedError,
    UnexpectedIdentifierError,
    UnexpectedTokenError,
)
from kr_cdecl.decl.lexer import Lexer, Token, TokenType
from kr_cdecl.decl.types import resolve_type
from kr_cdecl.decl.validator import validate_declaration

logger = logging.getLogger(__name__)


# =============================================================================
# Parser State
# =============================================================================

class Symbol(Enum):
    """Kind of the last symbol that shapes how ')' is interpreted."""
    NOTHING = auto()
    NAME = auto()       # an identifier was just read
    TYPE = auto()       # a (parameter) type was just read
    PARENS = auto()     # a '(' that is not '()' was just read


@dataclass
class ParserState:
    """
    Mutable scratch state of one parse.

    Attributes:
        name_seen: An identifier has been read at the current nesting level
        storage_class: Storage class waiting for the next identifier
        nesting: Number of parameter lists currently open
        last: Kind of the last significant symbol
    """
    name_seen: bool = False
    storage_class: Optional[str] = None
    nesting: int = 0
    last: Symbol = Symbol.NOTHING


# =============================================================================
# Parser
# =============================================================================

class DeclarationParser:
    """
    Recursive descent parser for a single C declaration.

    A parser instance owns its lexer and state, so it is good for exactly
    one input line. Any error raises a CDeclError that unwinds the whole
    recursion; nothing is returned for a failed parse.

    Usage:
        parser = DeclarationParser("int *x[3];")
        declaration = parser.parse()
        print(declaration.describe())    # x: array[3] of pointer to int

    Attributes:
        source: The declaration text
        lexer: Token source with one-token pushback
        state: Per-parse scratch state
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        self.source = source
        self.lexer = Lexer(source, filename, line_number)
        self.state = ParserState()

    def parse(self) -> Declaration:
        """
        Parse the whole input as one declaration.

        The declaration may be followed by one ';' and nothing else.

        Returns:
            The validated Declaration tree

        Raises:
            CDeclError: On the first lexical, syntax or semantic error
        """
        logger.debug(f"Parsing declaration: {self.source!r}")
        try:
            declaration = self._full_declarator()
            self._expect_end()
        except CDeclError as e:
            if e.source_line is None:
                e.source_line = self.source
            logger.debug(f"Parse failed: {e.message}")
            raise
        return declaration

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def _full_declarator(self) -> Declaration:
        """
        full_declarator ::= type declarator

        Used for the declaration itself and for every function parameter.
        The completed declaration is validated before it is returned.
        """
        start = self.lexer.peek()
        base_type = resolve_type(self.lexer, self.state)
        self.state.last = Symbol.TYPE

        if base_type is None:
            raise MissingElementError("expected type", location=self.lexer.peek().location)

        token = self.lexer.peek()

        # Empty parameter slot: "f(int,)" or "f(int,,int)"
        untyped = base_type.implicit and base_type.qualifier is None
        if untyped and (token.is_punct(",") or token.is_punct(")")):
            raise MissingElementError("expected type", location=token.location)

        if token.at_end and self.state.nesting:
            raise CDeclSyntaxError("unexpected end of list", location=token.location)

        if token.at_end or token.is_punct(";"):
            raise MissingElementError(
                "missing object",
                location=token.location,
                hint="declare a name, e.g. 'int x;'",
            )

        declaration = Declaration(base_type, self._declarator(), start.location)
        validate_declaration(declaration)
        return declaration

    def _declarator_list(self, parameters: Optional[list[Declaration]] = None) -> list[Declaration]:
        """
        declarator_list ::= full_declarator [',' declarator_list]

        Parses a parameter list up to and including the closing ')'. Every
        parameter may have a name of its own, so 'name_seen' is cleared on
        entry and the caller's value is restored on exit.
        """
        if parameters is None:
            parameters = []

        saved_name_seen = self.state.name_seen
        self.state.name_seen = False

        token = self.lexer.next_token()
        if token.at_end:
            raise CDeclSyntaxError("unexpected end of list", location=token.location)

        if token.is_punct(")"):
            if self.state.storage_class is not None:
                raise StorageClassError(
                    location=token.location,
                    hint=f"'{self.state.storage_class}' needs a parameter name",
                )
            self.state.name_seen = saved_name_seen
            return parameters

        if not token.is_punct(","):
            self.lexer.unread(token)

        parameters.append(self._full_declarator())
        self._declarator_list(parameters)

        self.state.name_seen = saved_name_seen
        return parameters

    def _declarator(self, prev_qualifier: Optional[str] = None) -> Optional[DeclaratorNode]:
        """
        declarator ::= ['*'] {'restrict'} [qualifier] declarator | direct_declarator

        Each '*' becomes a PointerNode wrapping the rest of the declarator.
        A qualifier level without '*' can only repeat the qualifier of the
        pointer before it ("* const const"), so it adds no node.

        Args:
            prev_qualifier: Qualifier already applied at this pointer level
        """
        star = self.lexer.next_token()
        pointer = star.is_punct("*")
        if pointer:
            prev_qualifier = None
        else:
            self.lexer.unread(star)

        restrict = False
        token = self.lexer.next_token()
        while token.is_word(RESTRICT):
            if not pointer:
                raise QualifierError(
                    "restrict qualifier applies to pointers only",
                    location=token.location,
                )
            restrict = True
            token = self.lexer.next_token()

        qualifier = None
        if token.type == TokenType.NAME and is_qualifier(token.value):
            if prev_qualifier is not None and prev_qualifier != token.value:
                raise QualifierConflictError(
                    token.value, prev_qualifier, location=token.location
                )
            qualifier = token.value
        else:
            self.lexer.unread(token)

        if not pointer and qualifier is None:
            return self._direct_declarator()

        inner = self._declarator(qualifier)
        if not pointer:
            return inner
        return PointerNode(star.location, inner, qualifier, restrict)

    def _direct_declarator(self, current: Optional[DeclaratorNode] = None) -> Optional[DeclaratorNode]:
        """
        direct_declarator: a name, a group, and any number of suffixes.

        Args:
            current: The direct declarator read so far; suffixes wrap it

        Returns:
            The direct declarator, or None if it is empty (abstract)
        """
        token = self.lexer.next_token()

        if token.at_end:
            return current

        if token.is_punct("*") or token.is_word(RESTRICT):
            raise UnexpectedTokenError(token.value, location=token.location)

        if token.is_punct(")"):
            if self.state.last not in (Symbol.NAME, Symbol.TYPE):
                raise MissingElementError(
                    "expected identifier or type before ) token",
                    location=token.location,
                )
            self.lexer.unread(token)
            return current

        if token.is_punct("]"):
            raise UnexpectedTokenError(token.value, location=token.location)

        if token.is_punct(";"):
            if self.state.nesting:
                raise UnexpectedTokenError(
                    token.value, expected="',' or ')'", location=token.location
                )
            self.lexer.unread(token)
            return current

        if token.type == TokenType.NAME and is_reserved(token.value):
            raise UnexpectedTokenError(token.value, location=token.location)

        if token.type == TokenType.NAME:
            return self._name(token, current)

        if token.type == TokenType.NUMBER:
            raise UnexpectedTokenError(token.value, location=token.location)

        if token.is_punct("("):
            return self._parenthesis(token, current)

        if token.is_punct("["):
            if not self.state.name_seen and not self.state.nesting:
                raise MissingElementError(
                    "expected identifier before [ token",
                    location=token.location,
                )
            suffix = resolve_array_suffix(self.lexer, self.state)
            return self._direct_declarator(ArrayNode(token.location, current, suffix))

        self.lexer.unread(token)
        return current

    # =========================================================================
    # Direct Declarator Helpers
    # =========================================================================

    def _name(self, token: Token, current: Optional[DeclaratorNode]) -> Optional[DeclaratorNode]:
        """Record the declared identifier and continue with its suffixes."""
        name_taken = self.state.name_seen and self.state.last != Symbol.TYPE
        if current is not None or name_taken:
            raise UnexpectedIdentifierError(token.value, location=token.location)

        self.state.name_seen = True
        node = NameNode(token.location, token.value, self.state.storage_class)
        self.state.storage_class = None
        self.state.last = Symbol.NAME
        return self._direct_declarator(node)

    def _parenthesis(self, open_token: Token, current: Optional[DeclaratorNode]) -> Optional[DeclaratorNode]:
        """
        Handle '(' inside a direct declarator.

        Decides between an empty function declarator, a parameter list
        and a grouping parenthesis by looking at the next token.
        """
        token = self.lexer.next_token()
        if token.at_end:
            raise UnbalancedError("parentheses", location=open_token.location)

        if token.is_punct(")"):
            if not self.state.name_seen:
                raise MissingElementError("expected identifier", location=open_token.location)
            return self._direct_declarator(FunctionNode(open_token.location, current, None))

        self.state.last = Symbol.PARENS

        if token.type == TokenType.NAME and is_reserved(token.value):
            if not self.state.name_seen:
                raise MissingElementError(
                    "expected identifier before ( token",
                    location=open_token.location,
                )
            self.lexer.unread(token)

            self.state.nesting += 1
            parameters = self._declarator_list()
            self.state.nesting -= 1
            logger.debug(f"Parameter list with {len(parameters)} entries at nesting {self.state.nesting}")

            self._reject_identifier()
            node = FunctionNode(open_token.location, current, parameters)
            return self._direct_declarator(node)

        if (token.is_punct("(") and self.state.name_seen) or token.is_punct("["):
            raise UnexpectedTokenError(token.value, location=token.location)

        # After a name or a suffix, '(' can only open a parameter list
        if current is not None:
            if token.type == TokenType.NAME:
                raise UnexpectedIdentifierError(token.value, location=token.location)
            raise UnexpectedTokenError(
                token.value, expected="a parameter type", location=token.location
            )

        self.lexer.unread(token)
        inner = self._declarator()

        closing = self.lexer.next_token()
        if not closing.is_punct(")"):
            raise UnbalancedError("parentheses", location=closing.location)

        self._reject_identifier()
        return self._direct_declarator(GroupNode(open_token.location, inner))

    def _reject_identifier(self) -> None:
        """A closing ')' may not be followed directly by a name."""
        token = self.lexer.next_token()
        if token.type == TokenType.NAME:
            raise UnexpectedIdentifierError(token.value, location=token.location)
        self.lexer.unread(token)

    def _expect_end(self) -> None:
        """Only an optional ';' may follow the declaration."""
        token = self.lexer.next_token()
        if token.is_punct(";"):
            token = self.lexer.next_token()
        if not token.at_end:
            raise UnexpectedTokenError(
                token.value,
                expected="end of declaration",
                location=token.location,
            )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tree(source: str, filename: str = "<input>", line_number: int = 1) -> Declaration:
    """
    Parse a declaration and return its validated tree.

    Raises:
        CDeclError: If the declaration is invalid
    """
    return DeclarationParser(source, filename, line_number).parse()


def parse_declaration(source: str, filename: str = "<input>", line_number: int = 1) -> str:
    """
    Translate a C declaration into English.

    Args:
        source: One declaration, e.g. "int *x[3];"
        filename: Input name for error locations
        line_number: Input line for error locations

    Returns:
        The description, e.g. "x: array[3] of pointer to int"

    Raises:
        CDeclError: If the declaration is invalid
    """
    return parse_tree(source, filename, line_number).describe()


def explain(source: str) -> str:
    """
    Translate a declaration, returning the error line instead of raising.

        >>> explain("int x;")
        'x: int'
        >>> explain("int f(int, void);")
        'syntax error: void must be the only parameter'
    """
    try:
        return parse_declaration(source)
    except CDeclError as e:
        return e.summary
