"""
C Declaration Translator
========================

This package translates a single C declaration into English, following
the declarator grammar of Kernighan & Ritchie extended with C99
qualifiers, storage classes and parameter array brackets.

Components
----------
- **lexer**: One-line tokenizer with a one-token lookahead slot
- **classifiers**: Reserved word and integer literal recognition
- **types**: Base type resolution and the specifier legality table
- **arrays**: Array suffix resolution ("[static const 10]")
- **parser**: Recursive descent declarator parser
- **validator**: Composition rules for functions, arrays and void
- **ast**: Declarator tree nodes and the tree printer

Usage
-----
>>> from kr_cdecl.decl import parse_declaration
>>> parse_declaration("int (*a)[5];")
'a: pointer to array[5] of int'
"""

from kr_cdecl.decl.errors import (
    CDeclError,
    CDeclSyntaxError,
    CDeclSemanticError,
    InvalidCharacterError,
    UnexpectedTokenError,
    UnexpectedIdentifierError,
    UnbalancedError,
    MissingElementError,
    SpecifierError,
    IncompatibleSpecifiersError,
    QualifierError,
    QualifierConflictError,
    StorageClassError,
    ArraySizeError,
    InvalidDeclarationError,
    LookaheadError,
)
from kr_cdecl.decl.lexer import Lexer, Token, TokenType
from kr_cdecl.decl.types import TypeDescriptor
from kr_cdecl.decl.arrays import ArraySuffix
from kr_cdecl.decl.ast import (
    Declaration,
    DeclaratorNode,
    NameNode,
    PointerNode,
    ArrayNode,
    FunctionNode,
    GroupNode,
    TreePrinter,
)
from kr_cdecl.decl.parser import (
    DeclarationParser,
    ParserState,
    parse_tree,
    parse_declaration,
    explain,
)

__all__ = [
    # Errors
    "CDeclError",
    "CDeclSyntaxError",
    "CDeclSemanticError",
    "InvalidCharacterError",
    "UnexpectedTokenError",
    "UnexpectedIdentifierError",
    "UnbalancedError",
    "MissingElementError",
    "SpecifierError",
    "IncompatibleSpecifiersError",
    "QualifierError",
    "QualifierConflictError",
    "StorageClassError",
    "ArraySizeError",
    "InvalidDeclarationError",
    "LookaheadError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Types
    "TypeDescriptor",
    "ArraySuffix",
    # Tree
    "Declaration",
    "DeclaratorNode",
    "NameNode",
    "PointerNode",
    "ArrayNode",
    "FunctionNode",
    "GroupNode",
    "TreePrinter",
    # Parser
    "DeclarationParser",
    "ParserState",
    "parse_tree",
    "parse_declaration",
    "explain",
]
