"""
Declaration Validator
=====================

Composition rules for derived types, checked on the declarator tree
rather than on the rendered text.

The derivation chain of a declaration lists its pointer, array and
function nodes in reading order (see Declaration.derivations()). Two
neighbours in the chain form a "derives from" pair: in
"function() returning array[3] of int" the function node is directly
followed by the array node, so the function returns an array. A pointer
in between breaks the pair, which is why "function returning pointer to
array" is legal.

Rules (checked in this order)
-----------------------------
1. function directly followed by array      -> cannot return array
2. function directly followed by function   -> cannot return function
3. array directly followed by function      -> cannot declare array of functions
4. plain void parameter next to others      -> void must be the only parameter
5. array whose element is the base type void -> cannot declare array of void
"""

from typing import Callable, Optional

from kr_cdecl.decl.ast import ArrayNode, Declaration, DerivedNode, FunctionNode
from kr_cdecl.decl.errors import InvalidDeclarationError


def _pairs(chain: list[DerivedNode]) -> list[tuple[DerivedNode, DerivedNode]]:
    return list(zip(chain, chain[1:]))


def _returns_array(outer: DerivedNode, inner: DerivedNode) -> bool:
    return isinstance(outer, FunctionNode) and isinstance(inner, ArrayNode)


def _returns_function(outer: DerivedNode, inner: DerivedNode) -> bool:
    return isinstance(outer, FunctionNode) and isinstance(inner, FunctionNode)


def _array_of_functions(outer: DerivedNode, inner: DerivedNode) -> bool:
    return isinstance(outer, ArrayNode) and isinstance(inner, FunctionNode)


PAIR_RULES: list[tuple[Callable[[DerivedNode, DerivedNode], bool], str]] = [
    (_returns_array, "cannot return array"),
    (_returns_function, "cannot return function"),
    (_array_of_functions, "cannot declare array of functions"),
]


def is_plain_void(declaration: Declaration) -> bool:
    """True if the declaration is (possibly qualified) void with no derivations."""
    return declaration.type.is_void and not declaration.derivations()


def validate_declaration(declaration: Declaration) -> None:
    """
    Check the composition rules on a declaration.

    Parameter declarations are validated by the parser as each one is
    completed, so only the parameter-list rule looks into them here.

    Raises:
        InvalidDeclarationError: On the first rule that is violated
    """
    chain = declaration.derivations()

    for rule, message in PAIR_RULES:
        for outer, inner in _pairs(chain):
            if rule(outer, inner):
                raise InvalidDeclarationError(message, location=inner.location)

    for node in chain:
        if isinstance(node, FunctionNode) and node.parameters and len(node.parameters) > 1:
            void_param = _first_void_parameter(node.parameters)
            if void_param is not None:
                raise InvalidDeclarationError(
                    "void must be the only parameter",
                    location=void_param.location,
                    hint="use '(void)' for a function without parameters",
                )

    if chain and isinstance(chain[-1], ArrayNode) and declaration.type.is_void:
        raise InvalidDeclarationError(
            "cannot declare array of void",
            location=chain[-1].location,
        )


def _first_void_parameter(parameters: list[Declaration]) -> Optional[Declaration]:
    for param in parameters:
        if is_plain_void(param):
            return param
    return None
