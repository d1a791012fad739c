"""
Declarator Tree Definitions
===========================

This module defines the nodes built by the declarator parser. A
declaration is a base type plus a declarator; the declarator is a chain
of nodes whose innermost element is the declared name (or nothing, for
abstract declarators such as the parameter in "int f(char *)").

Node Hierarchy
--------------
DeclaratorNode (base)
├── NameNode - the declared identifier (and its storage class)
├── PointerNode - '*' with optional qualifier and restrict
├── ArrayNode - '[...]' suffix
├── FunctionNode - '()' or '(parameters)' suffix
└── GroupNode - '( declarator )' used for grouping
Declaration - base type + declarator (also used for parameters)

Reading Order
-------------
The tree follows the syntax: for "int *x[3]" the pointer is the root,
its inner node is the array and the array's inner node is the name. The
English description reads from the name outward, so the chain is
rendered innermost first:

    PointerNode(inner=ArrayNode(inner=NameNode("x")))
    -> "x: " + "array[3] of " + "pointer to " + "int"

Design Notes
------------
- All nodes are dataclasses with an optional source location
- Every node has at most one 'inner' child, so a declarator is a chain;
  only FunctionNode branches, into its parameter declarations
- Text is produced only from a validated tree (see validator.py)
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from kr_cdecl.errors import SourceLocation
from kr_cdecl.decl.arrays import ArraySuffix
from kr_cdecl.decl.types import TypeDescriptor


# =============================================================================
# Declarator Nodes
# =============================================================================

@dataclass
class DeclaratorNode:
    """
    Base class for all declarator nodes.

    Attributes:
        location: Where the node starts in the input (not compared)
    """
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        """Description fragment contributed by this node."""
        return ""


@dataclass
class NameNode(DeclaratorNode):
    """
    The declared identifier.

    Attributes:
        identifier: The name
        storage_class: Storage class written before the type, if any
    """
    identifier: str = ""
    storage_class: Optional[str] = None

    @property
    def text(self) -> str:
        storage = f"{self.storage_class} " if self.storage_class else ""
        return f"{self.identifier}: {storage}"


@dataclass
class PointerNode(DeclaratorNode):
    """
    One level of indirection.

    Attributes:
        inner: What the pointer declarator wraps
        qualifier: const/volatile applied to the pointer itself
        restrict: True for 'restrict' pointers
    """
    inner: Optional[DeclaratorNode] = None
    qualifier: Optional[str] = None
    restrict: bool = False

    @property
    def text(self) -> str:
        words = []
        if self.qualifier:
            words.append(self.qualifier)
        if self.restrict:
            words.append("restrict")
        words.append("pointer to ")
        return " ".join(words)


@dataclass
class ArrayNode(DeclaratorNode):
    """
    An array suffix.

    Attributes:
        inner: The declarator the suffix applies to
        suffix: Bracket contents (length, qualifier, static)
    """
    inner: Optional[DeclaratorNode] = None
    suffix: ArraySuffix = field(default_factory=ArraySuffix)

    @property
    def text(self) -> str:
        return self.suffix.text


@dataclass
class FunctionNode(DeclaratorNode):
    """
    A function suffix.

    Attributes:
        inner: The declarator the suffix applies to
        parameters: Parameter declarations, or None for an empty '()'
    """
    inner: Optional[DeclaratorNode] = None
    parameters: Optional[list["Declaration"]] = None

    @property
    def text(self) -> str:
        if self.parameters is None:
            return "function() returning "
        params = ", ".join(param.describe() for param in self.parameters)
        return f"function ({params}) returning "


@dataclass
class GroupNode(DeclaratorNode):
    """Parentheses used for grouping, as in "(*f)"."""
    inner: Optional[DeclaratorNode] = None


DerivedNode = Union[PointerNode, ArrayNode, FunctionNode]


# =============================================================================
# Declaration
# =============================================================================

@dataclass
class Declaration:
    """
    A complete declaration: base type plus declarator.

    Function parameters are Declarations too, so the tree nests through
    FunctionNode.parameters.

    Attributes:
        type: The resolved base type
        declarator: Root of the declarator chain (None if abstract and empty)
        location: Where the declaration starts
    """
    type: TypeDescriptor
    declarator: Optional[DeclaratorNode] = None
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> Optional[NameNode]:
        """The declared name, or None for abstract declarators."""
        node = self.declarator
        while node is not None and not isinstance(node, NameNode):
            node = getattr(node, "inner", None)
        return node

    def derivations(self) -> list[DerivedNode]:
        """
        Pointer, array and function nodes in reading order.

        The first element derives directly from the name; the last one
        derives directly from the base type.

            int *x[3]  ->  [ArrayNode, PointerNode]
        """
        chain: list[DerivedNode] = []
        node = self.declarator
        while node is not None:
            if isinstance(node, (PointerNode, ArrayNode, FunctionNode)):
                chain.append(node)
            node = getattr(node, "inner", None)
        chain.reverse()
        return chain

    def describe(self) -> str:
        """Render the English description, e.g. 'x: array[3] of pointer to int'."""
        parts = []
        name = self.name
        if name is not None:
            parts.append(name.text)
        parts.extend(node.text for node in self.derivations())
        parts.append(self.type.text)
        return "".join(parts)


# =============================================================================
# Visitor Pattern
# =============================================================================

class DeclarationVisitor:
    """
    Base class for tree visitors.

    Subclasses override visit_* methods for the node types they care
    about; unhandled nodes fall through to generic_visit().

        class NameCollector(DeclarationVisitor):
            def __init__(self):
                self.names = []

            def visit_NameNode(self, node):
                self.names.append(node.identifier)
    """

    def visit(self, node: Any) -> Any:
        """Dispatch to visit_<ClassName>; None is ignored."""
        if node is None:
            return None
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Any) -> None:
        """Visit every child node and parameter."""
        for value in node.__dict__.values():
            if isinstance(value, (DeclaratorNode, Declaration)):
                self.visit(value)
            elif isinstance(value, list):
                for item in value:
                    self.visit(item)


class TreePrinter(DeclarationVisitor):
    """
    Pretty printer for debugging and for 'cdecl --tree'.

        >>> print(TreePrinter().print(parse_tree("int *x[3];")))
        Declaration: int
          Pointer
            Array[3]
              Name: x
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Union[Declaration, DeclaratorNode]) -> str:
        """Print the tree and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit_nested(self, node: Any) -> None:
        self.indent_level += 1
        self.visit(node)
        self.indent_level -= 1

    def visit_Declaration(self, node: Declaration):
        self._emit(f"Declaration: {node.type.text}")
        self._visit_nested(node.declarator)

    def visit_NameNode(self, node: NameNode):
        storage = f" ({node.storage_class})" if node.storage_class else ""
        self._emit(f"Name: {node.identifier}{storage}")

    def visit_PointerNode(self, node: PointerNode):
        words = [w for w in (node.qualifier, "restrict" if node.restrict else None) if w]
        self._emit(" ".join(["Pointer"] + words))
        self._visit_nested(node.inner)

    def visit_ArrayNode(self, node: ArrayNode):
        suffix = node.suffix
        size = f"at least {suffix.length}" if suffix.is_static else (suffix.length or "")
        qualifier = f" {suffix.qualifier}" if suffix.qualifier else ""
        self._emit(f"Array[{size}]{qualifier}")
        self._visit_nested(node.inner)

    def visit_FunctionNode(self, node: FunctionNode):
        if node.parameters is None:
            self._emit("Function()")
        else:
            self._emit(f"Function ({len(node.parameters)} parameters)")
            self.indent_level += 1
            for param in node.parameters:
                self._emit("Parameter")
                self._visit_nested(param)
            self.indent_level -= 1
        self._visit_nested(node.inner)

    def visit_GroupNode(self, node: GroupNode):
        self._emit("Group")
        self._visit_nested(node.inner)
